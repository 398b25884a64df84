"""
Date parsing for BDAY values.
"""

from datetime import date, datetime
from typing import Union

from vcardimport.errors import DateParseError

# Year-less vCard 4 forms come back with strptime's default year (1900).
# Reduced-precision forms (year-month, year) start on the first day.
_DATE_FORMATS = (
    '%Y-%m-%d',
    '%Y%m%d',
    '--%m%d',
    '--%m-%d',
    '%Y-%m',
    '%Y',
)

_DATETIME_FORMATS = (
    '%Y-%m-%dT%H:%M:%S%z',
    '%Y-%m-%dT%H:%M:%S.%f%z',
    '%Y%m%dT%H%M%S%z',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%dT%H:%M:%S.%f',
    '%Y%m%dT%H%M%S',
    '%Y-%m-%dT%H:%M',
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d %H:%M',
)


def _from_isoformat(text: str) -> datetime:
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    return datetime.fromisoformat(text)


def parse_date(value: str) -> Union[date, datetime]:
    """
    Parse a vCard date or date-time value.

    Known vCard layouts are tried first; anything else that
    datetime.fromisoformat accepts (with a trailing Z read as UTC) is
    returned as a datetime.

    :param value: BDAY property value
    :return: date for date-only values, datetime when a time is present
    :raises DateParseError: If the value matches no supported format
    """
    text = value.strip()

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    if text:
        try:
            return _from_isoformat(text)
        except ValueError:
            pass

    raise DateParseError(value)
