"""
Property dispatch: routes decoded property lines into a RecordBuilder.

Recognized properties form a closed enumeration (Property). Each member
maps to one handler; anything else is ignored. Indexed item properties
(itemNN.PART) are matched before the enumeration.

Dependencies:
    - enum: Standard library for the property enumeration
    - re: Standard library for the item pattern
    - os: Standard library for the platform line separator
    - logging: Standard library for logging
"""
# pylint: disable=logging-fstring-interpolation

import logging
import os
import re
from enum import Enum
from typing import Callable, Dict, Optional

from vcardimport.dates import parse_date
from vcardimport.decoder import DecodedValue, as_text
from vcardimport.record import Address, ItemValue, NameParts, RecordBuilder

logger = logging.getLogger("vcardimport")

_ITEM_RE = re.compile(r'^item(\d{1,2})\.([^:]+)$')

ANDROID_NICKNAME = 'vnd.android.cursor.item/nickname'

# Vendor markers wrapping labelled URLs, e.g. "_$!<HomePage>!$_"
_LABEL_MARKERS = ('_$!<', '>!$_')


class Property(str, Enum):
    """Property names the dispatcher understands."""

    FN = 'FN'
    N = 'N'
    BDAY = 'BDAY'
    ADR = 'ADR'
    TEL = 'TEL'
    EMAIL = 'EMAIL'
    URL = 'URL'
    REV = 'REV'
    VERSION = 'VERSION'
    ORG = 'ORG'
    TITLE = 'TITLE'
    PHOTO = 'PHOTO'
    LOGO = 'LOGO'
    NOTE = 'NOTE'
    CATEGORIES = 'CATEGORIES'
    GEO = 'GEO'
    GENDER = 'GENDER'
    NICKNAME = 'NICKNAME'
    X_SKYPE = 'X-SKYPE'
    X_SKYPE_USERNAME = 'X-SKYPE-USERNAME'
    X_ANDROID_CUSTOM = 'X-ANDROID-CUSTOM'

    @classmethod
    def lookup(cls, element: str) -> Optional["Property"]:
        """
        Find the member for an element name, ignoring case.

        :param element: Element name as written in the card
        :return: Matching member, or None for unknown elements
        """
        try:
            return cls(element.upper())
        except ValueError:
            return None


def unescape_note(value: str) -> str:
    """
    Unescape a NOTE value.

    Escaped colons and commas are restored first, then literal "\\n"
    sequences become the platform line separator (RFC 2425 5.8.4).
    """
    value = value.replace('\\:', ':').replace('\\,', ',')
    return value.replace('\\n', os.linesep)


def _item_url(value: str) -> ItemValue:
    segments = value.split(';')
    if len(segments) != 1:
        return tuple(segments)
    url = segments[0]
    for marker in _LABEL_MARKERS:
        url = url.replace(marker, '')
    return url.replace('\\:', ':')


def _dispatch_item(builder: RecordBuilder, index: str, part: str, decoded: DecodedValue) -> None:
    if part != 'URL':
        logger.debug(f"Ignoring item{index}.{part}")
        return
    builder.set_item(index, part, _item_url(as_text(decoded.value)))


def _set_full_name(builder: RecordBuilder, decoded: DecodedValue) -> None:
    builder.full_name = as_text(decoded.value)


def _set_name(builder: RecordBuilder, decoded: DecodedValue) -> None:
    builder.name = NameParts.from_value(as_text(decoded.value))


def _set_birthday(builder: RecordBuilder, decoded: DecodedValue) -> None:
    builder.birthday = parse_date(as_text(decoded.value))


def _add_address(builder: RecordBuilder, decoded: DecodedValue) -> None:
    address = Address.from_value(as_text(decoded.value))
    builder.add_grouped(builder.addresses, decoded.params, address)


def _add_phone(builder: RecordBuilder, decoded: DecodedValue) -> None:
    builder.add_grouped(builder.phones, decoded.params, as_text(decoded.value))


def _add_email(builder: RecordBuilder, decoded: DecodedValue) -> None:
    builder.add_grouped(builder.emails, decoded.params, as_text(decoded.value))


def _add_url(builder: RecordBuilder, decoded: DecodedValue) -> None:
    builder.add_grouped(builder.urls, decoded.params, as_text(decoded.value))


def _scalar(attribute: str) -> Callable[[RecordBuilder, DecodedValue], None]:
    def handler(builder: RecordBuilder, decoded: DecodedValue) -> None:
        setattr(builder, attribute, as_text(decoded.value))
    return handler


def _image(attribute: str) -> Callable[[RecordBuilder, DecodedValue], None]:
    """Store decoded bytes on raw_<attribute>, references on <attribute>; the last line wins."""
    def handler(builder: RecordBuilder, decoded: DecodedValue) -> None:
        if decoded.is_raw:
            value = decoded.value
            if isinstance(value, str):
                value = value.encode('utf-8')
            setattr(builder, f'raw_{attribute}', value)
            setattr(builder, attribute, None)
        else:
            setattr(builder, attribute, as_text(decoded.value))
            setattr(builder, f'raw_{attribute}', None)
    return handler


def _set_note(builder: RecordBuilder, decoded: DecodedValue) -> None:
    builder.note = unescape_note(as_text(decoded.value))


def _set_categories(builder: RecordBuilder, decoded: DecodedValue) -> None:
    builder.categories = [entry.strip() for entry in as_text(decoded.value).split(',')]


def _add_nickname(builder: RecordBuilder, decoded: DecodedValue) -> None:
    builder.nicknames.append(as_text(decoded.value))


def _add_skype(builder: RecordBuilder, decoded: DecodedValue) -> None:
    builder.skype_handles.append(as_text(decoded.value))


def _android_custom(builder: RecordBuilder, decoded: DecodedValue) -> None:
    segments = as_text(decoded.value).split(';')
    if segments[0] != ANDROID_NICKNAME:
        return
    if len(segments) < 2:
        logger.debug("X-ANDROID-CUSTOM nickname without a value, ignoring")
        return
    builder.nicknames.append(segments[1])


_HANDLERS: Dict[Property, Callable[[RecordBuilder, DecodedValue], None]] = {
    Property.FN: _set_full_name,
    Property.N: _set_name,
    Property.BDAY: _set_birthday,
    Property.ADR: _add_address,
    Property.TEL: _add_phone,
    Property.EMAIL: _add_email,
    Property.URL: _add_url,
    Property.REV: _scalar('revision'),
    Property.VERSION: _scalar('version'),
    Property.ORG: _scalar('organization'),
    Property.TITLE: _scalar('title'),
    Property.PHOTO: _image('photo'),
    Property.LOGO: _image('logo'),
    Property.NOTE: _set_note,
    Property.CATEGORIES: _set_categories,
    Property.GEO: _scalar('geo'),
    Property.GENDER: _scalar('gender'),
    Property.NICKNAME: _add_nickname,
    Property.X_SKYPE: _add_skype,
    Property.X_SKYPE_USERNAME: _add_skype,
    Property.X_ANDROID_CUSTOM: _android_custom,
}


def dispatch(builder: RecordBuilder, element: str, decoded: DecodedValue) -> None:
    """
    Apply one decoded property line to the card being built.

    Args:
        builder: Card under construction
        element: Element name in its original case
        decoded: Output of decode_value for the line

    Raises:
        DateParseError: If a BDAY value cannot be parsed
    """
    match = _ITEM_RE.match(element)
    if match:
        _dispatch_item(builder, match.group(1), match.group(2), decoded)
        return

    prop = Property.lookup(element)
    if prop is None:
        if element:
            logger.debug(f"Ignoring unknown property {element}")
        return

    _HANDLERS[prop](builder, decoded)
