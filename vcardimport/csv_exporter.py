"""
CSV and JSON export of parsed records.

This module provides functionality to export records to CSV for viewing in
spreadsheet applications, and to JSON for further processing.

Dependencies:
    - csv: Standard library for CSV file handling
    - json: Standard library for JSON serialization
    - base64: Standard library, encodes raw photo/logo bytes for JSON
    - pathlib: Standard library for path handling
    - logging: Standard library for logging
"""
# pylint: disable=logging-fstring-interpolation

import base64
import csv
import json
import logging
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from vcardimport.record import Address, Record

logger = logging.getLogger("vcardimport")

# Maximum number of phones, emails, and addresses to include in CSV
MAX_PHONES = 5
MAX_EMAILS = 5
MAX_ADDRESSES = 3


def _format_date(date_value: Optional[date]) -> str:
    if not date_value:
        return ''
    return date_value.isoformat()


def _format_address(addr: Address) -> str:
    """
    Format an address as a single string.

    :param addr: Address parts
    :return: Non-empty parts joined with commas
    """
    parts = [addr.street, addr.city, addr.region, addr.zip, addr.country]
    return ', '.join(part for part in parts if part)


def _flatten_groups(groups: Mapping[str, Sequence[Any]]) -> List[Tuple[str, Any]]:
    """
    Flatten a grouped field into (group key, value) pairs in order.

    :param groups: Group key to values mapping
    :return: List of pairs
    """
    return [(key, value) for key, values in groups.items() for value in values]


def _generate_column_names(
    prefix: str,
    max_count: int,
    type_suffix: str = 'Type',
    value_suffix: str = ''
) -> List[str]:
    columns = []
    for i in range(1, max_count + 1):
        columns.append(f'{prefix} {i} {type_suffix}')
        columns.append(f'{prefix} {i} {value_suffix}'.strip())
    return columns


def _get_csv_headers() -> List[str]:
    """
    Get CSV header row.

    :return: List of column header names
    """
    headers = [
        'Full Name',
        'First Name',
        'Last Name',
        'Additional Names',
        'Prefix',
        'Suffix',
        'Nicknames',
    ]
    headers.extend(_generate_column_names('Phone', MAX_PHONES, value_suffix='Number'))
    headers.extend(_generate_column_names('Email', MAX_EMAILS, value_suffix='Address'))
    headers.extend(_generate_column_names('Address', MAX_ADDRESSES))
    headers.extend([
        'URLs',
        'Organization',
        'Title',
        'Note',
        'Birthday',
        'Categories',
        'Skype',
    ])
    return headers


def _extract_group_values(
    groups: Mapping[str, Sequence[Any]],
    max_count: int,
    formatter=str
) -> List[str]:
    """
    Extract (type, value) column pairs for one grouped field.

    :param groups: Group key to values mapping
    :param max_count: Number of column pairs to fill
    :param formatter: Converts a value to its cell text
    :return: Flat list of cells, padded with empty strings
    """
    values = []
    pairs = _flatten_groups(groups)
    for i in range(max_count):
        if i < len(pairs):
            key, value = pairs[i]
            values.extend([key, formatter(value)])
        else:
            values.extend(['', ''])
    if len(pairs) > max_count:
        logger.debug(f"Dropping {len(pairs) - max_count} values beyond the CSV column limit")
    return values


def _record_to_csv_row(record: Record) -> List[str]:
    """
    Convert a record to a CSV row.

    :param record: Parsed record
    :return: List of CSV row values
    """
    name = record.name
    row = [
        record.full_name or '',
        name.firstname if name else '',
        name.lastname if name else '',
        name.additional if name else '',
        name.prefix if name else '',
        name.suffix if name else '',
        '; '.join(record.nicknames),
    ]

    row.extend(_extract_group_values(record.phones, MAX_PHONES))
    row.extend(_extract_group_values(record.emails, MAX_EMAILS))
    row.extend(_extract_group_values(record.addresses, MAX_ADDRESSES, _format_address))

    row.extend([
        '; '.join(url for _, url in _flatten_groups(record.urls)),
        record.organization or '',
        record.title or '',
        record.note or '',
        _format_date(record.birthday),
        ', '.join(record.categories),
        '; '.join(record.skype_handles),
    ])

    return row


def export_records_to_csv(records: Iterable[Record], output_path: Path) -> None:
    """
    Export records to a CSV file.

    :param records: Parsed records
    :param output_path: Path where CSV file should be written
    :raises OSError: If file cannot be written
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    rows = [_record_to_csv_row(record) for record in records]

    try:
        with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
            writer = csv.writer(csvfile, quoting=csv.QUOTE_MINIMAL)
            writer.writerow(_get_csv_headers())
            writer.writerows(rows)
    except OSError as e:
        logger.error(f"Failed to write CSV file {output_path}: {e}")
        raise

    logger.info(f"Successfully exported {len(rows)} contacts to {output_path}")


def _encode_bytes(value: Optional[bytes]) -> Optional[str]:
    if value is None:
        return None
    return base64.b64encode(value).decode('ascii')


def record_to_dict(record: Record) -> Dict[str, Any]:
    """
    Convert a record into JSON-compatible data.

    Grouped fields become objects keyed by group key, raw photo and logo
    bytes are base64-encoded, and the birthday is an ISO 8601 string.

    :param record: Parsed record
    :return: Plain dictionary
    """
    return {
        'full_name': record.full_name,
        'name': asdict(record.name) if record.name else None,
        'birthday': _format_date(record.birthday) or None,
        'addresses': {
            key: [asdict(address) for address in addresses]
            for key, addresses in record.addresses.items()
        },
        'phones': {key: list(values) for key, values in record.phones.items()},
        'emails': {key: list(values) for key, values in record.emails.items()},
        'urls': {key: list(values) for key, values in record.urls.items()},
        'revision': record.revision,
        'version': record.version,
        'organization': record.organization,
        'title': record.title,
        'note': record.note,
        'geo': record.geo,
        'gender': record.gender,
        'photo': record.photo,
        'raw_photo': _encode_bytes(record.raw_photo),
        'logo': record.logo,
        'raw_logo': _encode_bytes(record.raw_logo),
        'categories': list(record.categories),
        'nicknames': list(record.nicknames),
        'skype_handles': list(record.skype_handles),
        'items': {
            index: {
                part: list(value) if isinstance(value, tuple) else value
                for part, value in parts.items()
            }
            for index, parts in record.items.items()
        },
    }


def export_records_to_json(records: Iterable[Record], output_path: Path) -> None:
    """
    Export records to a JSON file as a list of objects.

    :param records: Parsed records
    :param output_path: Path where the JSON file should be written
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    data = [record_to_dict(record) for record in records]

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.info(f"Exported {len(data)} contacts to {output_path}")
