"""
Parse vCard text into structured contact records.
"""

from vcardimport.collection import VCardCollection
from vcardimport.errors import (
    DateParseError,
    FileAccessError,
    IndexOutOfRangeError,
    VCardError,
)
from vcardimport.record import DEFAULT_GROUP_KEY, Address, NameParts, Record
from vcardimport.vcard_parser import parse_records, parse_vcard_file, parse_vcard_text

__all__ = [
    'DEFAULT_GROUP_KEY',
    'Address',
    'DateParseError',
    'FileAccessError',
    'IndexOutOfRangeError',
    'NameParts',
    'Record',
    'VCardCollection',
    'VCardError',
    'parse_records',
    'parse_vcard_file',
    'parse_vcard_text',
]
