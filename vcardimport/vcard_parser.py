"""
vCard parsing entry points for text and files.

Pipeline: normalize_text -> iter_card_blocks -> per line tokenize_line ->
decode_value -> dispatch. Each complete card becomes one Record.
"""
# pylint: disable=logging-fstring-interpolation

import logging
import os
from pathlib import Path
from typing import List, Union

from vcardimport.collection import VCardCollection
from vcardimport.decoder import decode_value
from vcardimport.dispatcher import dispatch
from vcardimport.errors import FileAccessError
from vcardimport.framer import iter_card_blocks
from vcardimport.normalizer import normalize_text
from vcardimport.record import Record, RecordBuilder
from vcardimport.tokenizer import tokenize_line

logger = logging.getLogger("vcardimport")


def _parse_block(lines: List[str]) -> Record:
    """
    Build one record from the property lines of a card.

    Args:
        lines: Non-empty property lines between BEGIN:VCARD and END:VCARD

    Returns:
        The frozen Record

    Raises:
        DateParseError: If a BDAY value cannot be parsed
    """
    builder = RecordBuilder()
    for line in lines:
        element, params, value = tokenize_line(line)
        dispatch(builder, element, decode_value(params, value))
    return builder.build()


def parse_records(content: str) -> List[Record]:
    """
    Parse vCard content into a list of records.

    Args:
        content: Full vCard content, any line ending style

    Returns:
        One Record per complete BEGIN:VCARD ... END:VCARD block

    Raises:
        DateParseError: If any BDAY value cannot be parsed; no records are
            returned in that case
    """
    records = [_parse_block(block) for block in iter_card_blocks(normalize_text(content))]
    logger.debug(f"Parsed {len(records)} vCard records")
    return records


def parse_vcard_text(content: str) -> VCardCollection:
    """
    Parse vCard content into a record collection.

    Args:
        content: Full vCard content

    Returns:
        VCardCollection of the parsed records

    Raises:
        DateParseError: If any BDAY value cannot be parsed
    """
    return VCardCollection(parse_records(content))


def _read_text(file_path: Path) -> str:
    try:
        with open(file_path, 'r', encoding='utf-8', newline='') as f:
            return f.read()
    except UnicodeDecodeError:
        # Undecodable bytes become lone surrogates; decode_value resolves or drops them.
        logger.info(f"{file_path} is not valid UTF-8, deferring undecodable bytes to CHARSET parameters")
        with open(file_path, 'r', encoding='utf-8', errors='surrogateescape', newline='') as f:
            return f.read()


def parse_vcard_file(file_path: Union[str, Path]) -> VCardCollection:
    """
    Parse a vCard file and return all of its records.

    Args:
        file_path: Path to the .vcf file

    Returns:
        VCardCollection of the parsed records

    Raises:
        FileAccessError: If the file doesn't exist or isn't readable
        DateParseError: If any BDAY value cannot be parsed
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise FileAccessError(file_path)
    if not os.access(file_path, os.R_OK):
        raise FileAccessError(file_path, "is not readable")

    try:
        content = _read_text(file_path)
    except OSError as e:
        raise FileAccessError(file_path, f"could not be read: {e}") from e

    collection = parse_vcard_text(content)
    logger.info(f"Successfully parsed {len(collection)} contacts from {file_path}")
    return collection
