"""
Line splitting and BEGIN:VCARD / END:VCARD framing.
"""
# pylint: disable=logging-fstring-interpolation

import logging
from typing import Iterator, List

logger = logging.getLogger("vcardimport")

BEGIN_MARKER = 'BEGIN:VCARD'
END_MARKER = 'END:VCARD'


def split_lines(text: str) -> List[str]:
    """
    Split normalized text into stripped logical lines.

    :param text: Output of normalize_text
    :return: List of lines, empty lines included
    """
    return [line.strip() for line in text.split('\n')]


def iter_card_blocks(text: str) -> Iterator[List[str]]:
    """
    Yield the property lines of every complete vCard block.

    A BEGIN:VCARD seen while a block is open discards that block and starts
    a new one. An END:VCARD outside a block is ignored, and so are lines
    outside a block. A block still open when the input ends is dropped.

    :param text: Output of normalize_text
    :return: Iterator over lists of non-empty property lines, one per card
    """
    current: List[str] = []
    in_record = False
    line_number = 0

    for line_number, line in enumerate(split_lines(text), 1):
        marker = line.upper()

        if marker == BEGIN_MARKER:
            if in_record:
                logger.debug(
                    f"Line {line_number}: BEGIN:VCARD inside an open card, "
                    f"discarding {len(current)} pending lines"
                )
            current = []
            in_record = True
        elif marker == END_MARKER:
            if in_record:
                yield current
                current = []
                in_record = False
        elif line and in_record:
            current.append(line)

    if in_record:
        logger.warning(
            f"Input ended inside an unterminated vCard at line {line_number}; "
            f"dropping {len(current)} lines"
        )
