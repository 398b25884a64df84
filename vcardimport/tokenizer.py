"""
Property line tokenization: ELEMENT[;PARAM]*:VALUE.
"""

from typing import List, NamedTuple


class PropertyLine(NamedTuple):
    """A property line split into its element, parameters and raw value."""

    element: str
    params: List[str]
    value: str


def tokenize_line(line: str) -> PropertyLine:
    """
    Split one logical line into element name, parameter tokens and value.

    The value is everything after the first ':'. A line without ':' yields
    an empty element and value, which later stages ignore. Element and
    parameters keep their original case.

    Args:
        line: Stripped, non-empty logical line

    Returns:
        PropertyLine tuple
    """
    type_spec, separator, value = line.partition(':')
    if not separator:
        type_spec, value = '', ''

    tokens = type_spec.split(';')
    return PropertyLine(tokens[0], tokens[1:], value)
