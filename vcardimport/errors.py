"""
Exception types raised by the vCard import package.
"""

from pathlib import Path
from typing import Union


class VCardError(Exception):
    """Base class for all vCard import errors."""


class FileAccessError(VCardError, OSError):
    """
    Raised when an input file is missing or cannot be read.

    Args:
        path: Path that could not be accessed
        reason: Short description of the problem
    """

    def __init__(self, path: Union[str, Path], reason: str = "is not readable, or doesn't exist"):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"File {self.path} {reason}")


class DateParseError(VCardError, ValueError):
    """
    Raised when a BDAY value cannot be interpreted as a date.

    This aborts the whole parse call: no partial record list is returned.
    """

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Cannot parse date value: {value!r}")


class IndexOutOfRangeError(VCardError, IndexError):
    """Raised when a record is requested at an index outside the collection."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        if size:
            message = f"Record index {index} out of range (0..{size - 1})"
        else:
            message = f"Record index {index} out of range (collection is empty)"
        super().__init__(message)
