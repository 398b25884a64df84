"""
Read-only access to the records produced by one parse call.
"""

from typing import Iterable, Iterator, Sequence, Tuple, Union, overload

from vcardimport.errors import IndexOutOfRangeError
from vcardimport.record import Record


class VCardCollection(Sequence[Record]):
    """
    Ordered, immutable sequence of parsed records.

    Iterating always starts from the first record, so the collection can be
    walked any number of times.
    """

    def __init__(self, records: Iterable[Record] = ()) -> None:
        self._records: Tuple[Record, ...] = tuple(records)

    @property
    def cards(self) -> Tuple[Record, ...]:
        """All records, in input order."""
        return self._records

    def card_at(self, index: int) -> Record:
        """
        Return the record at a position.

        :param index: Zero-based position; negative values are not accepted
        :return: The record at that position
        :raises IndexOutOfRangeError: If index is outside [0, len)
        """
        if not 0 <= index < len(self._records):
            raise IndexOutOfRangeError(index, len(self._records))
        return self._records[index]

    @overload
    def __getitem__(self, index: int) -> Record: ...

    @overload
    def __getitem__(self, index: slice) -> "VCardCollection": ...

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return VCardCollection(self._records[index])
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"VCardCollection({len(self._records)} records)"
