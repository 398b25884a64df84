"""
Contact record types produced by the vCard parser.

A card is accumulated on a mutable RecordBuilder while its lines are
dispatched, then frozen into a Record when END:VCARD is reached.

Dependencies:
    - dataclasses: Standard library for the record containers
    - types: Standard library for read-only mapping views
    - datetime: Standard library for the birthday value
    - typing: Standard library for type hints
"""

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

DEFAULT_GROUP_KEY = "default;undefined"

ItemValue = Union[str, Tuple[str, ...]]


def group_key(params: Sequence[str]) -> str:
    """
    Build the key used to bucket grouped values (phones, emails, ...).

    :param params: Parameter tokens left after value decoding
    :return: Tokens joined with ';', or the default key when none remain
    """
    if not params:
        return DEFAULT_GROUP_KEY
    return ';'.join(params)


def _split_parts(value: str, count: int) -> List[str]:
    parts = value.split(';')[:count]
    parts.extend([''] * (count - len(parts)))
    return parts


@dataclass(frozen=True)
class NameParts:
    """The five components of the N property."""

    lastname: str = ''
    firstname: str = ''
    additional: str = ''
    prefix: str = ''
    suffix: str = ''

    @classmethod
    def from_value(cls, value: str) -> "NameParts":
        return cls(*_split_parts(value, 5))


@dataclass(frozen=True)
class Address:
    """The seven components of the ADR property."""

    name: str = ''
    extended: str = ''
    street: str = ''
    city: str = ''
    region: str = ''
    zip: str = ''
    country: str = ''

    @classmethod
    def from_value(cls, value: str) -> "Address":
        return cls(*_split_parts(value, 7))


def _freeze_groups(groups: Dict[str, list]) -> Mapping[str, tuple]:
    return MappingProxyType({key: tuple(values) for key, values in groups.items()})


@dataclass(frozen=True)
class Record:
    """
    One parsed contact card.

    Grouped fields map a group key (see group_key) to the values found
    under it, in line order. Keys keep the order they were first seen in.
    """

    full_name: Optional[str] = None
    name: Optional[NameParts] = None
    birthday: Optional[date] = None
    addresses: Mapping[str, Tuple[Address, ...]] = field(default_factory=lambda: MappingProxyType({}))
    phones: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    emails: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    urls: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    revision: Optional[str] = None
    version: Optional[str] = None
    organization: Optional[str] = None
    title: Optional[str] = None
    note: Optional[str] = None
    geo: Optional[str] = None
    gender: Optional[str] = None
    photo: Optional[str] = None
    raw_photo: Optional[bytes] = None
    logo: Optional[str] = None
    raw_logo: Optional[bytes] = None
    categories: Tuple[str, ...] = ()
    nicknames: Tuple[str, ...] = ()
    skype_handles: Tuple[str, ...] = ()
    items: Mapping[str, Mapping[str, ItemValue]] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def display_name(self) -> str:
        """Best available label for logs and exports."""
        if self.full_name:
            return self.full_name
        if self.name:
            parts = [self.name.prefix, self.name.firstname, self.name.additional,
                     self.name.lastname, self.name.suffix]
            joined = ' '.join(filter(None, parts)).strip()
            if joined:
                return joined
        return self.organization or 'Unknown'


@dataclass
class RecordBuilder:
    """Mutable accumulator for the card currently being parsed."""

    full_name: Optional[str] = None
    name: Optional[NameParts] = None
    birthday: Optional[date] = None
    addresses: Dict[str, List[Address]] = field(default_factory=dict)
    phones: Dict[str, List[str]] = field(default_factory=dict)
    emails: Dict[str, List[str]] = field(default_factory=dict)
    urls: Dict[str, List[str]] = field(default_factory=dict)
    revision: Optional[str] = None
    version: Optional[str] = None
    organization: Optional[str] = None
    title: Optional[str] = None
    note: Optional[str] = None
    geo: Optional[str] = None
    gender: Optional[str] = None
    photo: Optional[str] = None
    raw_photo: Optional[bytes] = None
    logo: Optional[str] = None
    raw_logo: Optional[bytes] = None
    categories: List[str] = field(default_factory=list)
    nicknames: List[str] = field(default_factory=list)
    skype_handles: List[str] = field(default_factory=list)
    items: Dict[str, Dict[str, ItemValue]] = field(default_factory=dict)

    def add_grouped(self, groups: Dict[str, list], params: Sequence[str], value) -> None:
        """
        Append a value to a grouped field under the key built from params.

        :param groups: One of addresses, phones, emails or urls
        :param params: Remaining parameter tokens of the property line
        :param value: Value to append
        """
        groups.setdefault(group_key(params), []).append(value)

    def set_item(self, index: str, part: str, value: ItemValue) -> None:
        self.items.setdefault(index, {})[part] = value

    def build(self) -> Record:
        """Freeze the accumulated state into an immutable Record."""
        return Record(
            full_name=self.full_name,
            name=self.name,
            birthday=self.birthday,
            addresses=_freeze_groups(self.addresses),
            phones=_freeze_groups(self.phones),
            emails=_freeze_groups(self.emails),
            urls=_freeze_groups(self.urls),
            revision=self.revision,
            version=self.version,
            organization=self.organization,
            title=self.title,
            note=self.note,
            geo=self.geo,
            gender=self.gender,
            photo=self.photo,
            raw_photo=self.raw_photo,
            logo=self.logo,
            raw_logo=self.raw_logo,
            categories=tuple(self.categories),
            nicknames=tuple(self.nicknames),
            skype_handles=tuple(self.skype_handles),
            items=MappingProxyType({
                index: MappingProxyType(dict(parts))
                for index, parts in self.items.items()
            }),
        )
