"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Mapping, Sequence

from ods_practices.common.constants import ODS_PRACTICE_HEADER
from ods_practices.common.errors import MissingFieldError, SchemaError


@dataclass(frozen=True)
class RegistryRecord:
    """One row of the ODS practice extract, named by column position."""

    organisation_code: str
    name: str
    national_grouping: str
    high_level_health_geography: str
    address_line_1: str
    address_line_2: str
    address_line_3: str
    address_line_4: str
    address_line_5: str
    postcode: str
    open_date: str
    close_date: str
    status_code: str
    organisation_sub_type_code: str
    commissioner: str
    join_provider_purchaser_date: str
    left_provider_purchaser_date: str
    contact_telephone_number: str
    null_1: str
    null_2: str
    null_3: str
    amended_record_indicator: str
    null_4: str
    provider_purchaser: str
    null_5: str
    prescribing_setting: str
    null_6: str

    @classmethod
    def from_row(cls, row: Sequence[str]) -> "RegistryRecord":
        if len(row) != len(ODS_PRACTICE_HEADER):
            raise SchemaError(f"Expected {len(ODS_PRACTICE_HEADER)} columns, got {len(row)}")
        return cls(*row)

    def field(self, name: str) -> str:
        if name not in ODS_PRACTICE_HEADER:
            raise MissingFieldError(f"Registry record has no field {name!r}")
        return getattr(self, name)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)



class DirectoryRecord:
    """Header-keyed row of the directory export."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str]) -> None:
        self._data = MappingProxyType(dict(data))

    def field(self, name: str) -> str:
        try:
            return self._data[name]
        except KeyError:
            raise MissingFieldError(f"Directory record has no field {name!r}") from None

    def get(self, name: str) -> str | None:
        return self._data.get(name)

    def to_dict(self) -> dict[str, str]:
        return dict(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DirectoryRecord):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"DirectoryRecord({dict(self._data)!r})"


@dataclass(frozen=True)
class JoinedOrganisation:
    organisation_code: str
    registry: RegistryRecord | None = None
    directory: DirectoryRecord | None = None

    @property
    def is_complete(self) -> bool:
        return self.registry is not None
