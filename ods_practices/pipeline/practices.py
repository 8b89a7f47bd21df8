"""Filter joined organisations down to active GP practices and shape output rows."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from ods_practices.common.config_loader import FilterRules
from ods_practices.common.constants import ADDRESS_COLUMNS
from ods_practices.common.models import JoinedOrganisation, RegistryRecord
from ods_practices.common.text import format_address, format_name

DEFAULT_RULES = FilterRules(active_status_code="A", gp_prescribing_setting="4")

REJECT_INCOMPLETE = "incomplete"
REJECT_INACTIVE = "inactive"
REJECT_NOT_GP = "not_gp_practice"


class Practice:
    def __init__(
        self,
        organisation: JoinedOrganisation,
        rules: FilterRules = DEFAULT_RULES,
        *,
        latitude_field: str = "Latitude",
        longitude_field: str = "Longitude",
    ) -> None:
        self.organisation = organisation
        self.rules = rules
        self.latitude_field = latitude_field
        self.longitude_field = longitude_field

    @property
    def organisation_code(self) -> str:
        return self.organisation.organisation_code

    @property
    def registry(self) -> RegistryRecord:
        if self.organisation.registry is None:
            raise ValueError(f"{self.organisation_code} has no registry record")
        return self.organisation.registry

    def is_complete(self) -> bool:
        return self.organisation.is_complete

    def is_active(self) -> bool:
        return self.registry.field("status_code") == self.rules.active_status_code

    def is_gp_practice(self) -> bool:
        return self.registry.field("prescribing_setting") == self.rules.gp_prescribing_setting

    def rejection_reason(self) -> str | None:
        """First failing check, or None when the organisation is kept."""
        if not self.is_complete():
            return REJECT_INCOMPLETE
        if not self.is_active():
            return REJECT_INACTIVE
        if not self.is_gp_practice():
            return REJECT_NOT_GP
        return None

    def formatted_name(self) -> str:
        return format_name(self.registry.field("name"))

    def address(self) -> str:
        lines = [self.registry.field(column) for column in ADDRESS_COLUMNS]
        return format_address(lines, self.registry.field("postcode"))

    def coordinates(self) -> dict[str, str]:
        directory = self.organisation.directory
        if directory is None:
            return {}
        out = {}
        for key, field_name in (("latitude", self.latitude_field), ("longitude", self.longitude_field)):
            value = directory.get(field_name)
            if value:
                out[key] = value
        return out

    def to_dict(self, *, include_location: bool = True) -> dict:
        payload: dict = {
            "organisation_code": self.organisation_code,
            "name": self.formatted_name(),
        }
        if include_location:
            payload["location"] = {"address": self.address(), **self.coordinates()}
        else:
            payload["address"] = self.address()
        payload["contact_telephone_number"] = self.registry.field("contact_telephone_number")
        return payload


def select_practices(
    organisations: Iterable[JoinedOrganisation],
    rules: FilterRules = DEFAULT_RULES,
    *,
    latitude_field: str = "Latitude",
    longitude_field: str = "Longitude",
) -> tuple[list[Practice], Counter]:
    """Keep complete, active GP practices sorted by organisation code.

    Returns the survivors and a count of rejections keyed by first failing check.
    """
    kept: list[Practice] = []
    rejected: Counter = Counter()
    for organisation in organisations:
        practice = Practice(
            organisation,
            rules,
            latitude_field=latitude_field,
            longitude_field=longitude_field,
        )
        reason = practice.rejection_reason()
        if reason is None:
            kept.append(practice)
        else:
            rejected[reason] += 1
    return sorted(kept, key=lambda practice: practice.organisation_code), rejected
