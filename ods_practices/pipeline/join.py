"""Outer join of registry and directory records on organisation code."""

from __future__ import annotations

from typing import Mapping

from ods_practices.common.models import DirectoryRecord, JoinedOrganisation, RegistryRecord


def join_sources(
    registry: Mapping[str, RegistryRecord],
    directory: Mapping[str, DirectoryRecord],
) -> list[JoinedOrganisation]:
    codes = set(registry) | set(directory)
    return [
        JoinedOrganisation(
            organisation_code=code,
            registry=registry.get(code),
            directory=directory.get(code),
        )
        for code in codes
    ]
