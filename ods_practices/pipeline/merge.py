"""Fold the base ODS extract and its amendment files into one mapping."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping, TypeVar

from ods_practices.common.logging import log_event
from ods_practices.common.models import RegistryRecord
from ods_practices.pipeline.ingest import parse_registry

T = TypeVar("T")


def merge_sources(mappings: Iterable[Mapping[str, T]]) -> dict[str, T]:
    """Left-fold mappings; a later mapping replaces whole records for shared codes."""
    merged: dict[str, T] = {}
    for mapping in mappings:
        merged.update(mapping)
    return merged


def load_registry_sources(
    paths: list[Path],
    *,
    encoding: str | None = None,
    logger: logging.Logger | None = None,
) -> dict[str, RegistryRecord]:
    # Parse everything first so a bad amendment fails before any merging.
    parsed = [parse_registry(path, encoding=encoding, logger=logger) for path in paths]

    if logger is not None:
        seen: set[str] = set()
        for path, mapping in zip(paths, parsed):
            overridden = len(seen.intersection(mapping))
            added = len(mapping) - overridden
            seen.update(mapping)
            log_event(
                logger,
                f"{path.name}: {overridden} codes overridden, {added} added",
                stage="merge",
                source=str(path),
                event="MERGE_SOURCE",
                status="ok",
                rows_in=len(mapping),
                rows_out=len(seen),
            )

    return merge_sources(parsed)
