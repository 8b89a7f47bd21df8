"""Sequence ingest, merge, join, filter and record shaping for one run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ods_practices.common.config_loader import PipelineConfig
from ods_practices.common.logging import log_event
from ods_practices.common.models import DirectoryRecord
from ods_practices.pipeline.ingest import parse_directory
from ods_practices.pipeline.join import join_sources
from ods_practices.pipeline.merge import load_registry_sources
from ods_practices.pipeline.practices import (
    REJECT_INACTIVE,
    REJECT_INCOMPLETE,
    REJECT_NOT_GP,
    select_practices,
)
from ods_practices.pipeline.reports import RunStats


@dataclass
class PipelineResult:
    records: list[dict]
    stats: RunStats = field(default_factory=RunStats)


def run_pipeline(
    registry_paths: list[Path],
    directory_path: Path | None = None,
    *,
    config: PipelineConfig,
    logger: logging.Logger,
) -> PipelineResult:
    """Build the sorted practice records from a full set of inputs.

    Every input is read before any record is built, so a failed read leaves
    nothing half-written. Without a directory file the records carry a flat
    ``address`` instead of a ``location`` object.
    """
    if not registry_paths:
        raise ValueError("At least one registry file is required")

    stats = RunStats(registry_files=len(registry_paths))

    registry = load_registry_sources(registry_paths, encoding=config.registry_encoding, logger=logger)
    stats.registry_codes = len(registry)

    directory: dict[str, DirectoryRecord] = {}
    if directory_path is not None:
        directory = parse_directory(directory_path, dialect=config.directory, logger=logger)
    stats.directory_codes = len(directory)

    joined = join_sources(registry, directory)
    stats.joined = len(joined)
    log_event(
        logger,
        "joined registry and directory",
        stage="join",
        event="JOIN",
        status="ok",
        rows_in=len(registry) + len(directory),
        rows_out=len(joined),
    )

    practices, rejected = select_practices(
        joined,
        config.filters,
        latitude_field=config.directory.latitude_field,
        longitude_field=config.directory.longitude_field,
    )
    stats.dropped_incomplete = rejected[REJECT_INCOMPLETE]
    stats.dropped_inactive = rejected[REJECT_INACTIVE]
    stats.dropped_not_gp = rejected[REJECT_NOT_GP]
    log_event(
        logger,
        f"kept {len(practices)} practices; rejected {dict(sorted(rejected.items()))}",
        stage="filter",
        event="FILTER",
        status="ok",
        rows_in=len(joined),
        rows_out=len(practices),
    )

    include_location = directory_path is not None
    records = [practice.to_dict(include_location=include_location) for practice in practices]
    stats.output = len(records)
    return PipelineResult(records=records, stats=stats)
