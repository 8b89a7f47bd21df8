"""Configuration loading and validation."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ods_practices.common.fs import read_yaml
from ods_practices.common.schema import validate_pipeline_config

DEFAULT_CONFIG: dict = {
    "registry": {
        "encoding": None,
    },
    "directory": {
        "delimiter": "¬",
        "encoding": "iso-8859-1",
        "code_field": "OrganisationCode",
        "latitude_field": "Latitude",
        "longitude_field": "Longitude",
    },
    "filters": {
        "active_status_code": "A",
        "gp_prescribing_setting": "4",
    },
    "output": {
        "indent": 4,
    },
}


@dataclass(frozen=True)
class DirectoryDialect:
    delimiter: str
    encoding: str
    code_field: str
    latitude_field: str
    longitude_field: str


@dataclass(frozen=True)
class FilterRules:
    active_status_code: str
    gp_prescribing_setting: str


@dataclass(frozen=True)
class PipelineConfig:
    registry_encoding: str | None
    directory: DirectoryDialect
    filters: FilterRules
    indent: int


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _from_dict(cfg: dict) -> PipelineConfig:
    return PipelineConfig(
        registry_encoding=cfg["registry"]["encoding"],
        directory=DirectoryDialect(**cfg["directory"]),
        filters=FilterRules(**cfg["filters"]),
        indent=cfg["output"]["indent"],
    )


def load_pipeline_config(overlay_path: Path | None = None) -> PipelineConfig:
    """Build the run configuration from the defaults plus an optional YAML overlay."""
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    if overlay_path is not None:
        # An empty YAML file loads as None and leaves the defaults in place.
        overlay = read_yaml(overlay_path) or {}
        cfg = _deep_merge(cfg, overlay)
    return _from_dict(validate_pipeline_config(cfg))
