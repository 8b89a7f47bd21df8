"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from ods_practices.common.errors import ConfigError

SECTION_KEYS = {
    "registry": {"encoding"},
    "directory": {"delimiter", "encoding", "code_field", "latitude_field", "longitude_field"},
    "filters": {"active_status_code", "gp_prescribing_setting"},
    "output": {"indent"},
}


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_non_empty_string(value, ctx: str) -> None:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{ctx} must be a non-empty string")


def validate_pipeline_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    if not isinstance(cfg, dict):
        raise ConfigError("pipeline config must be a mapping")

    _assert_required_keys(cfg, set(SECTION_KEYS), "pipeline config")
    _assert_no_unknown_keys(cfg, set(SECTION_KEYS), "pipeline config", allow_unknown)
    for section, keys in SECTION_KEYS.items():
        if not isinstance(cfg[section], dict):
            raise ConfigError(f"{section} must be a mapping")
        _assert_required_keys(cfg[section], keys, section)
        _assert_no_unknown_keys(cfg[section], keys, section, allow_unknown)

    registry_encoding = cfg["registry"]["encoding"]
    if registry_encoding is not None:
        _assert_non_empty_string(registry_encoding, "registry.encoding")

    directory = cfg["directory"]
    for key in sorted(SECTION_KEYS["directory"]):
        _assert_non_empty_string(directory[key], f"directory.{key}")
    if len(directory["delimiter"]) != 1:
        raise ConfigError("directory.delimiter must be a single character")

    for key in sorted(SECTION_KEYS["filters"]):
        # YAML reads an unquoted 4 as int; codes are compared as text.
        cfg["filters"][key] = str(cfg["filters"][key])

    indent = cfg["output"]["indent"]
    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
        raise ConfigError("output.indent must be a non-negative integer")

    return cfg
