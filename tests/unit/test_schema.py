import copy

import pytest

from ods_practices.common.config_loader import DEFAULT_CONFIG
from ods_practices.common.errors import ConfigError
from ods_practices.common.schema import validate_pipeline_config


def _base() -> dict:
    return copy.deepcopy(DEFAULT_CONFIG)


def test_validate_pipeline_config_accepts_defaults():
    validated = validate_pipeline_config(_base())
    assert validated["directory"]["delimiter"] == "¬"


def test_validate_pipeline_config_rejects_unknown_key_by_default():
    bad = _base()
    bad["filters"]["unexpected"] = True
    with pytest.raises(ConfigError):
        validate_pipeline_config(bad)


def test_validate_pipeline_config_allows_unknown_when_enabled():
    okay = _base()
    okay["extra"] = 1
    validate_pipeline_config(okay, allow_unknown=True)


def test_validate_pipeline_config_rejects_missing_section():
    bad = _base()
    del bad["directory"]
    with pytest.raises(ConfigError, match="directory"):
        validate_pipeline_config(bad)


def test_validate_pipeline_config_rejects_multi_character_delimiter():
    bad = _base()
    bad["directory"]["delimiter"] = "||"
    with pytest.raises(ConfigError):
        validate_pipeline_config(bad)


def test_validate_pipeline_config_rejects_negative_indent():
    bad = _base()
    bad["output"]["indent"] = -1
    with pytest.raises(ConfigError):
        validate_pipeline_config(bad)


def test_validate_pipeline_config_stringifies_filter_codes():
    cfg = _base()
    cfg["filters"]["gp_prescribing_setting"] = 4
    assert validate_pipeline_config(cfg)["filters"]["gp_prescribing_setting"] == "4"
