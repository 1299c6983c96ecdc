import decimal
import json

import pytest

from ExpressionEngine import config_manager
from ExpressionEngine import error as E


def test_defaults():
    settings = config_manager.load_settings()
    assert settings == config_manager.DEFAULT_SETTINGS
    assert settings is not config_manager.DEFAULT_SETTINGS
    assert config_manager.load_setting_value("precision") == 30
    assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS


def test_overrides_merge():
    settings = config_manager.load_settings({"precision": 12})
    assert settings["precision"] == 12
    assert settings["max_factorial"] == config_manager.DEFAULT_SETTINGS["max_factorial"]


@pytest.mark.parametrize("overrides", [
    {"precision": 0},
    {"precision": "30"},
    {"max_nesting_depth": True},
    {"power_tolerance": "abc"},
    {"tan_epsilon": -1},
    {"rounding": "ROUND_SIDEWAYS"},
])
def test_invalid_values(overrides):
    with pytest.raises(E.ConfigurationError):
        config_manager.load_settings(overrides)


def test_unknown_setting():
    with pytest.raises(E.ConfigurationError) as info:
        config_manager.load_settings({"darkmode": True})
    assert info.value.code == "5001"
    with pytest.raises(E.ConfigurationError):
        config_manager.load_setting_value("darkmode")


def test_settings_file(tmp_path):
    path = tmp_path / "engine.json"
    path.write_text(json.dumps({"precision": 15, "rounding": "ROUND_HALF_EVEN"}), encoding="utf-8")
    settings = config_manager.load_settings_file(path)
    assert settings["precision"] == 15
    assert settings["rounding"] == "ROUND_HALF_EVEN"


def test_settings_file_errors(tmp_path):
    with pytest.raises(E.ConfigurationError):
        config_manager.load_settings_file(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(E.ConfigurationError):
        config_manager.load_settings_file(broken)

    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(E.ConfigurationError):
        config_manager.load_settings_file(listing)


def test_make_context():
    context = config_manager.make_context(config_manager.load_settings())
    assert context.prec == 30
    assert context.rounding == decimal.ROUND_HALF_UP
    assert context.traps[decimal.DivisionByZero]
    assert context.traps[decimal.Underflow]
