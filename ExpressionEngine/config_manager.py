# config_manager.py
"""Settings for the expression engine.

The library ships no configuration file. Callers may pass a mapping of
overrides, or the path of their own JSON file, and get the defaults merged
with their values.
"""
import json
import decimal
from pathlib import Path

from . import error as E


DEFAULT_SETTINGS = {
    "precision": 30,
    "rounding": "ROUND_HALF_UP",
    "guard_digits": 10,
    "power_max_denominator": 100,
    "power_tolerance": "1e-10",
    "tan_epsilon": "1e-10",
    "max_expression_length": 10000,
    "max_nesting_depth": 256,
    "max_factorial": 10000,
}

_INT_SETTINGS = ("precision", "guard_digits", "power_max_denominator",
                 "max_expression_length", "max_nesting_depth", "max_factorial")
_DECIMAL_SETTINGS = ("power_tolerance", "tan_epsilon")

ROUNDING_MODES = {
    "ROUND_HALF_UP": decimal.ROUND_HALF_UP,
    "ROUND_HALF_EVEN": decimal.ROUND_HALF_EVEN,
    "ROUND_HALF_DOWN": decimal.ROUND_HALF_DOWN,
    "ROUND_UP": decimal.ROUND_UP,
    "ROUND_DOWN": decimal.ROUND_DOWN,
    "ROUND_CEILING": decimal.ROUND_CEILING,
    "ROUND_FLOOR": decimal.ROUND_FLOOR,
}


def _validate(settings_dict):
    for key in _INT_SETTINGS:
        value = settings_dict[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise E.ConfigurationError(f"'{key}' must be a positive integer, got {value!r}", code="5000")

    for key in _DECIMAL_SETTINGS:
        try:
            value = decimal.Decimal(str(settings_dict[key]))
        except decimal.InvalidOperation:
            raise E.ConfigurationError(f"'{key}' must be a number, got {settings_dict[key]!r}", code="5000")
        if not value.is_finite() or value <= 0:
            raise E.ConfigurationError(f"'{key}' must be positive, got {settings_dict[key]!r}", code="5000")

    if settings_dict["rounding"] not in ROUNDING_MODES:
        raise E.ConfigurationError(f"Unknown rounding mode: {settings_dict['rounding']!r}", code="5000")

    return settings_dict


def load_settings(overrides=None):
    """Return the default settings merged with ``overrides`` (validated)."""
    settings_dict = dict(DEFAULT_SETTINGS)
    if overrides:
        unknown = [key for key in overrides if key not in DEFAULT_SETTINGS]
        if unknown:
            raise E.ConfigurationError(f"Unknown setting: {', '.join(sorted(unknown))}", code="5001")
        settings_dict.update(overrides)
    return _validate(settings_dict)


def load_settings_file(path):
    """Read a caller-supplied JSON file and merge it over the defaults."""
    config_json = Path(path)
    try:
        with open(config_json, 'r', encoding= 'utf-8') as f:
            overrides = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError) as e:
        raise E.ConfigurationError(f"Invalid settings file {config_json}: {e}", code="5002") from e

    if not isinstance(overrides, dict):
        raise E.ConfigurationError(f"Invalid settings file {config_json}: expected an object", code="5002")

    return load_settings(overrides)


def load_setting_value(key_value, settings=None):
    settings_dict = settings if settings is not None else load_settings()

    if key_value == "all":
        return settings_dict

    else:
        if key_value not in settings_dict:
            raise E.ConfigurationError(f"Unknown setting: {key_value}", code="5001")
        return settings_dict[key_value]


def make_context(settings):
    """Build the decimal context for one evaluation (working precision)."""
    return decimal.Context(
        prec=settings["precision"],
        rounding=ROUNDING_MODES[settings["rounding"]],
        traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow, decimal.Underflow],
    )
