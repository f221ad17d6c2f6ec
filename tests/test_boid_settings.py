"""
Tests for BoidSettings configuration.

Covers:
- Defaults
- Validation (InvalidSettingsError)
- Dict round trip, legacy camelCase keys, unknown keys
- JSON loading and load_settings() fallbacks
"""

import json

import pytest

from flocksim.boids.boid_settings import (
    BoidSettings,
    InvalidSettingsError,
    load_settings,
)
from flocksim.utils.logger import LogLevel, logger


class TestDefaults:
    """Default values."""

    def test_defaults(self):
        s = BoidSettings()
        assert s.vision_radius == 50.0
        assert s.max_speed == 6.0
        assert s.contain_force == 0.25
        assert s.contain_padding == 25.0
        assert s.pull_force == 1.0
        assert s.center_force == 0.000025
        assert s.align_force == 0.1
        assert s.cohesion_force == 0.02
        assert s.separation_force == 0.04
        assert s.guard_zero_division is False
        assert s.carry_acceleration is False

    def test_immutable(self):
        with pytest.raises(AttributeError):
            BoidSettings().max_speed = 10


class TestValidation:
    """Out-of-range values are rejected at construction."""

    @pytest.mark.parametrize("kwargs", [
        {"max_speed": 0},
        {"max_speed": -1},
        {"vision_radius": -0.1},
        {"contain_padding": -5},
        {"align_force": float("nan")},
        {"center_force": float("inf")},
    ])
    def test_rejects(self, kwargs):
        with pytest.raises(InvalidSettingsError):
            BoidSettings(**kwargs)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            BoidSettings(max_speed=0)

    def test_zero_vision_allowed(self):
        assert BoidSettings(vision_radius=0).vision_radius == 0

    def test_negative_weights_allowed(self):
        """Negative weights invert a rule (e.g. anti-cohesion)."""
        assert BoidSettings(cohesion_force=-0.02).cohesion_force == -0.02

    @pytest.mark.parametrize("value", ["false", "true", 0, 1, None])
    def test_bool_fields_require_bool(self, value):
        with pytest.raises(InvalidSettingsError):
            BoidSettings(guard_zero_division=value)


class TestDictConversion:
    """to_dict / from_dict."""

    def test_round_trip(self):
        s = BoidSettings(max_speed=3.5, guard_zero_division=True)
        assert BoidSettings.from_dict(s.to_dict()) == s

    def test_missing_keys_use_defaults(self):
        s = BoidSettings.from_dict({"max_speed": 9})
        assert s.max_speed == 9.0
        assert s.vision_radius == 50.0

    def test_legacy_keys(self):
        s = BoidSettings.from_dict({
            "visionRad": 40,
            "maxSpeed": 5,
            "containForce": 0.5,
            "pullForce": 2,
            "centerForce": 0.001,
            "alignForce": 0.2,
            "cohesionForce": 0.03,
            "seperationForce": 0.05,
            "size": 0.1,
        })
        assert s == BoidSettings(
            vision_radius=40, max_speed=5, contain_force=0.5, pull_force=2,
            center_force=0.001, align_force=0.2, cohesion_force=0.03,
            separation_force=0.05, size=0.1,
        )

    def test_unknown_keys_ignored(self):
        assert BoidSettings.from_dict({"wobble": 3}) == BoidSettings()

    @pytest.mark.parametrize("value", ["false", "no", 0, 1, None])
    def test_bool_string_rejected(self, value):
        """A string such as 'false' must not switch the guard on."""
        with pytest.raises(InvalidSettingsError):
            BoidSettings.from_dict({"guard_zero_division": value})

    def test_bool_values_accepted(self):
        s = BoidSettings.from_dict({"guard_zero_division": True, "carry_acceleration": False})
        assert s.guard_zero_division is True
        assert s.carry_acceleration is False

    def test_json_false_keeps_guard_off(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text('{"guard_zero_division": false}')
        assert BoidSettings.from_json(path).guard_zero_division is False

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidSettingsError):
            BoidSettings.from_dict({"max_speed": "fast"})

    def test_numeric_strings_accepted(self):
        assert BoidSettings.from_dict({"max_speed": "4.5"}).max_speed == 4.5


class TestLoadSettings:
    """JSON files and fallback to defaults."""

    def test_from_json(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text(json.dumps({"maxSpeed": 8, "alignForce": 0.3}))
        s = BoidSettings.from_json(path)
        assert s.max_speed == 8.0
        assert s.align_force == 0.3

    def test_from_json_requires_object(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(InvalidSettingsError):
            BoidSettings.from_json(path)

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text(json.dumps({"vision_radius": 75}))
        assert load_settings(path).vision_radius == 75.0

    def test_missing_file_defaults(self, tmp_path):
        assert load_settings(tmp_path / "nope.json") == BoidSettings()

    def test_missing_file_logs_debug_only(self, tmp_path, qapp):
        """No settings file is the normal case, not a warning."""
        received = []
        slot = lambda m, lvl, ts: received.append(lvl)
        logger.signal_emitter.log_message.connect(slot)
        try:
            load_settings(tmp_path / "nope.json")
        finally:
            logger.signal_emitter.log_message.disconnect(slot)
        assert received == [LogLevel.DEBUG]

    def test_invalid_utf8_file_defaults(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_bytes(b'{"maxSpeed": 4, "x": "\xff\xfe"}')
        assert load_settings(path) == BoidSettings()

    def test_invalid_utf8_file_logs_warning(self, tmp_path, qapp):
        path = tmp_path / "s.json"
        path.write_bytes(b'{"maxSpeed": 4, "x": "\xff\xfe"}')
        received = []
        slot = lambda m, lvl, ts: received.append(lvl)
        logger.signal_emitter.log_message.connect(slot)
        try:
            load_settings(path)
        finally:
            logger.signal_emitter.log_message.disconnect(slot)
        assert LogLevel.WARNING in received

    def test_corrupt_file_defaults(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text("{not json")
        assert load_settings(path) == BoidSettings()

    def test_invalid_values_still_raise(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text(json.dumps({"max_speed": -2}))
        with pytest.raises(InvalidSettingsError):
            load_settings(path)

    def test_app_config_dir(self, isolated_config_dir):
        (isolated_config_dir / "settings.json").write_text(json.dumps({"pullForce": 1.5}))
        assert load_settings().pull_force == 1.5

    def test_app_config_dir_empty(self, isolated_config_dir):
        assert load_settings() == BoidSettings()
