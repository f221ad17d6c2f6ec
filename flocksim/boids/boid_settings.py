"""
Boid Settings - Per-run configuration shared by every boid

One BoidSettings instance is captured when a simulation is created and is
read-only for the lifetime of that run. Settings can be built in code,
from a plain dict, or from a JSON settings file (see load_settings).
"""

import json
import math
from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

from flocksim.config import (
    DEFAULT_VISION_RADIUS,
    DEFAULT_MAX_SPEED,
    DEFAULT_CONTAIN_FORCE,
    DEFAULT_CONTAIN_PADDING,
    DEFAULT_PULL_FORCE,
    DEFAULT_CENTER_FORCE,
    DEFAULT_ALIGN_FORCE,
    DEFAULT_COHESION_FORCE,
    DEFAULT_SEPARATION_FORCE,
    DEFAULT_SIZE,
    LEGACY_SETTINGS_KEYS,
)
from flocksim.utils.app_paths import get_settings_path
from flocksim.utils.logger import logger


class InvalidSettingsError(ValueError):
    """Raised when a settings value is out of range or of the wrong type."""


@dataclass(frozen=True)
class BoidSettings:
    """
    Immutable steering configuration.

    Force fields are weights; pull_force multiplies the center, align,
    separation and cohesion terms (not containment).
    """

    vision_radius: float = DEFAULT_VISION_RADIUS
    max_speed: float = DEFAULT_MAX_SPEED
    contain_force: float = DEFAULT_CONTAIN_FORCE
    contain_padding: float = DEFAULT_CONTAIN_PADDING
    pull_force: float = DEFAULT_PULL_FORCE
    center_force: float = DEFAULT_CENTER_FORCE
    align_force: float = DEFAULT_ALIGN_FORCE
    cohesion_force: float = DEFAULT_COHESION_FORCE
    separation_force: float = DEFAULT_SEPARATION_FORCE
    size: float = DEFAULT_SIZE

    # Zero-magnitude normalize returns zero and coincident boids are
    # skipped by separation, instead of producing nan/inf
    guard_zero_division: bool = False

    # Add this frame's steering to last frame's acceleration instead of
    # replacing it
    carry_acceleration: bool = False

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type is bool:
                if not isinstance(value, bool):
                    raise InvalidSettingsError(f"{f.name} must be true or false, got {value!r}")
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidSettingsError(f"{f.name} must be a finite number, got {value!r}")
        if self.vision_radius < 0:
            raise InvalidSettingsError(f"vision_radius must be >= 0, got {self.vision_radius}")
        if self.max_speed <= 0:
            raise InvalidSettingsError(f"max_speed must be > 0, got {self.max_speed}")
        if self.contain_padding < 0:
            raise InvalidSettingsError(f"contain_padding must be >= 0, got {self.contain_padding}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a plain dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoidSettings":
        """
        Build settings from a dict.

        Accepts field names and the legacy camelCase keys. Missing keys
        keep their defaults; unknown keys are logged and ignored.
        """
        known = {f.name: f for f in fields(cls)}
        kwargs: Dict[str, Any] = {}

        for key, value in data.items():
            name = LEGACY_SETTINGS_KEYS.get(key, key)
            if name not in known:
                logger.warning(f"Ignoring unknown settings key '{key}'", component="CONFIG")
                continue
            if known[name].type is bool:
                # Strings like "false" would be truthy under bool()
                if not isinstance(value, bool):
                    raise InvalidSettingsError(f"{key} must be true or false, got {value!r}")
                kwargs[name] = value
            else:
                try:
                    kwargs[name] = float(value)
                except (TypeError, ValueError):
                    raise InvalidSettingsError(f"{key} must be a number, got {value!r}")

        return cls(**kwargs)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "BoidSettings":
        """Load settings from a JSON object file."""
        with open(path, 'r', encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise InvalidSettingsError(f"{path}: expected a JSON object")
        return cls.from_dict(data)


def load_settings(path: Optional[Union[str, Path]] = None) -> BoidSettings:
    """
    Resolve settings for a run.

    Uses the given path, else settings.json in the app config dir. A missing
    or unreadable file falls back to defaults; invalid values still raise.
    """
    settings_path = Path(path) if path is not None else get_settings_path()

    if not settings_path.exists():
        logger.debug(f"No settings file at {settings_path}, using defaults", component="CONFIG")
        return BoidSettings()

    try:
        settings = BoidSettings.from_json(settings_path)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        logger.warning(f"Failed to load settings from {settings_path}", component="CONFIG", details=str(e))
        return BoidSettings()

    logger.info(f"Loaded settings from {settings_path}", component="CONFIG")
    return settings
