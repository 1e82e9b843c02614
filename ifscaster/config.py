from __future__ import annotations

import math
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ifscaster.errors import ConfigError
from ifscaster.logging_config import resolve_level

DEFAULT_CONFIG_NAME = "ifscaster.yaml"
CONFIG_ENV_VAR = "IFSCASTER_CONFIG"


@dataclass
class AppConfig:
    view_width: int = 700
    view_height: int = 700
    fps: int = 60
    font_size: int = 16
    default_depth: int = 4
    default_scale: float = 0.5
    scale_rate: float = 1.1           # multiplier per scale step
    rotation_step: float = 0.1 * math.pi  # radians per rotation step
    select_radius: float = 20.0       # pointer distance that selects a fixed point
    triangle_warning: int = 250000    # warn (never clamp) above this many triangles
    log_level: str = "INFO"
    log_file: Optional[str] = None
    # command -> key names; merged over the shipped keybindings.yaml
    keybindings: Dict[str, List[str]] = field(default_factory=dict)

    def validate(self) -> None:
        if self.view_width <= 0 or self.view_height <= 0:
            raise ConfigError(f"view size must be positive, got {self.view_width}x{self.view_height}")
        if self.fps <= 0:
            raise ConfigError(f"fps must be positive, got {self.fps}")
        if self.default_depth < 0:
            raise ConfigError(f"default_depth must be non-negative, got {self.default_depth}")
        if self.scale_rate <= 1.0:
            raise ConfigError(f"scale_rate must be greater than 1.0, got {self.scale_rate}")
        if not 0.0 < self.rotation_step < 2.0 * math.pi:
            raise ConfigError(f"rotation_step must be within (0, 2*pi), got {self.rotation_step}")
        if self.select_radius <= 0:
            raise ConfigError(f"select_radius must be positive, got {self.select_radius}")
        if not 0.0 < self.default_scale < 1.0:
            raise ConfigError(f"default_scale must be within (0, 1), got {self.default_scale}")
        if self.triangle_warning < 0:
            raise ConfigError(f"triangle_warning must be non-negative, got {self.triangle_warning}")
        resolve_level(self.log_level)


def _coerce(name: str, current: Any, value: Any) -> Any:
    if name == "keybindings":
        if not isinstance(value, dict):
            raise ConfigError("keybindings must be a mapping of command -> key list")
        out: Dict[str, List[str]] = {}
        for cmd, keys in value.items():
            if isinstance(keys, str):
                keys = [keys]
            out[str(cmd)] = [str(k).lower() for k in (keys or [])]
        return out
    if value is None:
        return None
    if isinstance(current, bool) or current is None:
        return value
    if isinstance(current, int):
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ConfigError(f"{name} must be a whole number, got {value!r}")
    try:
        return type(current)(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"bad value for {name}: {value!r}") from e


def config_from_mapping(data: Dict[str, Any]) -> AppConfig:
    """Build an AppConfig from a plain mapping, rejecting unknown keys."""
    cfg = AppConfig()
    known = {f.name for f in fields(AppConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"unknown config keys: {', '.join(unknown)}")
    for name, value in data.items():
        setattr(cfg, name, _coerce(name, getattr(cfg, name), value))
    cfg.validate()
    return cfg


def load_config(path: Union[str, Path, None] = None) -> AppConfig:
    """
    Load settings from a YAML file, falling back to defaults.

    With no explicit path, IFSCASTER_CONFIG is consulted, then ifscaster.yaml
    in the working directory. A missing file is not an error.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_NAME
    path = Path(path)
    if not path.exists():
        return AppConfig()
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"could not parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
    return config_from_mapping(data)
