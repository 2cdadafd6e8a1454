"""Application configuration and workout presets."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from hiitflow.models import AppConfig, WorkoutConfig

_CONFIG_DIR = Path.home() / ".config" / "hiitflow"
_CONFIG_FILE = _CONFIG_DIR / "config.json"

# Values the setup form starts with
DEFAULT_WORKOUT: dict[str, int] = {
    "prep": 10,
    "sets": 4,
    "work": 20,
    "rest": 10,
    "cooldown": 60,
}

BUILTIN_PRESETS: dict[str, WorkoutConfig] = {
    "tabata": WorkoutConfig(prep=10, sets=8, work=20, rest=10, cooldown=60),
}


def load_config() -> AppConfig:
    """Load config from disk, returning defaults if none exists."""
    if _CONFIG_FILE.exists():
        try:
            data = json.loads(_CONFIG_FILE.read_text())
            return AppConfig(**data)
        except (OSError, json.JSONDecodeError, TypeError, PydanticValidationError):
            pass
    return AppConfig()


def save_config(config: AppConfig) -> Path:
    """Write config to disk. Returns the config file path."""
    _CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    _CONFIG_FILE.write_text(config.model_dump_json(indent=2))
    return _CONFIG_FILE


def _normalise(name: str) -> str:
    return name.strip().lower()


def list_presets() -> dict[str, WorkoutConfig]:
    """Built-in presets overlaid with the user's saved ones."""
    presets = dict(BUILTIN_PRESETS)
    presets.update(load_config().presets)
    return presets


def get_preset(name: str) -> Optional[WorkoutConfig]:
    """Look up a preset by name (user presets shadow built-ins)."""
    return list_presets().get(_normalise(name))


def save_preset(name: str, workout: WorkoutConfig) -> AppConfig:
    """Store *workout* under *name* and save config."""
    key = _normalise(name)
    if not key:
        raise ValueError("Preset name must not be empty")
    config = load_config()
    config.presets[key] = workout
    save_config(config)
    return config


def delete_preset(name: str) -> bool:
    """Remove a saved preset. Returns False if the user had none by that name."""
    config = load_config()
    if config.presets.pop(_normalise(name), None) is None:
        return False
    save_config(config)
    return True


def set_options(sound: Optional[bool] = None, keep_awake: Optional[bool] = None) -> AppConfig:
    """Update the given options and save config."""
    config = load_config()
    if sound is not None:
        config.sound = sound
    if keep_awake is not None:
        config.keep_awake = keep_awake
    save_config(config)
    return config
