"""Application configuration management."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from calmspace.models import AppConfig

log = logging.getLogger(__name__)

_CONFIG_DIR = Path.home() / ".config" / "calmspace"
_DATA_DIR = Path.home() / ".local" / "share" / "calmspace"

_CONFIG_FILE = _CONFIG_DIR / "config.json"


def load_config() -> AppConfig:
    """Load config from disk, returning defaults if none exists."""
    if _CONFIG_FILE.exists():
        try:
            data = json.loads(_CONFIG_FILE.read_text())
            return AppConfig(**data)
        except (json.JSONDecodeError, TypeError, ValidationError) as exc:
            log.warning("Ignoring unreadable config %s: %s", _CONFIG_FILE, exc)
    return AppConfig()


def save_config(config: AppConfig) -> Path:
    """Write config to disk. Returns the config file path."""
    _CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    _CONFIG_FILE.write_text(config.model_dump_json(indent=2))
    return _CONFIG_FILE


def get_data_path() -> Path:
    """Resolve the key-value store path from config (or default)."""
    config = load_config()
    if config.data_path is not None:
        p = Path(config.data_path)
        p.parent.mkdir(parents=True, exist_ok=True)
        return p
    _DATA_DIR.mkdir(parents=True, exist_ok=True)
    return _DATA_DIR / "store.json"


def set_data_path(path: str) -> AppConfig:
    """Set a custom store path and save config."""
    resolved = Path(path).expanduser().resolve()
    if resolved.is_dir():
        resolved = resolved / "store.json"
    resolved.parent.mkdir(parents=True, exist_ok=True)
    config = load_config()
    config.data_path = str(resolved)
    save_config(config)
    return config


def update_config(**changes: object) -> AppConfig:
    """Apply ``changes`` to the saved config, validating them first."""
    config = load_config()
    updated = AppConfig(**{**config.model_dump(), **changes})
    save_config(updated)
    return updated


def reset_config() -> AppConfig:
    """Restore every setting to its default."""
    config = AppConfig()
    save_config(config)
    return config
