"""Persistent configuration for xlsx-lookup (~/.xlsx-lookup/config.json)."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from xlsx_lookup.utils.constants import CONFIG_MAX_MEMORY_MB, ENV_MAX_MEMORY_MB, MAX_MEMORY_MB

CONFIG_DIR = Path.home() / ".xlsx-lookup"
CONFIG_FILE = CONFIG_DIR / "config.json"


def load_config() -> dict[str, Any]:
    """Load config from disk. Returns empty dict if file missing."""
    if not CONFIG_FILE.exists():
        return {}
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (json.JSONDecodeError, OSError):
        return {}


def save_config(config: dict[str, Any]) -> None:
    """Write config to disk, creating directory if needed."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(config, indent=2) + "\n")


def get_max_memory_mb() -> float:
    """Resolve the memory ceiling for snapshot loads. Priority: env var > config file > default.

    Unparseable values fall through to the next source.
    """
    # 1. XLSX_LOOKUP_MAX_MEMORY_MB env var
    env_value = os.environ.get(ENV_MAX_MEMORY_MB)
    if env_value:
        try:
            return float(env_value)
        except ValueError:
            pass

    # 2. Config file
    config_value = load_config().get(CONFIG_MAX_MEMORY_MB)
    if config_value is not None:
        try:
            return float(config_value)
        except (TypeError, ValueError):
            pass

    return float(MAX_MEMORY_MB)
