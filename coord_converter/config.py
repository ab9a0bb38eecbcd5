"""TOML configuration with built-in defaults."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Optional

import toml

from coord_converter.fetch import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

CONFIG_FILE = Path(__file__).resolve().parent.parent / "coord_config.toml"

DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    "fetch": {"user_agent": DEFAULT_USER_AGENT, "timeout": DEFAULT_TIMEOUT},
    "decode": {"max_iterations": 10},
    "share": {"base_url": "http://localhost:3000"},
    "cache": {"enabled": True},
}


def load_config(path: Optional[Path] = None) -> dict[str, dict[str, Any]]:
    """Load the config file, falling back to defaults for anything missing.

    A missing file is not an error. Unknown sections and keys are dropped.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    path = Path(path) if path is not None else CONFIG_FILE
    if not path.exists():
        return config

    loaded = toml.load(path)
    for section, defaults in config.items():
        values = loaded.get(section, {})
        if not isinstance(values, dict):
            continue
        for key in defaults:
            if key in values:
                defaults[key] = values[key]
    return config
