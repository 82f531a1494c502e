#!/usr/bin/env python3
# dragon/config/__init__.py
from __future__ import annotations

"""
Startup configuration.

Provides:
- `AppConfig`: validated settings, including the Alias Table and env entries.
- `load_config`: read dragon-config.toml, creating it with defaults if absent.
"""

from .config import (
    AppConfig,
    CONFIG_FILE_NAME,
    CONFIG_PATH_ENV,
    DEFAULTS,
    LOG_LEVEL_ENV,
    default_config_path,
    load_config,
)

__all__ = [
    "AppConfig",
    "CONFIG_FILE_NAME",
    "CONFIG_PATH_ENV",
    "DEFAULTS",
    "LOG_LEVEL_ENV",
    "default_config_path",
    "load_config",
]
