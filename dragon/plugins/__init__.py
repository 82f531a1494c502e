#!/usr/bin/env python3
# dragon/plugins/__init__.py
from __future__ import annotations

"""
Dynamic plugin support.

Provides:
- `PluginRegistry` / `LoadedPlugin`: the arena of loaded plugin modules.
- Loader helpers and the plugin ABI constants (`ENTRY_POINT`, `PLUGIN_API_VERSION`).
"""

from .loader import ENTRY_POINT, PLUGIN_API_VERSION, bind_entry_point, import_plugin
from .registry import LoadedPlugin, PluginRegistry

__all__ = [
    "ENTRY_POINT",
    "PLUGIN_API_VERSION",
    "bind_entry_point",
    "import_plugin",
    "LoadedPlugin",
    "PluginRegistry",
]
