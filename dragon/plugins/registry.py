#!/usr/bin/env python3
# dragon/plugins/registry.py
from __future__ import annotations

"""
Plugin registry.

An append-only arena of LoadedPlugin entries. Each entry gets a stable
integer id at load time; listing and unloading work on that id or on the
originating path, never on a repr of the module object.
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Sequence

from dragon.errors import PluginCallError, PluginSymbolError
from .loader import bind_entry_point, call_entry_point, import_plugin

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadedPlugin:
    """A plugin module owned by the registry."""

    id: int
    path: Path
    module: ModuleType

    @property
    def display(self) -> str:
        return str(self.path)


class PluginRegistry:
    """Ordered collection of loaded plugins."""

    def __init__(self) -> None:
        self._entries: list[LoadedPlugin] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._entries)

    # ---------------- Lifetime ----------------

    def load(self, path: str | os.PathLike[str]) -> LoadedPlugin:
        """
        Import the plugin at `path` and append it to the registry.

        Loading a path that is already loaded returns the existing entry, so
        the registry never holds the same module twice.
        Raises PluginLoadError.
        """
        resolved = Path(path).resolve()
        existing = self.find_by_path(resolved)
        if existing is not None:
            logger.debug("plugin %s already loaded as #%d", resolved, existing.id)
            return existing

        module = import_plugin(resolved)
        entry = LoadedPlugin(id=self._next_id, path=resolved, module=module)
        self._next_id += 1
        self._entries.append(entry)
        logger.info("loaded plugin #%d from %s", entry.id, resolved)
        return entry

    def unload(self, selector: str) -> LoadedPlugin | None:
        """
        Remove the first entry matching `selector` and return it.

        `selector` is a plugin id, or a fragment of the plugin path. No
        teardown hook is called on the plugin; the module is just dropped.
        """
        entry = self.find(selector)
        if entry is None:
            return None
        self.discard(entry)
        return entry

    def discard(self, entry: LoadedPlugin) -> None:
        """Drop `entry` from the registry and from sys.modules."""
        self._entries.remove(entry)
        sys.modules.pop(entry.module.__name__, None)
        logger.info("unloaded plugin #%d (%s)", entry.id, entry.path)

    # ---------------- Lookup ----------------

    def list(self) -> list[LoadedPlugin]:
        """Entries in load order."""
        return list(self._entries)

    def get(self, plugin_id: int) -> LoadedPlugin | None:
        for entry in self._entries:
            if entry.id == plugin_id:
                return entry
        return None

    def find(self, selector: str) -> LoadedPlugin | None:
        """Match by id first, then by the first path containing `selector`."""
        if not selector:
            return None
        if selector.isdigit():
            by_id = self.get(int(selector))
            if by_id is not None:
                return by_id
        for entry in self._entries:
            if selector in entry.display:
                return entry
        return None

    def find_by_path(self, resolved: Path) -> LoadedPlugin | None:
        """Exact match on the resolved plugin path."""
        for entry in self._entries:
            if entry.path == resolved:
                return entry
        return None

    # ---------------- Invocation ----------------

    def resolve_and_call(self, plugin: LoadedPlugin, symbol: str, args: Sequence[str]) -> str:
        """
        Bind `symbol` on `plugin`, call it with `args` and return its text.

        Raises PluginSymbolError for a missing or incompatible entry point
        (including a non-str return value) and PluginCallError when the
        function itself raises.
        """
        func = bind_entry_point(plugin.module, symbol)
        logger.debug("calling %s.%s(%s)", plugin.path.name, symbol, list(args))
        try:
            result = call_entry_point(func, args)
        except Exception as exc:
            raise PluginCallError(
                f"Plugin function '{symbol}' failed: {type(exc).__name__}: {exc}") from exc
        if not isinstance(result, str):
            raise PluginSymbolError(
                f"Plugin function '{symbol}' returned {type(result).__name__}, expected str")
        return result
