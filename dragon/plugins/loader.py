#!/usr/bin/env python3
# dragon/plugins/loader.py
from __future__ import annotations

"""
Plugin module import and entry-point binding.

Features:
- Imports a plugin from a file path: Python source, or a compiled extension
  module (the loader is chosen from the file suffix).
- A directory path is treated as a package and its __init__.py is imported.
- Entry points are checked against the plugin ABI before they are called:
  `def name(args: list[str]) -> str`, plus an optional DRAGON_PLUGIN_API
  version marker on the module.
"""

import hashlib
import importlib.machinery
import importlib.util
import inspect
import sys
from pathlib import Path
from types import ModuleType
from typing import Callable, Sequence

from dragon.errors import PluginLoadError, PluginSymbolError

PLUGIN_API_VERSION = 1
ENTRY_POINT = "plugin_main"

PluginFunction = Callable[[list[str]], str]


def module_name_for(path: Path) -> str:
    """Unique, import-safe module name derived from the resolved path."""
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    stem = "".join(ch if ch.isalnum() else "_" for ch in path.stem)
    return f"dragon_plugin_{stem}_{digest}"


def _is_extension(target: Path) -> bool:
    return any(target.name.endswith(suffix)
               for suffix in importlib.machinery.EXTENSION_SUFFIXES)


def import_plugin(path: Path) -> ModuleType:
    """
    Import the module at `path` under a private name.

    Raises PluginLoadError when the file is missing, is not an importable
    module, or raises while executing its top level.
    """
    target = path / "__init__.py" if path.is_dir() else path
    if not target.is_file():
        raise PluginLoadError(f"No such plugin file: {path}")

    name = module_name_for(path)
    if _is_extension(target):
        # Extension modules must keep the name their init function was built for.
        name = target.name.split(".")[0]
        if name in sys.modules:
            raise PluginLoadError(
                f"Cannot load {path}: module name '{name}' is already in use")
    spec = importlib.util.spec_from_file_location(
        name,
        target,
        submodule_search_locations=[str(path)] if path.is_dir() else None,
    )
    if spec is None or spec.loader is None:
        raise PluginLoadError(f"Not a loadable module: {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(name, None)
        raise PluginLoadError(
            f"Failed to load plugin {path}: {type(exc).__name__}: {exc}") from exc
    return module


def _check_api_version(module: ModuleType) -> None:
    declared = getattr(module, "DRAGON_PLUGIN_API", PLUGIN_API_VERSION)
    if declared != PLUGIN_API_VERSION:
        raise PluginSymbolError(
            f"Plugin declares API version {declared!r}, shell supports {PLUGIN_API_VERSION}")


def _accepts_single_argument(func: Callable[..., object]) -> bool:
    """True when `func` can be called with exactly one positional argument."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # No introspectable signature (some C functions); trust the call.
        return True
    try:
        signature.bind(["probe"])
    except TypeError:
        return False
    return True


def bind_entry_point(module: ModuleType, symbol: str) -> PluginFunction:
    """
    Look up `symbol` on the plugin and validate it against the ABI.

    Raises PluginSymbolError for a missing, non-callable or mis-typed symbol.
    """
    _check_api_version(module)
    if symbol.startswith("_"):
        raise PluginSymbolError(f"Function '{symbol}' is private")
    func = getattr(module, symbol, None)
    if func is None:
        raise PluginSymbolError(f"Failed to find the plugin function: {symbol}")
    if not callable(func):
        raise PluginSymbolError(f"Plugin attribute '{symbol}' is not callable")
    if not _accepts_single_argument(func):
        raise PluginSymbolError(
            f"Plugin function '{symbol}' must accept a single argument list")
    return func


def call_entry_point(func: PluginFunction, args: Sequence[str]) -> object:
    """Invoke a bound entry point with a fresh list of argument strings."""
    return func(list(args))
