#!/usr/bin/env python3
# dragon/errors.py
from __future__ import annotations

"""
Exception types raised by the shell core.

Only ConfigError and HistorySetupError are allowed to escape the REPL;
everything else is turned into a printable message by the dispatcher.
"""


class DragonError(Exception):
    """Base class for shell errors."""


class ConfigError(DragonError):
    """Configuration file exists but cannot be read, parsed or validated."""


class HistorySetupError(DragonError):
    """History file could not be prepared for the line editor."""


class ScriptError(DragonError, OSError):
    """Script file could not be opened."""


class PluginLoadError(DragonError):
    """A plugin module could not be imported."""


class PluginSymbolError(DragonError):
    """Missing or incompatible plugin entry point."""


class PluginCallError(DragonError):
    """A plugin entry point raised while running."""


class SpawnError(DragonError, OSError):
    """External command could not be found or launched."""
