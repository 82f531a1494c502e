#!/usr/bin/env python3
# dragon/boot/boot.py
from __future__ import annotations
"""
Startup sequence for Dragon-shell.

Each step prints a Linux-style [  OK  ] / [FAILED] line. A failing step is
re-raised: ConfigError and HistorySetupError are fatal at startup.
"""

import logging
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from dragon.commands import ShellContext
from dragon.config import AppConfig, load_config
from dragon.interface import prepare_history_file
from dragon.plugins import PluginRegistry
from dragon.system import Environment
from dragon.ui import colorize, enable_windows_vt, init_logger, print_line


@dataclass(slots=True)
class BootState:
    config: AppConfig
    logger: logging.Logger
    context: ShellContext


def _step(label: str, fn: Callable[[], Any], *, quiet: bool = False) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red"))
        raise
    if not quiet:
        print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def boot_sequence(config_path: Optional[str | Path] = None, *,
                  interactive: bool = True, quiet: bool = False) -> BootState:
    """
    Load configuration, set up logging, build the environment and registry.

    The history file is only prepared for interactive sessions.
    """
    _step("Enable ANSI sequences", enable_windows_vt, quiet=quiet)
    _step(
        f"Detect environment: {platform.system()} {platform.release()} / Python {platform.python_version()}",
        lambda: None,
        quiet=quiet,
    )

    config: AppConfig = _step(
        "Load configuration", lambda: load_config(config_path), quiet=quiet)

    logger = _step(
        "Initialize logger",
        lambda: init_logger("dragon", level=config.log_level, logfile=config.log_file),
        quiet=quiet,
    )

    environment = _step(
        f"Apply environment ({len(config.env)} entries)",
        lambda: Environment.from_process(config.env),
        quiet=quiet,
    )
    _step(f"Load aliases ({len(config.aliases)} entries)", lambda: None, quiet=quiet)

    context = ShellContext(
        environment=environment,
        plugins=PluginRegistry(),
        aliases=dict(config.aliases),
    )

    if interactive:
        _step("Prepare history file",
              lambda: prepare_history_file(config.history_file), quiet=quiet)

    logger.debug("configuration loaded from %s", config.source)
    return BootState(config=config, logger=logger, context=context)
