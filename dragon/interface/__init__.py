#!/usr/bin/env python3
# dragon/interface/__init__.py
from __future__ import annotations

"""
Package for the interactive console and command dispatch.

Provides:
- Tokenizing (`tokenize`).
- The dispatcher (`dispatch`, `handle_builtin`, `handle_line`).
- The script runner (`run_script`, `ScriptReport`).
- Completion helpers and CLI frontends (prompt_toolkit / readline / plain).
- The REPL loop (`Repl`, `ReplState`).
"""


# Parser first (handler depends on it)
from .parser import tokenize

# Dispatcher
from .handler import (
    EXIT_COMMAND,
    PLUGIN_COMMAND,
    RUN_COMMAND,
    dispatch,
    expand_alias,
    handle_builtin,
    handle_line,
)

# Script runner
from .script import MAX_SCRIPT_DEPTH, ScriptReport, run_script

# Completion before cli (cli depends on it)
from .completion import suggest, command_names

# CLI frontends
from .cli import BaseCLI, PlainCLI, PromptToolkitCLI, ReadlineCLI, make_cli, prepare_history_file

# REPL
from .repl import Repl, ReplState

__all__ = [
    # parser
    "tokenize",
    # handler
    "EXIT_COMMAND",
    "PLUGIN_COMMAND",
    "RUN_COMMAND",
    "dispatch",
    "expand_alias",
    "handle_builtin",
    "handle_line",
    # script
    "MAX_SCRIPT_DEPTH",
    "ScriptReport",
    "run_script",
    # completion
    "suggest",
    "command_names",
    # cli
    "BaseCLI",
    "PlainCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "make_cli",
    "prepare_history_file",
    # repl
    "Repl",
    "ReplState",
]
