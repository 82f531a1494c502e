#!/usr/bin/env python3
# dragon/commands/__init__.py
from __future__ import annotations

"""
Package for built-in command management.

Provides:
- Data structures (`Builtin`, `Command`, `CommandResult`, `ShellContext`).
- Registry and decorator (`BUILTINS`, `builtin`).

Handlers live in `dragon.commands.builtins`; importing that module fills
BUILTINS. The dispatcher does so, this package does not (it is imported by
lower layers that the handlers themselves depend on).
"""

from .command_types import Builtin, BuiltinCallback, Command, CommandResult, ShellContext
from .commands import BUILTINS, BuiltinRegistry, builtin

__all__ = [
    "Builtin",
    "BuiltinCallback",
    "Command",
    "CommandResult",
    "ShellContext",
    "BUILTINS",
    "BuiltinRegistry",
    "builtin",
]
