#!/usr/bin/env python3
# dragon/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- Builtin: the tagged enumeration of built-in command names.
- CommandResult: normalized result of running any command.
- Command: a built-in variant bound to its handler and help metadata.
- ShellContext: the mutable session state every handler receives.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, Sequence, Union

if TYPE_CHECKING:
    from dragon.plugins import PluginRegistry
    from dragon.system import Environment


class Builtin(str, Enum):
    """Built-in commands, matched by exact name."""

    ALIAS = "alias"
    HELP = "d-help"
    VERSION = "d-version"
    ECHO = "echo"
    CD = "cd"
    LF = "lf"
    KILL = "kill"
    PLUGIN_LIST = "plugin-list"
    PLUGIN_UNLOAD = "plugin-unload"
    PLUGIN_CALL = "plugin-call"

    @classmethod
    def lookup(cls, name: str) -> "Builtin | None":
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(slots=True)
class CommandResult:
    """
    Normalized result container from command execution.

    Attributes:
        ok: True if the command completed successfully.
        message: Human-readable output; empty means nothing to print.
        data: Optional machine-readable payload (exit code, plugin entry...).
    """
    ok: bool = True
    message: str = ""
    data: Any = None

    def __str__(self) -> str:
        return self.message


class BuiltinCallback(Protocol):
    """Protocol for any built-in handler."""

    def __call__(self, context: "ShellContext", args: Sequence[str]) -> Union[CommandResult, str]:  # pragma: no cover - signature only
        ...


@dataclass(slots=True)
class Command:
    """
    A registered built-in with metadata and the handler that runs it.

    Fields:
        kind: The Builtin variant this handler serves.
        description: Short, user-facing description for d-help.
        usage: One-line usage string, also returned on missing arguments.
        callback: Function implementing the command.
    """

    kind: Builtin
    description: str
    usage: str
    callback: BuiltinCallback

    @property
    def name(self) -> str:
        return self.kind.value

    def invoke(self, context: "ShellContext", args: Sequence[str]) -> CommandResult:
        """Run the handler and normalize a plain string into a CommandResult."""
        result = self.callback(context, args)
        if isinstance(result, CommandResult):
            return result
        return CommandResult(True, "" if result is None else str(result))


@dataclass(slots=True)
class ShellContext:
    """
    Session state shared by the dispatcher, built-ins and the script runner.

    `aliases` is the read-only Alias Table; `plugins` and `environment` are
    mutated by built-ins. `script_depth` counts nested `run` invocations.
    """

    environment: "Environment"
    plugins: "PluginRegistry"
    aliases: dict[str, str] = field(default_factory=dict)
    script_depth: int = 0
