#!/usr/bin/env python3
# dragon/commands/commands.py
from __future__ import annotations

"""
Built-in registry and decorator utilities.

This module provides:
- BuiltinRegistry: one handler per Builtin variant.
- builtin: decorator registering a function as the handler of a variant.
"""

from typing import Callable, Dict, Optional

from .command_types import Builtin, BuiltinCallback, Command


class BuiltinRegistry:
    """Holds the handler of every Builtin variant."""

    def __init__(self) -> None:
        self._commands: Dict[Builtin, Command] = {}

    def register(self, command_obj: Command) -> None:
        """Register a handler, refusing a second one for the same variant."""
        if command_obj.kind in self._commands:
            raise ValueError(
                f"Built-in '{command_obj.name}' already registered.")
        self._commands[command_obj.kind] = command_obj

    def get(self, name: str) -> Optional[Command]:
        """Return the handler for an exact command name, or None."""
        kind = Builtin.lookup(name)
        if kind is None:
            return None
        return self._commands.get(kind)

    def all(self) -> list[Command]:
        """Handlers in Builtin declaration order."""
        return [self._commands[k] for k in Builtin if k in self._commands]

    def names(self) -> list[str]:
        return [c.name for c in self.all()]


# Global registry used across the app
BUILTINS = BuiltinRegistry()


def builtin(
    kind: Builtin,
    *,
    usage: str | None = None,
    description: str | None = None,
) -> Callable[[BuiltinCallback], BuiltinCallback]:
    """
    Decorator to register a function as the handler of `kind`.

    `description` defaults to the first line of the function docstring.
    """

    def wrapper(func: BuiltinCallback) -> BuiltinCallback:
        doc = (func.__doc__ or "").strip().splitlines()
        BUILTINS.register(
            Command(
                kind=kind,
                description=description or (doc[0] if doc else ""),
                usage=usage or kind.value,
                callback=func,
            )
        )
        return func

    return wrapper
