#!/usr/bin/env python3
# dragon/interface/completion.py
from __future__ import annotations

"""
Command line completion utilities.

Suggestions offered:
- First token: built-in names, dispatcher verbs (run, plugin, exit) and aliases.
- Any token starting with '$': environment variable names.
"""

from typing import Iterable

from dragon.commands import Builtin, ShellContext

from .handler import EXIT_COMMAND, PLUGIN_COMMAND, RUN_COMMAND

# Verbs always available besides the Builtin variants
DISPATCH_COMMANDS: tuple[str, ...] = (RUN_COMMAND, PLUGIN_COMMAND, EXIT_COMMAND)


def split_current_token(raw_input: str) -> tuple[list[str], str]:
    """
    Return (parts, current_prefix).

    Trailing whitespace means a new, still empty token is being typed.
    """
    parts = raw_input.split()
    if not raw_input or raw_input[-1].isspace():
        parts.append("")
    return parts, parts[-1]


def _complete_env_var(prefix: str, variables: Iterable[str]) -> list[str]:
    """`prefix` includes the leading '$'."""
    wanted = prefix[1:]
    return sorted(f"${key}" for key in variables if key.startswith(wanted))


def command_names(context: ShellContext) -> list[str]:
    return sorted({*(b.value for b in Builtin), *DISPATCH_COMMANDS, *context.aliases})


def suggest(text_before_cursor: str, context: ShellContext) -> list[str]:
    """Produce suggestions for the token under the cursor."""
    parts, current_prefix = split_current_token(text_before_cursor.lstrip())

    if current_prefix.startswith("$"):
        return _complete_env_var(current_prefix, context.environment.variables)

    if len(parts) <= 1:
        return [name for name in command_names(context) if name.startswith(current_prefix)]

    return []
