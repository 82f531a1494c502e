#!/usr/bin/env python3
# dragon/interface/handler.py
from __future__ import annotations

"""
Command dispatch.

Resolution order, first match wins:
  1) built-in (exact name, see dragon.commands.Builtin)
  2) alias from the Alias Table, expanded once and dispatched again
  3) run <script> [args...]
  4) plugin <path> [args...]
  5) external program
The `exit` sentinel is handled by the REPL before dispatch is reached.
"""

import logging
from typing import Sequence

from dragon.commands import BUILTINS, CommandResult, ShellContext
from dragon.commands.builtins import invoke_plugin
from dragon.errors import PluginLoadError, ScriptError, SpawnError
from dragon.plugins import ENTRY_POINT
from dragon.security import sanitize_input
from dragon.system import spawn

from .parser import tokenize

logger = logging.getLogger(__name__)

RUN_COMMAND = "run"
PLUGIN_COMMAND = "plugin"
EXIT_COMMAND = "exit"

# ---------------------------------------------------------------------------
# Resolution steps
# ---------------------------------------------------------------------------


def handle_builtin(command: str, args: Sequence[str], context: ShellContext) -> CommandResult | None:
    """
    Run `command` if it names a built-in.

    Returns None when there is no such built-in, signalling the caller to try
    the next resolution step.
    """
    command_obj = BUILTINS.get(command)
    if command_obj is None:
        return None
    try:
        return command_obj.invoke(context, args)
    except Exception as exc:
        logger.debug("built-in %s raised", command, exc_info=True)
        return CommandResult(False, f"[error] {type(exc).__name__}: {exc}")


def expand_alias(command: str, args: Sequence[str], aliases: dict[str, str]) -> list[str] | None:
    """Return the alias replacement tokens followed by `args`, or None."""
    replacement = aliases.get(command)
    if replacement is None:
        return None
    return [*tokenize(sanitize_input(replacement)), *args]


def run_script_command(args: Sequence[str], context: ShellContext) -> CommandResult:
    """`run <script> [args...]`"""
    # Imported here: the script runner re-enters dispatch().
    from .script import run_script

    if not args:
        return CommandResult(False, f"Usage: {RUN_COMMAND} <script_path> [args...]")
    try:
        report = run_script(args[0], args[1:], context)
    except ScriptError as exc:
        return CommandResult(False, f"Error running script: {exc}")
    return CommandResult(report.failed == 0, "", data=report)


def run_plugin_command(args: Sequence[str], context: ShellContext) -> CommandResult:
    """`plugin <path> [args...]`: load, then call plugin_main(args)."""
    if not args:
        return CommandResult(False, f"Usage: {PLUGIN_COMMAND} <plugin_path> [args...]")
    plugin_path = args[0]
    try:
        plugin = context.plugins.load(context.environment.resolve(plugin_path))
    except PluginLoadError as exc:
        return CommandResult(False, f"Failed to load plugin: {plugin_path} ({exc})")
    return invoke_plugin(context, plugin, ENTRY_POINT, args[1:])


def run_external(command: str, args: Sequence[str], context: ShellContext) -> CommandResult:
    """Hand the command to the OS; its output goes straight to the terminal."""
    try:
        exit_code = spawn(command, args, context.environment)
    except SpawnError as exc:
        return CommandResult(False, f"Error executing command '{command}': {exc}")
    return CommandResult(True, "", data=exit_code)


# ---------------------------------------------------------------------------
# Core execution
# ---------------------------------------------------------------------------


def dispatch(
    command: str,
    args: Sequence[str],
    context: ShellContext,
    *,
    expand_aliases: bool = True,
) -> CommandResult:
    """
    Resolve and run one command.

    Never raises for command failures: every failure comes back as a
    CommandResult with ok=False and a printable message.
    """
    if not command:
        return CommandResult(True, "")

    result = handle_builtin(command, args, context)
    if result is not None:
        return result

    if expand_aliases:
        expanded = expand_alias(command, args, context.aliases)
        if expanded is not None:
            if not expanded:
                return CommandResult(False, f"Alias '{command}' expands to an empty command")
            logger.debug("alias %s -> %s", command, expanded)
            # Single pass: an alias cannot expand into another alias.
            return dispatch(expanded[0], expanded[1:], context, expand_aliases=False)

    if command == RUN_COMMAND:
        return run_script_command(args, context)

    if command == PLUGIN_COMMAND:
        return run_plugin_command(args, context)

    return run_external(command, args, context)


def handle_line(input_line: str, context: ShellContext) -> CommandResult:
    """Sanitize, tokenize and dispatch one raw line."""
    tokens = tokenize(sanitize_input(input_line))
    if not tokens:
        return CommandResult(True, "")
    return dispatch(tokens[0], tokens[1:], context)
