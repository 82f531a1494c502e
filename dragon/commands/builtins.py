#!/usr/bin/env python3
# dragon/commands/builtins.py
from __future__ import annotations

"""
Built-in command handlers.

Every handler takes (context, args) and returns a CommandResult or plain
text. Handlers never raise for user errors; they return ok=False results.
"""

import contextlib
from datetime import datetime
from typing import Sequence

from dragon import SHELL_NAME, __version__
from dragon.errors import PluginCallError, PluginSymbolError
from dragon.plugins import LoadedPlugin
from dragon.system import Environment, terminate_process
from dragon.ui import format_table

from .command_types import Builtin, CommandResult, ShellContext
from .commands import BUILTINS, builtin

# Non-builtin verbs handled by the dispatcher, listed in d-help.
DISPATCH_VERBS: tuple[tuple[str, str], ...] = (
    ("run <script_path> [args...]", "Run a script, appending args to every line."),
    ("plugin <plugin_path> [args...]", "Load a plugin and call its plugin_main."),
    ("exit", "Leave the shell."),
)

LF_HEADERS = ("File Name", "Size (bytes)", "Modified Date")


# -------------------------- helpers --------------------------

def _usage(kind: Builtin) -> CommandResult:
    command_obj = BUILTINS.get(kind.value)
    usage = command_obj.usage if command_obj else kind.value
    return CommandResult(False, f"Usage: {usage}")


def _format_mtime(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M")


def list_files_in_directory(environment: Environment, path: str = ".") -> CommandResult:
    """
    Render a File Name / Size (bytes) / Modified Date table for `path`.

    Entries are sorted by name so listing an unchanged directory twice gives
    identical output.
    """
    directory = environment.resolve(path)
    if not directory.is_dir():
        return CommandResult(False, f"Error: '{path}' is not a valid directory")

    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        return CommandResult(False, f"Error reading directory '{path}': {exc}")

    rows = []
    for entry in entries:
        try:
            stat = entry.stat()
        except OSError:
            # Dangling symlink: describe the link itself.
            stat = entry.lstat()
        rows.append([entry.name, stat.st_size, _format_mtime(stat.st_mtime)])

    return CommandResult(True, format_table(rows, headers=LF_HEADERS, align_right=(1,)))


def select_plugin(context: ShellContext, selector: str) -> LoadedPlugin | None:
    """
    Find a loaded plugin by the path it was loaded from, else by id or path
    fragment. Paths are resolved against the shell working directory.
    """
    by_path = context.plugins.find_by_path(
        context.environment.resolve(selector).resolve())
    return by_path or context.plugins.find(selector)


def invoke_plugin(context: ShellContext, plugin: LoadedPlugin, symbol: str,
                  args: Sequence[str]) -> CommandResult:
    """
    Call `symbol` on a loaded plugin and turn plugin errors into results.

    The process working directory follows the shell one for the duration of
    the call, so relative paths inside the plugin match `cd`.
    """
    try:
        with contextlib.chdir(context.environment.cwd):
            output = context.plugins.resolve_and_call(plugin, symbol, args)
    except OSError as exc:
        return CommandResult(
            False, f"Error: cannot enter {context.environment.cwd}: {exc}", data=plugin)
    except PluginSymbolError as exc:
        return CommandResult(False, f"Error: {exc}", data=plugin)
    except PluginCallError as exc:
        return CommandResult(False, f"Error: {exc}", data=plugin)
    return CommandResult(True, output, data=plugin)


# ----------------------- informational -----------------------

@builtin(Builtin.ALIAS, usage="alias")
def alias_list(context: ShellContext, args: Sequence[str]) -> str:
    """List configured aliases as 'name -> command'."""
    return "\n".join(f"{name} -> {command}" for name, command in context.aliases.items())


@builtin(Builtin.HELP, usage="d-help")
def shell_help(context: ShellContext, args: Sequence[str]) -> str:
    """Show the available commands."""
    rows = [[c.usage, c.description] for c in BUILTINS.all()]
    rows.extend([usage, description] for usage, description in DISPATCH_VERBS)
    table = format_table(rows, headers=["Command", "Description"])
    return (
        f"Welcome to {SHELL_NAME}! Anything else is run as an external program.\n"
        f"{table}"
    )


@builtin(Builtin.VERSION, usage="d-version")
def shell_version(context: ShellContext, args: Sequence[str]) -> str:
    """Show the shell version."""
    return f"{SHELL_NAME} v{__version__}"


@builtin(Builtin.ECHO, usage="echo [text...]")
def echo(context: ShellContext, args: Sequence[str]) -> str:
    """Print the arguments separated by single spaces."""
    return " ".join(args)


# ----------------------- filesystem / processes -----------------------

@builtin(Builtin.CD, usage="cd <path>")
def change_directory(context: ShellContext, args: Sequence[str]) -> CommandResult:
    """Change the shell working directory."""
    if not args:
        return _usage(Builtin.CD)
    try:
        new_cwd = context.environment.chdir(args[0])
    except OSError as exc:
        return CommandResult(False, f"Error changing directory: {exc}")
    return CommandResult(True, f"Changed directory to {new_cwd}", data=new_cwd)


@builtin(Builtin.LF, usage="lf [path]")
def list_files(context: ShellContext, args: Sequence[str]) -> CommandResult:
    """List directory entries with size and modification date."""
    return list_files_in_directory(context.environment, args[0] if args else ".")


@builtin(Builtin.KILL, usage="kill <pid>")
def kill(context: ShellContext, args: Sequence[str]) -> CommandResult:
    """Forcefully terminate a process by PID."""
    if not args:
        return _usage(Builtin.KILL)
    return terminate_process(args[0])


# ----------------------- plugins -----------------------

@builtin(Builtin.PLUGIN_LIST, usage="plugin-list")
def plugin_list(context: ShellContext, args: Sequence[str]) -> str:
    """List loaded plugins."""
    rows = [[p.id, p.display, "Yes"] for p in context.plugins.list()]
    return format_table(rows, headers=["ID", "Plugin Path", "Loaded"])


@builtin(Builtin.PLUGIN_UNLOAD, usage="plugin-unload <id|plugin_path>")
def plugin_unload(context: ShellContext, args: Sequence[str]) -> CommandResult:
    """Unload the first plugin matching an id or path fragment."""
    if not args:
        return _usage(Builtin.PLUGIN_UNLOAD)
    removed = select_plugin(context, args[0])
    if removed is None:
        return CommandResult(False, f"Plugin {args[0]} not found")
    context.plugins.discard(removed)
    return CommandResult(True, f"Unloaded plugin: {removed.display}", data=removed)


@builtin(Builtin.PLUGIN_CALL, usage="plugin-call <id|plugin_path> <function> [args...]")
def plugin_call(context: ShellContext, args: Sequence[str]) -> CommandResult:
    """Call a named function of an already loaded plugin."""
    if len(args) < 2:
        return _usage(Builtin.PLUGIN_CALL)
    selector, symbol, *rest = args
    plugin = select_plugin(context, selector)
    if plugin is None:
        return CommandResult(False, f"Plugin {selector} not found")
    return invoke_plugin(context, plugin, symbol, rest)

