#!/usr/bin/env python3
# dragon/__main__.py
from __future__ import annotations
"""
Entry point: `python -m dragon [--config FILE] [script [args...]]`.

Without a script an interactive session starts. With a script, its lines run
non-interactively and the exit status is 1 if any line failed.
"""

import argparse
import sys
from typing import Optional, Sequence

from dragon import SHELL_NAME, __version__
from dragon.boot import boot_sequence
from dragon.errors import ConfigError, HistorySetupError, ScriptError
from dragon.interface import PlainCLI, Repl, make_cli, run_script, suggest
from dragon.ui import colorize, print_error, print_line, theme_accent


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dragon", description=f"{SHELL_NAME} command shell")
    parser.add_argument("--config", help="path to dragon-config.toml")
    parser.add_argument("--quiet", action="store_true", help="hide boot step output")
    parser.add_argument("--version", action="version", version=f"{SHELL_NAME} v{__version__}")
    parser.add_argument("script", nargs="?", help="run this script and exit")
    parser.add_argument("script_args", nargs=argparse.REMAINDER,
                        help="arguments appended to every script line")
    return parser


def _prompt_toolkit_style(accent: str | None) -> str | None:
    return f"ansi{accent.replace('_', '')}" if accent else None


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    interactive = args.script is None

    try:
        state = boot_sequence(args.config, interactive=interactive,
                              quiet=args.quiet or not interactive)
    except (ConfigError, HistorySetupError) as exc:
        print_error(str(exc))
        return 1

    context = state.context

    if not interactive:
        try:
            report = run_script(args.script, args.script_args, context)
        except ScriptError as exc:
            print_error(f"Error running script: {exc}")
            return 1
        return 0 if report.failed == 0 else 1

    config = state.config
    accent = theme_accent(config.theme)
    prompt_text = f"{config.prompt}> "

    if sys.stdin.isatty():
        cli = make_cli(
            prompt_text,
            config.history_file,
            config.history_size,
            suggest=lambda text: suggest(text, context),
            style=_prompt_toolkit_style(accent),
        )
    else:
        cli = PlainCLI("")

    print_line(colorize(config.prompt, accent, "bold"))
    print_line(f"Welcome to {SHELL_NAME}!")

    try:
        with cli:
            Repl(cli, context).run()
    except HistorySetupError as exc:
        print_error(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
