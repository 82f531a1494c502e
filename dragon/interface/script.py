#!/usr/bin/env python3
# dragon/interface/script.py
from __future__ import annotations

"""
Script runner.

A script is plain text with one command per line. Lines run top to bottom
through the normal dispatcher; the script's own arguments are appended to
every line. A failing line is reported and the next line still runs. There
are no comments, variables or control flow.
"""

import logging
import os
from dataclasses import dataclass
from typing import Sequence

from dragon.commands import ShellContext
from dragon.errors import ScriptError
from dragon.security import sanitize_input
from dragon.ui import print_line

from .handler import dispatch
from .parser import tokenize

logger = logging.getLogger(__name__)

# Guards against scripts that `run` themselves.
MAX_SCRIPT_DEPTH = 16


@dataclass(slots=True)
class ScriptReport:
    """Per-line outcome counts; succeeded + failed + skipped == total."""

    path: str
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0


def run_script(
    path: str | os.PathLike[str],
    script_args: Sequence[str],
    context: ShellContext,
) -> ScriptReport:
    """
    Execute every line of the script at `path`.

    Raises ScriptError before any line runs if the file cannot be opened.
    Blank lines are counted as skipped.
    """
    if context.script_depth >= MAX_SCRIPT_DEPTH:
        raise ScriptError(f"script nesting deeper than {MAX_SCRIPT_DEPTH} levels: {path}")

    script_path = context.environment.resolve(path)
    try:
        handle = open(script_path, "r", encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ScriptError(f"{path}: {exc.strerror or exc}") from exc

    report = ScriptReport(path=str(script_path))
    context.script_depth += 1
    try:
        with handle:
            for line_number, raw_line in enumerate(handle, start=1):
                report.total += 1
                tokens = tokenize(sanitize_input(raw_line))
                if not tokens:
                    report.skipped += 1
                    continue

                command, line_args = tokens[0], [*tokens[1:], *script_args]
                result = dispatch(command, line_args, context)

                if result.ok:
                    report.succeeded += 1
                    if result.message:
                        print_line(result.message)
                else:
                    report.failed += 1
                    logger.error("%s:%d: %s", path, line_number,
                                 result.message or f"'{command}' failed")
    finally:
        context.script_depth -= 1

    logger.debug("script %s: %d ok, %d failed, %d skipped",
                 path, report.succeeded, report.failed, report.skipped)
    return report
