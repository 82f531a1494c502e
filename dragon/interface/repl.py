#!/usr/bin/env python3
# dragon/interface/repl.py
from __future__ import annotations

"""
Read-evaluate-print loop.

    READ_LINE -> SANITIZE -> TOKENIZE -> DISPATCH -> DISPLAY -> READ_LINE

Ctrl+C while waiting for input prints a notice and reads again; end of input,
the literal line `exit` or a broken input source stop the loop.
"""

import logging
from enum import Enum, auto
from typing import TextIO

from dragon.commands import CommandResult, ShellContext
from dragon.security import sanitize_input
from dragon.ui import print_line

from .cli import BaseCLI
from .handler import EXIT_COMMAND, dispatch
from .parser import tokenize

logger = logging.getLogger(__name__)


class ReplState(Enum):
    READ_LINE = auto()
    SANITIZE = auto()
    TOKENIZE = auto()
    DISPATCH = auto()
    DISPLAY = auto()
    STOPPED = auto()


class Repl:
    """Drives one interactive session over a CLI frontend."""

    def __init__(self, cli: BaseCLI, context: ShellContext, *, out: TextIO | None = None) -> None:
        self.cli = cli
        self.context = context
        self.out = out
        self.state = ReplState.READ_LINE
        self.last_result: CommandResult | None = None

    def _say(self, text: str) -> None:
        print_line(text, file=self.out, flush=True)

    def _read_line(self) -> str | None:
        try:
            line = self.cli.get_line()
        except KeyboardInterrupt:
            self._say("Received Ctrl+C, aborting...")
            return None
        except EOFError:
            self._say("Received Ctrl+D, exiting...")
            self.state = ReplState.STOPPED
            return None
        except Exception as exc:
            logger.debug("input source failed", exc_info=True)
            self._say(f"Error reading input: {type(exc).__name__}: {exc}")
            self.state = ReplState.STOPPED
            return None
        self.state = ReplState.SANITIZE
        return line

    def _dispatch(self, tokens: list[str]) -> CommandResult:
        try:
            return dispatch(tokens[0], tokens[1:], self.context)
        except KeyboardInterrupt:
            return CommandResult(False, "Interrupted.")

    def run(self) -> None:
        """Loop until a terminal condition is reached."""
        line = ""
        tokens: list[str] = []
        self.state = ReplState.READ_LINE

        while self.state is not ReplState.STOPPED:
            if self.state is ReplState.READ_LINE:
                read = self._read_line()
                if read is not None:
                    line = read

            elif self.state is ReplState.SANITIZE:
                line = sanitize_input(line.strip()).strip()
                if line == EXIT_COMMAND:
                    self._say("Goodbye!")
                    self.state = ReplState.STOPPED
                else:
                    self.state = ReplState.TOKENIZE

            elif self.state is ReplState.TOKENIZE:
                tokens = tokenize(line)
                self.state = ReplState.DISPATCH if tokens else ReplState.READ_LINE

            elif self.state is ReplState.DISPATCH:
                self.last_result = self._dispatch(tokens)
                self.state = ReplState.DISPLAY

            elif self.state is ReplState.DISPLAY:
                if self.last_result is not None and self.last_result.message:
                    self._say(self.last_result.message)
                self.state = ReplState.READ_LINE
