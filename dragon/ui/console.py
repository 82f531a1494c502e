#!/usr/bin/env python3
# dragon/ui/console.py
from __future__ import annotations

import sys
from typing import TextIO


def print_line(text: str = "", *, file: TextIO | None = None, flush: bool = False) -> None:
    """Write one line of output to `file` (stdout by default)."""
    stream = file if file is not None else sys.stdout
    stream.write(f"{text}\n")
    if flush:
        stream.flush()


def print_error(text: str, *, file: TextIO | None = None) -> None:
    """Write one line to the diagnostic stream (stderr by default)."""
    print_line(text, file=file if file is not None else sys.stderr, flush=True)
