#!/usr/bin/env python3
# dragon/interface/parser.py
from __future__ import annotations

"""
Command line tokenizing.

Lines are split on runs of whitespace only. There are no quoting, escaping
or variable expansion rules: `echo "a b"` yields the tokens '"a' and 'b"'.
"""


def tokenize(command_line: str) -> list[str]:
    """Split a raw command line into whitespace-delimited tokens."""
    return command_line.split()

