#!/usr/bin/env python3
# dragon/security/sanitize.py
from __future__ import annotations

# Removed in this order. There is no escaping: a quoted ';' is dropped too.
CHAINING_SEQUENCES: tuple[str, ...] = (";", "&", "||")


def sanitize_input(raw: str) -> str:
    """
    Strip command-chaining characters from a raw input line.

    This only blocks trivial chaining like `ls; rm x` or `a && b`. It is not
    shell-injection hardening; external commands never go through a shell.
    """
    cleaned = raw
    for sequence in CHAINING_SEQUENCES:
        cleaned = cleaned.replace(sequence, "")
    return cleaned
