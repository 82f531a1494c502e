#!/usr/bin/env python3
# dragon/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .ansi import (
    ANSI,
    THEME_ACCENTS,
    strip_ansi,
    enable_windows_vt,
    colorize,
    theme_accent,
)
from .console import print_line, print_error
from .table import format_table
from .logging import init_logger, ColorizingStreamHandler, PlainFormatter

__all__ = [
    "ANSI",
    "THEME_ACCENTS",
    "strip_ansi",
    "enable_windows_vt",
    "colorize",
    "theme_accent",
    "print_line",
    "print_error",
    "format_table",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
