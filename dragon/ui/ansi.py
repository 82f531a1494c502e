#!/usr/bin/env python3
# dragon/ui/ansi.py
from __future__ import annotations

import ctypes
import os
import re
from typing import Optional

# ---- SGR map ----------------------------------------------------------------

ANSI = {
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "underline": "\x1b[4m",

    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",

    "bright_black": "\x1b[90m",
    "bright_red": "\x1b[91m",
    "bright_green": "\x1b[92m",
    "bright_yellow": "\x1b[93m",
    "bright_blue": "\x1b[94m",
    "bright_magenta": "\x1b[95m",
    "bright_cyan": "\x1b[96m",
}

# Prompt/banner accent colour per configured theme. Unknown themes render plain.
THEME_ACCENTS: dict[str, str | None] = {
    "dark": "bright_red",
    "light": "blue",
    "ocean": "cyan",
    "forest": "green",
    "plain": None,
}

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

_vt_enabled_cache: Optional[bool] = None


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def enable_windows_vt() -> bool:
    """
    Enable ANSI (VT) processing on Windows consoles when possible.
    Returns True if ANSI escapes should work on the current process.
    On non-Windows systems, always returns True.
    """
    global _vt_enabled_cache
    if _vt_enabled_cache is not None:
        return _vt_enabled_cache

    if os.name != "nt":
        _vt_enabled_cache = True
        return True

    if (
        os.environ.get("WT_SESSION")
        or os.environ.get("ANSICON")
        or os.environ.get("ConEmuANSI") == "ON"
        or os.environ.get("TERM", "").startswith(("xterm", "vt100"))
    ):
        _vt_enabled_cache = True
        return True

    try:
        kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
        ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004
        STD_OUTPUT_HANDLE = -11

        handle = kernel32.GetStdHandle(STD_OUTPUT_HANDLE)
        mode = ctypes.c_uint()
        if handle in (0, -1) or not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            _vt_enabled_cache = False
        else:
            new_mode = mode.value | ENABLE_VIRTUAL_TERMINAL_PROCESSING
            _vt_enabled_cache = bool(kernel32.SetConsoleMode(handle, new_mode))
    except Exception:
        _vt_enabled_cache = False

    return _vt_enabled_cache


def colorize(text: str, *styles: str | None) -> str:
    """
    Wrap text with one or more SGR keys from ANSI (e.g. 'red', 'bold').
    Unknown or None keys are ignored; always auto-resets at the end.
    """
    seq = "".join(ANSI[s] for s in styles if s and s in ANSI)
    return f"{seq}{text}{ANSI['reset']}" if seq else text


def theme_accent(theme: str) -> str | None:
    """Return the ANSI key used to accent the prompt for `theme`."""
    return THEME_ACCENTS.get(theme.strip().lower())
