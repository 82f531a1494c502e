#!/usr/bin/env python3
# dragon/system/__init__.py
from __future__ import annotations

"""
Operating-system facing pieces of the shell.

Provides:
- `Environment`: explicit working directory + variables.
- `spawn`: run an external command with inherited standard streams.
- `terminate_process`: forced kill by PID (used by the `kill` built-in).
"""

from .environment import Environment
from .launcher import spawn
from .process import terminate_process

__all__ = ["Environment", "spawn", "terminate_process"]
