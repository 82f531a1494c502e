#!/usr/bin/env python3
# dragon/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: startup pipeline with [  OK  ] / [FAILED] lines.
- BootState: configuration, logger and the ShellContext for the session.
"""


from .boot import BootState, boot_sequence

__all__ = ["boot_sequence", "BootState"]
