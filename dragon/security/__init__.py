#!/usr/bin/env python3
# dragon/security/__init__.py
from __future__ import annotations

"""
Input hardening applied before a line is tokenized.

Provides:
- `sanitize_input`: removes ';', '&' and '||' from a raw line.
"""

from .sanitize import CHAINING_SEQUENCES, sanitize_input

__all__ = ["CHAINING_SEQUENCES", "sanitize_input"]
