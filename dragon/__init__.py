#!/usr/bin/env python3
# dragon/__init__.py
from __future__ import annotations
"""
Dragon-shell package bootstrap.

Keep this module free of eager imports; subpackages expose their own APIs.
"""

__version__ = "1.0.0"
SHELL_NAME = "Dragon-shell"

__all__ = ["__version__", "SHELL_NAME"]
