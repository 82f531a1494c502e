#!/usr/bin/env python3
# dragon/system/environment.py
from __future__ import annotations

"""
Explicit shell environment.

The shell never mutates os.environ, and `cd` never calls os.chdir. Built-ins
and the process launcher read and update an Environment instance instead;
the real process state is only read once, to seed it. Plugin calls are the
one place the process directory follows `cwd`, and only for the call.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping


@dataclass(slots=True)
class Environment:
    """Working directory and variables handed to built-ins and child processes."""

    cwd: Path
    variables: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_process(cls, overrides: Mapping[str, str] | None = None) -> "Environment":
        """Snapshot the current process, then apply `overrides` (config env entries)."""
        variables = dict(os.environ)
        variables.update(overrides or {})
        return cls(cwd=Path.cwd(), variables=variables)

    def resolve(self, path: str | os.PathLike[str]) -> Path:
        """Resolve `path` against the shell working directory (`~` expanded)."""
        candidate = Path(os.path.expanduser(os.fspath(path)))
        if not candidate.is_absolute():
            candidate = self.cwd / candidate
        return candidate

    def chdir(self, path: str | os.PathLike[str]) -> Path:
        """
        Change the working directory; raises OSError and leaves cwd untouched
        when `path` is missing, not a directory or not accessible.
        """
        target = self.resolve(path)
        if not target.exists():
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        if not target.is_dir():
            raise NotADirectoryError(f"Not a directory: '{path}'")
        if not os.access(target, os.X_OK):
            raise PermissionError(f"Permission denied: '{path}'")
        self.cwd = target.resolve()
        self.variables["PWD"] = str(self.cwd)
        return self.cwd

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.variables.get(key, default)

    def set(self, key: str, value: str) -> None:
        self.variables[key] = value
