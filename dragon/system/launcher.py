#!/usr/bin/env python3
# dragon/system/launcher.py
from __future__ import annotations

"""
External process launcher.

Children inherit the shell's stdin/stdout/stderr (nothing is captured or
buffered by the shell) and run in the Environment's cwd with its variables.
The call blocks until the child exits; there is no timeout.
"""

import logging
import os
import shutil
import subprocess
from typing import Sequence

from dragon.errors import SpawnError
from .environment import Environment

logger = logging.getLogger(__name__)


def _locate(command: str, environment: Environment) -> str:
    """Find `command` on the environment's PATH, or relative to its cwd."""
    if os.sep in command or (os.altsep and os.altsep in command):
        candidate = environment.resolve(command)
        if candidate.is_file():
            return str(candidate)
        raise SpawnError(f"No such file or directory: '{command}'")
    found = shutil.which(command, path=environment.get("PATH", os.defpath))
    if found is None:
        raise SpawnError(f"command not found: '{command}'")
    return found


def spawn(command: str, args: Sequence[str], environment: Environment) -> int:
    """
    Run `command args...` as a native process and wait for it.

    Returns the exit code. A non-zero exit code is not an error; only a
    failure to find or start the executable raises SpawnError.
    """
    if not command:
        raise SpawnError("empty command")

    executable = _locate(command, environment)
    logger.debug("spawn %s %s (cwd=%s)", executable, list(args), environment.cwd)
    try:
        completed = subprocess.run(
            [executable, *args],
            cwd=str(environment.cwd),
            env=environment.variables,
            check=False,
        )
    except OSError as exc:
        raise SpawnError(f"failed to start '{command}': {exc}") from exc

    if completed.returncode != 0:
        logger.debug("'%s' exited with status %d", command, completed.returncode)
    return completed.returncode
