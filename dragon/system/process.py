#!/usr/bin/env python3
# dragon/system/process.py
from __future__ import annotations

import os
import signal
import subprocess

from dragon.commands import CommandResult


def _parse_pid(pid_text: str) -> int:
    pid = int(pid_text)
    if pid <= 0:
        raise ValueError(f"invalid pid: {pid_text}")
    return pid


def terminate_process(pid_text: str) -> CommandResult:
    """
    Forcefully terminate a process by PID.

    Windows: `taskkill /PID <pid> /F`; elsewhere SIGKILL. Never raises.
    """
    try:
        pid = _parse_pid(pid_text)
    except ValueError:
        return CommandResult(False, f"Error: '{pid_text}' is not a valid process id")

    if os.name == "nt":
        try:
            completed = subprocess.run(
                ["taskkill", "/PID", str(pid), "/F"],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            return CommandResult(False, f"Failed to terminate process: {exc}")
        if completed.returncode != 0:
            return CommandResult(
                False, f"Error terminating process {pid}: non-zero exit status")
        return CommandResult(True, f"Process {pid} terminated")

    try:
        os.kill(pid, signal.SIGKILL)
    except OverflowError:
        return CommandResult(False, f"Error: '{pid_text}' is not a valid process id")
    except ProcessLookupError:
        return CommandResult(False, f"Error terminating process {pid}: no such process")
    except PermissionError:
        return CommandResult(False, f"Error terminating process {pid}: permission denied")
    except OSError as exc:
        return CommandResult(False, f"Failed to terminate process: {exc}")
    return CommandResult(True, f"Process {pid} terminated")
