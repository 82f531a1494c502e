from __future__ import annotations

import os
from pathlib import Path

import pytest

from dragon.errors import SpawnError
from dragon.system import Environment, spawn


def test_from_process_applies_overrides_without_touching_os_environ(monkeypatch) -> None:
    monkeypatch.delenv("DRAGON_ONLY_IN_SHELL", raising=False)

    environment = Environment.from_process({"DRAGON_ONLY_IN_SHELL": "yes"})

    assert environment.get("DRAGON_ONLY_IN_SHELL") == "yes"
    assert "DRAGON_ONLY_IN_SHELL" not in os.environ
    assert environment.cwd == Path.cwd()


def test_chdir_does_not_change_process_directory(environment: Environment, tmp_path: Path) -> None:
    (tmp_path / "inner").mkdir()
    before = os.getcwd()

    environment.chdir("inner")

    assert os.getcwd() == before
    assert environment.variables["PWD"] == str((tmp_path / "inner").resolve())


def test_chdir_failure_keeps_cwd(environment: Environment, tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        environment.chdir("missing")
    assert environment.cwd == tmp_path


def test_spawn_missing_program_raises(environment: Environment) -> None:
    with pytest.raises(SpawnError):
        spawn("dragon-no-such-program-xyz", [], environment)
    with pytest.raises(SpawnError):
        spawn("./not-here", [], environment)
    with pytest.raises(SpawnError):
        spawn("", [], environment)
