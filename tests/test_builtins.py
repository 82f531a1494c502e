from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

from dragon import __version__
from dragon.commands import BUILTINS, Builtin, ShellContext
from dragon.interface import dispatch, handle_builtin


def run(context: ShellContext, line: str):
    command, *args = line.split()
    return dispatch(command, args, context)


def test_every_builtin_variant_has_a_handler() -> None:
    assert BUILTINS.names() == [b.value for b in Builtin]


def test_unknown_name_is_not_a_builtin(context: ShellContext) -> None:
    assert handle_builtin("no-such-builtin", [], context) is None


def test_echo_joins_arguments_with_single_spaces(context: ShellContext) -> None:
    result = run(context, "echo a b c")

    assert result.ok
    assert result.message == "a b c"


def test_echo_without_arguments_prints_nothing(context: ShellContext) -> None:
    assert run(context, "echo").message == ""


def test_alias_lists_one_line_per_alias(context: ShellContext) -> None:
    lines = run(context, "alias").message.splitlines()

    assert len(lines) == len(context.aliases)
    assert "ll -> lf ." in lines
    assert "greet -> echo hello" in lines


def test_alias_with_empty_table(context: ShellContext) -> None:
    context.aliases.clear()

    assert run(context, "alias").message == ""


def test_version_and_help(context: ShellContext) -> None:
    assert __version__ in run(context, "d-version").message

    help_text = run(context, "d-help").message
    for builtin_kind in Builtin:
        assert builtin_kind.value in help_text
    assert "run <script_path>" in help_text


# ----------------------------- cd -----------------------------

def test_cd_changes_shell_directory(context: ShellContext, tmp_path: Path) -> None:
    (tmp_path / "sub").mkdir()

    result = run(context, "cd sub")

    assert result.ok
    assert context.environment.cwd == (tmp_path / "sub").resolve()
    assert str((tmp_path / "sub").resolve()) in result.message


def test_cd_without_argument_returns_usage(context: ShellContext) -> None:
    result = run(context, "cd")

    assert not result.ok
    assert result.message.startswith("Usage: cd")


def test_cd_to_missing_path_leaves_directory_unchanged(context: ShellContext, tmp_path: Path) -> None:
    (tmp_path / "marker.txt").write_text("x", encoding="utf-8")
    before = run(context, "lf .").message

    result = run(context, "cd does-not-exist")

    assert not result.ok
    assert result.message.startswith("Error changing directory")
    assert context.environment.cwd == tmp_path
    assert run(context, "lf .").message == before
    assert "marker.txt" in before


def test_cd_to_a_file_is_an_error(context: ShellContext, tmp_path: Path) -> None:
    (tmp_path / "file.txt").write_text("x", encoding="utf-8")

    result = run(context, "cd file.txt")

    assert not result.ok
    assert context.environment.cwd == tmp_path


# ----------------------------- lf -----------------------------

def test_lf_lists_names_and_sizes(context: ShellContext, tmp_path: Path) -> None:
    (tmp_path / "b.txt").write_text("12345", encoding="utf-8")
    (tmp_path / "a.txt").write_text("", encoding="utf-8")

    result = run(context, "lf")
    text = result.message

    assert result.ok
    assert "File Name" in text and "Size (bytes)" in text and "Modified Date" in text
    assert text.index("a.txt") < text.index("b.txt")
    b_row = next(line for line in text.splitlines() if "b.txt" in line)
    assert "5" in b_row.split("|")[2]


def test_lf_is_idempotent(context: ShellContext, tmp_path: Path) -> None:
    for name in ("x", "y", "z"):
        (tmp_path / name).write_text(name, encoding="utf-8")

    assert run(context, "lf .").message == run(context, "lf .").message


def test_lf_on_invalid_directory_returns_error_text(context: ShellContext) -> None:
    result = run(context, "lf missing-dir")

    assert not result.ok
    assert result.message == "Error: 'missing-dir' is not a valid directory"


# ----------------------------- kill -----------------------------

def test_kill_without_pid_returns_usage(context: ShellContext) -> None:
    assert run(context, "kill").message.startswith("Usage: kill")


def test_kill_rejects_non_numeric_pid(context: ShellContext) -> None:
    result = run(context, "kill abc")

    assert not result.ok
    assert "not a valid process id" in result.message


@pytest.mark.skipif(os.name == "nt", reason="POSIX signal path")
def test_kill_rejects_pid_out_of_range(context: ShellContext) -> None:
    result = run(context, "kill 99999999999999999999999")

    assert not result.ok
    assert "not a valid process id" in result.message


@pytest.mark.skipif(os.name == "nt", reason="POSIX signal path")
def test_kill_missing_process_reports_failure(context: ShellContext, monkeypatch) -> None:
    def fake_kill(pid, sig):
        raise ProcessLookupError(pid)

    monkeypatch.setattr(os, "kill", fake_kill)

    result = run(context, "kill 4242")

    assert not result.ok
    assert "4242" in result.message


@pytest.mark.skipif(os.name == "nt", reason="POSIX signal path")
def test_kill_terminates_a_running_process(context: ShellContext) -> None:
    child = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(60)"])
    try:
        result = run(context, f"kill {child.pid}")
        assert result.ok
        assert result.message == f"Process {child.pid} terminated"
        assert child.wait(timeout=10) != 0
    finally:
        if child.poll() is None:
            child.kill()
            child.wait()
