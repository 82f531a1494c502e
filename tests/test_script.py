from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dragon.commands import ShellContext
from dragon.errors import ScriptError
from dragon.interface import MAX_SCRIPT_DEPTH, dispatch, run_script


def test_failing_line_does_not_stop_the_script(context: ShellContext, write_file, capsys, caplog) -> None:
    script = write_file("job.txt", """\
        echo one
        dragon-no-such-program-xyz
        echo three
        lf missing-dir
        echo five
        """)

    with caplog.at_level(logging.ERROR, logger="dragon"):
        report = run_script(script, [], context)

    out = capsys.readouterr().out.splitlines()
    assert out == ["one", "three", "five"]
    assert (report.total, report.succeeded, report.failed) == (5, 3, 2)
    assert report.succeeded + report.failed == report.total
    assert any("job.txt:2" in message for message in caplog.messages)
    assert any("job.txt:4" in message for message in caplog.messages)


def test_script_args_are_appended_to_every_line(context: ShellContext, write_file, capsys) -> None:
    script = write_file("args.txt", "echo first\necho second x\n")

    run_script(script, ["A", "B"], context)

    assert capsys.readouterr().out.splitlines() == ["first A B", "second x A B"]


def test_blank_lines_are_skipped(context: ShellContext, write_file, capsys) -> None:
    script = write_file("blank.txt", "echo a\n\n   \necho b\n")

    report = run_script(script, [], context)

    assert (report.total, report.succeeded, report.skipped) == (4, 2, 2)


def test_script_lines_are_sanitized(context: ShellContext, write_file, capsys) -> None:
    script = write_file("chain.txt", "echo a; echo b\n")

    run_script(script, [], context)

    assert capsys.readouterr().out.strip() == "a echo b"


def test_missing_script_fails_before_running(context: ShellContext, tmp_path: Path) -> None:
    with pytest.raises(ScriptError):
        run_script(tmp_path / "absent.txt", [], context)


def test_run_builtin_reports_open_failure(context: ShellContext) -> None:
    result = dispatch("run", ["absent.txt"], context)

    assert not result.ok
    assert result.message.startswith("Error running script:")


def test_run_resolves_relative_to_shell_directory(context: ShellContext, write_file, capsys) -> None:
    write_file("scripts/inner.txt", "echo inner\n")
    dispatch("cd", ["scripts"], context)

    result = dispatch("run", ["inner.txt", "arg"], context)

    assert result.ok
    assert result.data.succeeded == 1
    assert capsys.readouterr().out.strip() == "inner arg"


def test_state_changes_persist_across_lines(context: ShellContext, write_file, tmp_path: Path) -> None:
    (tmp_path / "deeper").mkdir()
    script = write_file("cd.txt", "cd deeper\n")

    run_script(script, [], context)

    assert context.environment.cwd == (tmp_path / "deeper").resolve()


def test_self_recursive_script_stops_at_depth_limit(context: ShellContext, write_file, caplog) -> None:
    script = write_file("loop.txt", "run loop.txt\n")

    with caplog.at_level(logging.ERROR, logger="dragon"):
        report = run_script(script, [], context)

    assert report.failed == 1
    assert context.script_depth == 0
    assert any(f"deeper than {MAX_SCRIPT_DEPTH}" in m for m in caplog.messages)
