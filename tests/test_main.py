from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

from dragon.__main__ import main
from dragon.config import CONFIG_PATH_ENV, LOG_LEVEL_ENV


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    path = tmp_path / "dragon-config.toml"
    path.write_text(
        '[[aliases]]\nname = "hi"\ncommand = "echo hello"\n', encoding="utf-8")
    return path


def test_script_mode_exit_status(config_file: Path, write_file, capsys) -> None:
    ok_script = write_file("ok.txt", "hi there\n")
    bad_script = write_file("bad.txt", "echo fine\ndragon-no-such-program-xyz\n")

    assert main(["--config", str(config_file), str(ok_script)]) == 0
    assert capsys.readouterr().out.strip() == "hello there"
    assert main(["--config", str(config_file), str(bad_script)]) == 1
    assert main(["--config", str(config_file), str(config_file.parent / "absent.txt")]) == 1


def test_script_mode_forwards_arguments(config_file: Path, write_file, capsys) -> None:
    script = write_file("args.txt", "echo got\n")

    assert main(["--config", str(config_file), str(script), "x", "y"]) == 0
    assert capsys.readouterr().out.strip() == "got x y"


def test_malformed_config_is_fatal(write_file, capsys) -> None:
    broken = write_file("broken.toml", "theme = [\n")

    assert main(["--config", str(broken), "whatever.txt"]) == 1
    assert "Failed to parse the config file" in capsys.readouterr().err


def test_interactive_session_over_piped_input(config_file: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("hi world\nexit\n"))

    assert main(["--config", str(config_file), "--quiet"]) == 0

    out = capsys.readouterr().out
    assert "Welcome to Dragon-shell!" in out
    assert "hello world" in out
    assert "Goodbye!" in out
    assert (config_file.parent / ".dragon_history").exists()
