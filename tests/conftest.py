from __future__ import annotations

import logging
import os
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from dragon.commands import ShellContext
from dragon.plugins import PluginRegistry
from dragon.system import Environment

# Registers the built-in handlers.
import dragon.interface  # noqa: F401


@pytest.fixture
def environment(tmp_path: Path) -> Environment:
    return Environment(
        cwd=tmp_path,
        variables={
            "PATH": os.environ.get("PATH", os.defpath),
            "HOME": str(tmp_path),
            "DRAGON_TEST_VAR": "1",
        },
    )


@pytest.fixture
def context(environment: Environment) -> ShellContext:
    return ShellContext(
        environment=environment,
        plugins=PluginRegistry(),
        aliases={"ll": "lf .", "greet": "echo hello"},
    )


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_dragon_logger():
    """init_logger() turns propagation off; restore it so caplog keeps working."""
    yield
    logger = logging.getLogger("dragon")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
