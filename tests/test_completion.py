from __future__ import annotations

from dragon.commands import ShellContext
from dragon.interface import suggest


def test_first_token_suggests_builtins_verbs_and_aliases(context: ShellContext) -> None:
    assert suggest("plug", context) == ["plugin", "plugin-call", "plugin-list", "plugin-unload"]
    assert suggest("gr", context) == ["greet"]
    assert "exit" in suggest("", context)


def test_dollar_prefix_completes_environment_variables(context: ShellContext) -> None:
    assert suggest("echo $DRAGON_T", context) == ["$DRAGON_TEST_VAR"]
    assert suggest("$DRAGON_T", context) == ["$DRAGON_TEST_VAR"]


def test_arguments_have_no_suggestions(context: ShellContext) -> None:
    assert suggest("cd ", context) == []
    assert suggest("echo some", context) == []
