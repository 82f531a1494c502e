#!/usr/bin/env python3
# dragon/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends.

Selection order:
    1) prompt_toolkit (live completion + bounded file history)
    2) readline / pyreadline3 (tab completion + bounded file history)
    3) plain input (last resort)
"""

import itertools
from pathlib import Path
from typing import Callable, Iterable, Optional

from dragon.errors import HistorySetupError

from .completion import split_current_token

SuggestFn = Callable[[str], list[str]]


def prepare_history_file(history_file: Path) -> Path:
    """Create the history file if needed; raise HistorySetupError on failure."""
    try:
        history_file.parent.mkdir(parents=True, exist_ok=True)
        history_file.touch(exist_ok=True)
        with history_file.open("a", encoding="utf-8"):
            pass
    except OSError as exc:
        raise HistorySetupError(
            f"Error setting up history at {history_file}: {exc}") from exc
    return history_file


class BaseCLI:
    """
    Base interface for CLI frontends.

    Subclasses implement:
        - setup()
        - get_line()   (raises EOFError at end of input, KeyboardInterrupt on Ctrl+C)
        - teardown()

    This base also provides context manager support to guarantee teardown.
    """

    def __init__(self, prompt_text: str = "> ") -> None:
        self.prompt_text = prompt_text

    def setup(self) -> None:  # pragma: no cover - interface
        ...

    def get_line(self) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def teardown(self) -> None:  # pragma: no cover - interface
        ...

    # Context manager helpers
    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


# ===== Preferred: prompt_toolkit =====
def _bounded_file_history(history_file: Path, capacity: int):
    from prompt_toolkit.history import FileHistory

    class BoundedFileHistory(FileHistory):
        """FileHistory that keeps only the newest `capacity` entries."""

        def __init__(self, filename: str, capacity: int) -> None:
            self.capacity = capacity
            super().__init__(filename)

        def load_history_strings(self) -> Iterable[str]:
            # Parent yields newest first.
            return itertools.islice(super().load_history_strings(), self.capacity)

        def compact(self) -> None:
            """Rewrite the file with the newest `capacity` entries only."""
            entries = list(FileHistory.load_history_strings(self))
            if len(entries) <= self.capacity:
                return
            keep = entries[:self.capacity]
            Path(self.filename).write_text("", encoding="utf-8")
            for entry in reversed(keep):
                self.store_string(entry)

    return BoundedFileHistory(str(history_file), capacity)


class PromptToolkitCLI(BaseCLI):
    """Rich line editor with history and live completion."""

    def __init__(self, prompt_text: str, history_file: Path, history_size: int,
                 suggest: Optional[SuggestFn] = None, style: Optional[str] = None) -> None:
        super().__init__(prompt_text)
        from prompt_toolkit import PromptSession
        from prompt_toolkit.completion import Completer, Completion
        from prompt_toolkit.formatted_text import FormattedText

        self._history_file = history_file
        self._history = _bounded_file_history(history_file, history_size)
        self._message = FormattedText([(style or "", prompt_text)])

        completer = None
        if suggest is not None:
            class _Completer(Completer):
                def get_completions(self, document, complete_event):
                    text_before_cursor = document.text_before_cursor
                    _, current_prefix = split_current_token(text_before_cursor)
                    for word in suggest(text_before_cursor):
                        # replace exactly the current token
                        yield Completion(word, start_position=-len(current_prefix))

            completer = _Completer()

        self._session = PromptSession(history=self._history, completer=completer)

    def setup(self) -> None:
        prepare_history_file(self._history_file)
        try:
            self._history.compact()
        except OSError as exc:
            raise HistorySetupError(f"Error setting up history: {exc}") from exc

    def get_line(self) -> str:
        return self._session.prompt(self._message)

    def teardown(self) -> None:
        # prompt_toolkit appends every entry as it is accepted
        pass


# ===== Fallback: readline / pyreadline3 =====
class ReadlineCLI(BaseCLI):
    """Fallback editor with basic completion and history."""

    def __init__(self, prompt_text: str, history_file: Path, history_size: int,
                 suggest: Optional[SuggestFn] = None) -> None:
        super().__init__(prompt_text)
        import readline  # type: ignore[attr-defined]

        self.readline = readline
        self._history_file = history_file
        self._history_size = history_size
        self._suggest = suggest

    def setup(self) -> None:
        prepare_history_file(self._history_file)
        try:
            self.readline.read_history_file(str(self._history_file))  # type: ignore
        except OSError as exc:
            raise HistorySetupError(f"Error setting up history: {exc}") from exc
        self.readline.set_history_length(self._history_size)  # type: ignore

        if self._suggest is None:
            return
        self.readline.set_completer_delims(" \t\n")  # type: ignore

        def _complete(text_fragment: str, state_index: int) -> Optional[str]:
            buffer_text = self.readline.get_line_buffer()  # type: ignore
            matches = [word for word in self._suggest(buffer_text)
                       if word.startswith(text_fragment)]
            return matches[state_index] if state_index < len(matches) else None

        self.readline.set_completer(_complete)  # type: ignore
        self.readline.parse_and_bind("tab: complete")  # type: ignore

    def get_line(self) -> str:
        return input(self.prompt_text)

    def teardown(self) -> None:
        try:
            self.readline.write_history_file(str(self._history_file))  # type: ignore
        except OSError:
            # History is best effort once the session is over.
            pass


# ===== Last resort: plain input =====
class PlainCLI(BaseCLI):
    """input() with no completion and no history."""

    def get_line(self) -> str:
        return input(self.prompt_text)


def make_cli(prompt_text: str, history_file: Path, history_size: int,
             suggest: Optional[SuggestFn] = None, style: Optional[str] = None) -> BaseCLI:
    """
    Factory to select the best available CLI frontend at runtime.
    """
    try:
        return PromptToolkitCLI(prompt_text, history_file, history_size, suggest, style)
    except ImportError:
        pass
    try:
        return ReadlineCLI(prompt_text, history_file, history_size, suggest)
    except ImportError:
        return PlainCLI(prompt_text)
