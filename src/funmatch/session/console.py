"""Console input/output used by interactive sessions."""

from __future__ import annotations

from io import StringIO
from typing import Any, Iterable, Protocol

from rich.console import Console


class ConsoleIO(Protocol):
    """Synchronous print sink and line source."""

    def print(self, message: Any = "") -> None: ...

    def read_line(self, prompt: str) -> str: ...


class RichConsoleIO:
    """Console I/O backed by a Rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def print(self, message: Any = "") -> None:
        self._console.print(message)

    def read_line(self, prompt: str) -> str:
        """Block until the user enters a line.

        Raises:
            EOFError: If input is closed.
            KeyboardInterrupt: If the user interrupts the prompt.
        """
        return self._console.input(prompt)


class ScriptedConsoleIO:
    """Console I/O that replays canned answers and records everything printed.

    Running out of answers raises ``EOFError``, the same as closed stdin.
    """

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self._answers = list(answers)
        self._buffer = StringIO()
        self._console = Console(file=self._buffer, width=160, color_system=None)
        self.prompts: list[str] = []

    @property
    def output(self) -> str:
        return self._buffer.getvalue()

    @property
    def remaining(self) -> int:
        return len(self._answers)

    def print(self, message: Any = "") -> None:
        self._console.print(message)

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise EOFError("No scripted answers left.")
        return self._answers.pop(0)


__all__ = ["ConsoleIO", "RichConsoleIO", "ScriptedConsoleIO"]
