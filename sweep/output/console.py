"""Console output and run logging.

Services never print directly. They receive a ``ConsoleProtocol`` and report
through it: ``info`` for decisions a user always wants to see, ``debug`` for
detail that only shows with ``--verbose``. ``RichConsole`` is the terminal
implementation, ``MockConsole`` captures records for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    DEBUG = auto()  # Only shown when verbose
    INFO = auto()
    SUCCESS = auto()
    WARNING = auto()
    ERROR = auto()
    DIM = auto()
    HEADER = auto()


class ConsoleProtocol(Protocol):
    """Destination for user-facing output and run logs."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def debug(self, message: str) -> None:
        """Log detail that is hidden unless the console is verbose."""
        ...

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...


class RichConsole:
    """Console implementation using Rich."""

    def __init__(self, *, verbose: bool = False) -> None:
        from rich.console import Console

        self.verbose = verbose
        self._console = Console(highlight=False)
        self._style_map = {
            Style.DEFAULT: "",
            Style.DEBUG: "dim",
            Style.INFO: "cyan",
            Style.SUCCESS: "green",
            Style.WARNING: "yellow",
            Style.ERROR: "red bold",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        if style == Style.DEBUG and not self.verbose:
            return
        rich_style = self._style_map.get(style, "")
        # Release names and remote paths are data, not markup.
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._console.print(message, markup=False)

    def debug(self, message: str) -> None:
        self.print(message, Style.DEBUG)

    def info(self, message: str) -> None:
        self.print(message, Style.INFO)

    def success(self, message: str) -> None:
        self.print(f"OK {message}", Style.SUCCESS)

    def warning(self, message: str) -> None:
        self.print(f"warning: {message}", Style.WARNING)

    def error(self, message: str) -> None:
        self.print(f"error: {message}", Style.ERROR)

    def header(self, message: str) -> None:
        self._console.print()
        self.print(message, Style.HEADER)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console that captures output for testing.

    Debug records are always captured, regardless of verbosity.
    """

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def debug(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.DEBUG))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.INFO))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    # Test helpers

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def with_style(self, style: Style) -> list[str]:
        return [o.message for o in self.outputs if o.style == style]
