"""Console output abstraction.

The publish workflow reports every step through ``ConsoleProtocol`` so it can
run against a real terminal (``RichConsole``) or be captured in tests
(``MockConsole``). Status lines use a fixed symbol per outcome:

    ✓  step passed
    ✘  step failed
    ⚠  needs attention
    ⭮  in progress
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

SUCCESS_MARK = "✓"
ERROR_MARK = "✘"
WARNING_MARK = "⚠"
STEP_MARK = "⭮"


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    STEP = auto()
    DIM = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Styled line-oriented output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling.

        Args:
            message: The text to print
            style: The style to apply
        """
        ...

    def success(self, message: str) -> None:
        """Print a line marked as passed."""
        ...

    def error(self, message: str) -> None:
        """Print a line marked as failed."""
        ...

    def warning(self, message: str) -> None:
        """Print a line that needs the operator's attention."""
        ...

    def step(self, message: str) -> None:
        """Print a line announcing a long-running step."""
        ...

    def header(self, message: str) -> None:
        """Print a banner."""
        ...

    def newline(self) -> None:
        """Print an empty line."""
        ...


class RichConsole:
    """Console implementation using Rich library."""

    def __init__(self, *, stderr: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red",
            Style.WARNING: "yellow",
            Style.STEP: "green",
            Style.DIM: "dim",
            Style.HEADER: "green bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._console.print(message, markup=False)

    def success(self, message: str) -> None:
        self.print(f"  {SUCCESS_MARK}   {message}", Style.SUCCESS)

    def error(self, message: str) -> None:
        self.print(f"  {ERROR_MARK}   {message}", Style.ERROR)

    def warning(self, message: str) -> None:
        self.print(f"  {WARNING_MARK}   {message}", Style.WARNING)

    def step(self, message: str) -> None:
        self.print(f"  {STEP_MARK}   {message}", Style.STEP)

    def header(self, message: str) -> None:
        rule = "-" * max(41, len(message) + 4)
        self._console.print()
        self.print(rule, Style.SUCCESS)
        self.print(f"  {message}", Style.HEADER)
        self.print(rule, Style.SUCCESS)
        self._console.print()

    def newline(self) -> None:
        self._console.print()


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"{SUCCESS_MARK} {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"{ERROR_MARK} {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"{WARNING_MARK} {message}", Style.WARNING))

    def step(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"{STEP_MARK} {message}", Style.STEP))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def newline(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
