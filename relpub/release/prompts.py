"""Interactive prompts used by the publish workflow.

The workflow only talks to ``PrompterProtocol``. ``TyperPrompter`` asks on the
terminal; ``ScriptedPrompter`` replays canned answers so the workflow can be
driven without a tty.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Protocol

import typer

from relpub.output.console import ConsoleProtocol, Style

__all__ = [
    "Choice",
    "PrompterProtocol",
    "ScriptedPrompter",
    "TyperPrompter",
]


@dataclass(frozen=True, slots=True)
class Choice:
    value: str
    label: str


class PrompterProtocol(Protocol):
    def confirm(self, message: str, *, default: bool = False) -> bool:
        """Ask a yes/no question."""
        ...

    def select(self, message: str, choices: tuple[Choice, ...]) -> str:
        """Ask the user to pick one of ``choices``; returns its value."""
        ...


class TyperPrompter:
    """Terminal prompts backed by ``typer.confirm``/``typer.prompt``."""

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def confirm(self, message: str, *, default: bool = False) -> bool:
        return typer.confirm(message, default=default)

    def select(self, message: str, choices: tuple[Choice, ...]) -> str:
        if not choices:
            raise ValueError("select() needs at least one choice")
        if len(choices) == 1:
            self._console.print(f"{message} {choices[0].label}", Style.DIM)
            return choices[0].value

        self._console.print(message)
        for i, choice in enumerate(choices, start=1):
            self._console.print(f"{i:2}. {choice.label}", Style.DIM)

        while True:
            raw = typer.prompt("Pick a number", default="1")
            try:
                idx = int(raw)
            except ValueError:
                self._console.error("invalid number")
                continue
            if idx < 1 or idx > len(choices):
                self._console.error("out of range")
                continue
            return choices[idx - 1].value


def _empty_answers() -> deque[bool | str]:
    return deque()


def _empty_asked() -> list[str]:
    return []


@dataclass
class ScriptedPrompter:
    """Prompter that replays answers in order.

    ``confirm`` consumes a bool, ``select`` consumes a str (which must be one of
    the offered choice values). Every question asked is recorded in ``asked``.
    """

    answers: deque[bool | str] = field(default_factory=_empty_answers)
    asked: list[str] = field(default_factory=_empty_asked)

    @classmethod
    def of(cls, *answers: bool | str) -> ScriptedPrompter:
        return cls(answers=deque(answers))

    def confirm(self, message: str, *, default: bool = False) -> bool:
        self.asked.append(message)
        answer = self._next(message)
        if not isinstance(answer, bool):
            raise TypeError(f"expected a yes/no answer for {message!r}, got {answer!r}")
        return answer

    def select(self, message: str, choices: tuple[Choice, ...]) -> str:
        self.asked.append(message)
        answer = self._next(message)
        values = [c.value for c in choices]
        if not isinstance(answer, str) or answer not in values:
            raise ValueError(f"answer {answer!r} is not one of {values}")
        return answer

    def _next(self, message: str) -> bool | str:
        if not self.answers:
            raise LookupError(f"no scripted answer left for {message!r}")
        return self.answers.popleft()
