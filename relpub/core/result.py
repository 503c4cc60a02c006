"""Result type for explicit error handling.

Every collaborator of the release workflow (git, npm, build commands, config
loading) reports failure by returning ``Err`` instead of raising, so each
step of the workflow decides on its own whether a failure is fatal.

Usage:
    def read_version(path: Path) -> Result[str, ConfigError]:
        if not path.exists():
            return Err(ConfigError(f"missing: {path}"))
        return Ok(path.read_text())

    match read_version(path):
        case Ok(text):
            print(text)
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]
