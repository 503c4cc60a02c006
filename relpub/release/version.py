from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

ReleaseType = Literal["major", "minor", "patch"]

_VERSION_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([a-zA-Z][a-zA-Z-]*)(?:\.(0|[1-9]\d*))?)?$"
)


@dataclass(frozen=True, slots=True)
class Version:
    major: int
    minor: int
    patch: int
    prerelease_label: str | None = None
    prerelease_number: int | None = None

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease_label is not None

    @property
    def release_type(self) -> ReleaseType:
        if self.minor == 0 and self.patch == 0:
            return "major"
        if self.patch == 0:
            return "minor"
        return "patch"

    def format(self) -> str:
        out = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease_label is not None:
            out += f"-{self.prerelease_label}"
            if self.prerelease_number is not None:
                out += f".{self.prerelease_number}"
        return out

    def __str__(self) -> str:
        return self.format()


def parse_version(text: str) -> Version | None:
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    number = m.group(5)
    return Version(
        major=int(m.group(1)),
        minor=int(m.group(2)),
        patch=int(m.group(3)),
        prerelease_label=m.group(4),
        prerelease_number=int(number) if number is not None else None,
    )
