"""Tests for relpub.release.version module."""

from __future__ import annotations

import pytest

from relpub.release.version import Version, parse_version


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("5.0.0", Version(5, 0, 0)),
        ("0.12.3", Version(0, 12, 3)),
        ("6.0.0-beta.2", Version(6, 0, 0, "beta", 2)),
        ("6.1.0-rc", Version(6, 1, 0, "rc")),
        (" 7.2.1\n", Version(7, 2, 1)),
    ],
)
def test_parse_valid(text: str, expected: Version) -> None:
    """Plain and pre-release versions parse; surrounding whitespace is ignored."""
    assert parse_version(text) == expected


@pytest.mark.parametrize(
    "text",
    ["", "5", "5.0", "v5.0.0", "05.0.0", "5.0.0-", "5.0.0-beta.", "5.0.0-1", "five", "5.0.0.0"],
)
def test_parse_invalid(text: str) -> None:
    """Partial, prefixed and zero-padded versions are rejected."""
    assert parse_version(text) is None


def test_format() -> None:
    """Formatting gives back the manifest text."""
    assert Version(5, 0, 0).format() == "5.0.0"
    assert Version(6, 0, 0, "beta", 2).format() == "6.0.0-beta.2"
    assert str(Version(6, 1, 0, "rc")) == "6.1.0-rc"


def test_prerelease_flag() -> None:
    """Any label makes a pre-release."""
    assert parse_version("6.0.0-beta.0").is_prerelease  # type: ignore[union-attr]
    assert not Version(6, 0, 0).is_prerelease


@pytest.mark.parametrize(
    ("version", "kind"),
    [
        (Version(5, 0, 0), "major"),
        (Version(5, 2, 0), "minor"),
        (Version(5, 2, 1), "patch"),
        (Version(0, 0, 1), "patch"),
    ],
)
def test_release_type(version: Version, kind: str) -> None:
    """The first non-zero component from the right decides the release type."""
    assert version.release_type == kind
