"""Tests for relpub.release.branches module."""

from __future__ import annotations

from relpub.release.branches import allowed_publish_branches
from relpub.release.version import Version


def test_major_release_uses_default_branch() -> None:
    """Major releases only go out from the default branch."""
    assert allowed_publish_branches(Version(5, 0, 0)) == ("main",)
    assert allowed_publish_branches(Version(5, 0, 0), default_branch="master") == ("master",)


def test_minor_release_allows_default_and_major_line() -> None:
    """Minor releases may use the default branch or X.x."""
    assert allowed_publish_branches(Version(5, 2, 0)) == ("main", "5.x")


def test_patch_release_uses_minor_line() -> None:
    """Patch releases go out from X.Y.x."""
    assert allowed_publish_branches(Version(5, 2, 3)) == ("5.2.x",)


def test_prerelease_label_does_not_change_branch() -> None:
    """Only the numeric components matter."""
    assert allowed_publish_branches(Version(6, 0, 0, "beta", 1)) == ("main",)
