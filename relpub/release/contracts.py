"""Collaborator contracts for the publish workflow.

The workflow depends on these protocols rather than on the concrete git, npm
and build wrappers, so tests can hand it plain fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from relpub.core.result import Result
from relpub.git.repository import GitError, GitStatus
from relpub.output.console import ConsoleProtocol
from relpub.release.version import Version
from relpub.services.build import BuildFailed


class GitProtocol(Protocol):
    def status(self) -> Result[GitStatus, GitError]: ...

    def current_branch(self) -> str | None: ...

    def checkout(self, branch: str) -> Result[None, GitError]: ...

    def commit_title(self, ref: str) -> Result[str, GitError]: ...

    def commit_sha(self, ref: str) -> Result[str, GitError]: ...

    def remote_head_sha(self, remote: str, branch: str) -> Result[str, GitError]: ...

    def create_tag(self, ref: str, name: str, message: str) -> Result[None, GitError]: ...


class RegistryProtocol(Protocol):
    def is_authenticated(self) -> bool: ...

    def run_interactive_login(self) -> bool: ...

    def publish(self, package_path: Path, dist_tag: str) -> str:
        """Returns error output, empty on success."""
        ...


class BuilderProtocol(Protocol):
    def clean(self) -> Result[None, BuildFailed]: ...

    def build(self, packages: tuple[str, ...]) -> Result[None, BuildFailed]: ...


class PackageCheck(Protocol):
    def __call__(
        self,
        output_root: Path,
        package_name: str,
        *,
        console: ConsoleProtocol,
        expected_version: str | None = None,
    ) -> bool: ...


@dataclass(frozen=True, slots=True)
class PublishOutcome:
    """What a successful run did."""

    version: Version
    tag: str
    dist_tag: str
    published: tuple[str, ...]
    releases_url: str
