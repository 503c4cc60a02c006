"""npm registry client.

Thin wrapper around the ``npm`` executable. Authentication and publishing
internals stay with npm; this module only decides what counts as success.
"""

from __future__ import annotations

from pathlib import Path

from relpub.core.result import Err
from relpub.platform.process import run as run_process
from relpub.platform.process import run_silent

__all__ = ["NpmClient"]


class NpmClient:
    """Runs npm commands on behalf of the publish workflow.

    Attributes:
        cwd: Directory npm account commands run in
        executable: npm binary name or path
    """

    def __init__(self, cwd: Path, *, executable: str = "npm") -> None:
        self.cwd = cwd
        self.executable = executable

    def is_authenticated(self) -> bool:
        """True if ``npm whoami`` reports a user name."""
        result = run_process([self.executable, "whoami"], cwd=self.cwd)
        if isinstance(result, Err):
            return False
        return result.value.strip() != ""

    def run_interactive_login(self) -> bool:
        """Run ``npm login`` attached to the terminal; True if it exited cleanly."""
        return not isinstance(run_silent([self.executable, "login"], cwd=self.cwd), Err)

    def publish(self, package_path: Path, dist_tag: str) -> str:
        """Publish the package at ``package_path`` under ``dist_tag``.

        Returns:
            The error output of npm, or an empty string on success.
        """
        result = run_process(
            [self.executable, "publish", "--access", "public", "--tag", dist_tag],
            cwd=package_path,
        )
        if isinstance(result, Err):
            error = result.error
            return error.stderr.strip() or error.stdout.strip() or str(error)
        return ""
