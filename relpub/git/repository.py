"""Git repository abstraction.

The publish workflow only needs a handful of git operations: inspect the
working tree, switch branches, read commit titles and SHAs, ask the remote
for its branch head and create the release tag. Commands block until git
exits (no timeout). All operations return Result types.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.commit_title("HEAD"):
        case Ok(title):
            print(title)
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from relpub.core.result import Err, Ok, Result
from relpub.platform.process import ProcessError
from relpub.platform.process import run as run_process

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single ``git status --porcelain`` entry.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str

    def pretty_xy(self) -> str:
        """Format XY with dots for spaces (". M" instead of " M")."""
        return self.xy.replace(" ", ".")


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Working tree state of the current branch."""

    branch: str
    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def current_branch(self) -> str | None:
        """Get current branch name.

        Returns None if detached HEAD or error.
        """
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        match result:
            case Ok(stdout):
                branch = stdout.strip()
                return None if branch == "HEAD" else branch
            case Err(_):
                return None

    def checkout(self, branch: str) -> Result[None, GitError]:
        result = self._run(["checkout", branch])
        if isinstance(result, Err):
            return Err(self._error(f"checkout {branch}", result.error, "checkout failed"))
        return Ok(None)

    def commit_title(self, ref: str) -> Result[str, GitError]:
        """Get the subject line of the commit at ``ref``."""
        result = self._run(["log", "-n1", "--format=%s", ref])
        if isinstance(result, Err):
            return Err(self._error("log", result.error, f"cannot read commit {ref}"))
        return Ok(result.value.strip())

    def commit_sha(self, ref: str) -> Result[str, GitError]:
        """Resolve ``ref`` (a branch, ``HEAD``, ``origin/main``...) to a full SHA."""
        result = self._run(["rev-parse", "--verify", f"{ref}^{{commit}}"])
        if isinstance(result, Err):
            return Err(self._error("rev-parse", result.error, f"cannot resolve {ref}"))
        return Ok(result.value.strip())

    def remote_head_sha(self, remote: str, branch: str) -> Result[str, GitError]:
        """SHA of ``branch`` on ``remote`` (a remote name or URL), via ``ls-remote``.

        Queries the remote directly, so no local remote-tracking ref is needed.
        """
        ref = f"refs/heads/{branch}"
        result = self._run(["ls-remote", remote, ref])
        if isinstance(result, Err):
            return Err(self._error(f"ls-remote {remote}", result.error, "ls-remote failed"))
        for line in result.value.splitlines():
            sha, _, name = line.partition("\t")
            if name.strip() == ref:
                return Ok(sha.strip())
        return Err(
            GitError(command=f"ls-remote {remote}", message=f"{ref} not found on {remote}")
        )

    def create_tag(self, ref: str, name: str, message: str) -> Result[None, GitError]:
        """Create an annotated tag ``name`` pointing at ``ref``.

        An empty message falls back to the tag name.
        """
        result = self._run(["tag", "-m", message or name, name, ref])
        if isinstance(result, Err):
            return Err(self._error(f"tag {name}", result.error, "tag creation failed"))
        return Ok(None)

    def _error(self, command: str, error: ProcessError, fallback: str) -> GitError:
        return GitError(
            command=command,
            message=error.stderr.strip() or error.stdout.strip() or fallback,
            returncode=error.returncode,
        )

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path)

    def _parse_status(self, output: str) -> GitStatus:
        """Parse git status --porcelain=v1 -b output."""
        lines = [ln for ln in output.splitlines() if ln.strip()]
        if not lines:
            return GitStatus(branch="")

        # First line is branch info: ## branch...upstream [ahead N, behind M]
        head = lines[0].strip()
        if head.startswith("##"):
            head = head[2:].lstrip()
        branch = head.split(" [", 1)[0].split("...", 1)[0].strip()

        entries: list[StatusEntry] = []
        for line in lines[1:]:
            if line.startswith("?? "):
                entries.append(StatusEntry(xy="??", path=line[3:]))
            elif len(line) >= 4:
                entries.append(StatusEntry(xy=line[:2], path=line[3:]))

        return GitStatus(branch=branch, entries=tuple(entries))
