"""Git operations used by the publish workflow.

Usage:
    from relpub.git import Repository

    repo = Repository(Path("/path/to/repo"))
    match repo.status():
        case Ok(status) if not status.is_clean:
            ...
"""

from relpub.git.repository import (
    GitError,
    GitStatus,
    Repository,
    StatusEntry,
)

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
]
