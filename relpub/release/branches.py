from __future__ import annotations

from relpub.release.version import Version


def allowed_publish_branches(version: Version, *, default_branch: str = "main") -> tuple[str, ...]:
    """Branches a release of ``version`` may be built from.

    Major releases come from the default branch, minor releases from the
    default branch or the ``X.x`` line, patch releases only from ``X.Y.x``.
    """
    match version.release_type:
        case "major":
            return (default_branch,)
        case "minor":
            return (default_branch, f"{version.major}.x")
        case "patch":
            return (f"{version.major}.{version.minor}.x",)
