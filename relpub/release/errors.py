"""Error types for the publish workflow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from relpub.core.errors import ErrorCode

PublishErrorKind = Literal[
    "invalid_manifest",
    "invalid_version",
    "dirty_tree",
    "not_on_publish_branch",
    "branch_switch_failed",
    "missing_version_bump",
    "upstream_mismatch",
    "upstream_unreachable",
    "declined",
    "build_failed",
    "validation_failed",
    "tag_failed",
    "auth_failed",
    "publish_failed",
]

# Aborts the operator chose (or was asked to resolve by hand); not failures.
_CLEAN_ABORT_KINDS: frozenset[str] = frozenset({"declined", "not_on_publish_branch"})


@dataclass(frozen=True, slots=True)
class PublishError:
    """Why a publish run stopped.

    ``details`` carries raw collaborator output (e.g. npm's error text) or a
    list of offending items, printed verbatim after the message.
    """

    kind: PublishErrorKind
    message: str
    hint: str | None = None
    details: str | None = None

    @property
    def is_clean_abort(self) -> bool:
        return self.kind in _CLEAN_ABORT_KINDS

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


def exit_code_for(error: PublishError) -> ErrorCode:
    if error.is_clean_abort:
        return ErrorCode.OK
    return ErrorCode.FAILURE
