"""Exit codes for the CLI.

Operator tooling watches these values, so they must remain stable:
- 0: Success, or a release the operator declined at a prompt
- 1: Any verification, build, validation, authentication or publish failure
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes for CLI commands."""

    OK = 0
    FAILURE = 1
