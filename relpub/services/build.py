"""Release build invocation.

Runs the configured clean command, then one build command covering every
release package. Output streams straight to the terminal; success is judged
only by exit codes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from relpub.core.config import ReleaseConfig
from relpub.core.result import Err, Ok, Result
from relpub.platform.process import run_silent

PACKAGE_PLACEHOLDER = "{package}"

__all__ = ["BuildFailed", "BuildRunner", "expand_build_command"]


@dataclass(frozen=True, slots=True)
class BuildFailed:
    command: tuple[str, ...]
    returncode: int

    def __str__(self) -> str:
        return f"{' '.join(self.command)} failed (exit {self.returncode})"


def expand_build_command(template: tuple[str, ...], packages: tuple[str, ...]) -> list[str]:
    """Expand ``{package}`` tokens once per package, keeping other tokens as-is.

    ``("gulp", "{package}:build-release")`` with ``("cdk", "material")`` gives
    ``["gulp", "cdk:build-release", "material:build-release"]``.
    """
    cmd: list[str] = []
    for token in template:
        if PACKAGE_PLACEHOLDER in token:
            cmd.extend(token.replace(PACKAGE_PLACEHOLDER, name) for name in packages)
        else:
            cmd.append(token)
    return cmd


class BuildRunner:
    """Runs the clean and build commands of a release configuration."""

    def __init__(self, config: ReleaseConfig) -> None:
        self._config = config

    @property
    def cwd(self) -> Path:
        return self._config.build_cwd or self._config.project_dir

    def clean(self) -> Result[None, BuildFailed]:
        return self._run(list(self._config.clean_command))

    def build(self, packages: tuple[str, ...]) -> Result[None, BuildFailed]:
        return self._run(expand_build_command(self._config.build_command, packages))

    def _env(self) -> dict[str, str]:
        # Locally installed build tools win over global ones.
        env = dict(os.environ)
        bin_dir = self._config.project_dir / "node_modules" / ".bin"
        if bin_dir.is_dir():
            env["PATH"] = os.pathsep.join([str(bin_dir), env.get("PATH", "")])
        return env

    def _run(self, cmd: list[str]) -> Result[None, BuildFailed]:
        result = run_silent(cmd, cwd=self.cwd, env=self._env())
        if isinstance(result, Err):
            return Err(BuildFailed(command=tuple(cmd), returncode=result.error.returncode))
        return Ok(None)
