from __future__ import annotations

from pathlib import Path

import typer

from relpub.cli.context import build_context
from relpub.core.errors import ErrorCode
from relpub.core.result import Err
from relpub.release.validation import check_release_package
from relpub.release.workflow import read_manifest_version


def check_output(
    project_dir: Path | None = typer.Option(
        None, "--project-dir", "-C", help="Repository root (defaults to the current directory)"
    ),
    config: Path | None = typer.Option(
        None, "--config", help="Release config file (defaults to <project-dir>/relpub.toml)"
    ),
) -> None:
    """Validate the built release output without publishing."""
    ctx = build_context(project_dir, config)
    console = ctx.console

    version = read_manifest_version(ctx.config.manifest_path)
    if isinstance(version, Err):
        console.error(version.error.pretty())
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    failed = [
        name
        for name in ctx.config.packages
        if not check_release_package(
            ctx.config.output_dir,
            name,
            console=console,
            expected_version=version.value.format(),
        )
    ]
    if failed:
        console.error(f"Release output is invalid for: {', '.join(failed)}")
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    console.success(f"Release output of {len(ctx.config.packages)} package(s) is valid.")
