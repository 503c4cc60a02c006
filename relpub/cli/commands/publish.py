from __future__ import annotations

from pathlib import Path

import typer

from relpub.cli.context import build_context, build_publish_task
from relpub.core.result import Err
from relpub.output.console import ConsoleProtocol, Style
from relpub.release.errors import PublishError, exit_code_for


def publish(
    project_dir: Path | None = typer.Option(
        None, "--project-dir", "-C", help="Repository root (defaults to the current directory)"
    ),
    config: Path | None = typer.Option(
        None, "--config", help="Release config file (defaults to <project-dir>/relpub.toml)"
    ),
) -> None:
    """Build, tag and publish every release package."""
    ctx = build_context(project_dir, config)
    task = build_publish_task(ctx)

    result = task.run()
    if isinstance(result, Err):
        print_publish_error(result.error, ctx.console)
        raise typer.Exit(code=int(exit_code_for(result.error)))


def print_publish_error(error: PublishError, console: ConsoleProtocol) -> None:
    if error.is_clean_abort:
        console.newline()
        console.warning(error.message)
        if error.hint:
            console.print(f"      {error.hint}", Style.WARNING)
        return

    console.error(error.message)
    if error.hint:
        console.print(f"      hint: {error.hint}", Style.DIM)
    if error.details:
        console.newline()
        console.print(error.details, Style.ERROR)
