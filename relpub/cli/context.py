from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relpub.core.config import ReleaseConfig, load_config
from relpub.core.errors import ErrorCode
from relpub.core.result import Err
from relpub.git.repository import Repository
from relpub.output.console import ConsoleProtocol, RichConsole
from relpub.registry.npm import NpmClient
from relpub.release.prompts import PrompterProtocol, TyperPrompter
from relpub.release.workflow import PublishReleaseTask
from relpub.services.build import BuildRunner


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: ReleaseConfig
    console: ConsoleProtocol
    prompter: PrompterProtocol


def build_context(project_dir: Path | None, config_path: Path | None) -> CLIContext:
    root = (project_dir or Path.cwd()).expanduser().resolve()
    if not root.is_dir():
        typer.echo(f"error: project directory not found: {root}", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    config_result = load_config(root, config_path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    console = RichConsole()
    return CLIContext(
        config=config_result.value,
        console=console,
        prompter=TyperPrompter(console),
    )


def build_publish_task(ctx: CLIContext) -> PublishReleaseTask:
    config = ctx.config
    return PublishReleaseTask(
        config,
        git=Repository(config.project_dir),
        registry=NpmClient(config.project_dir),
        builder=BuildRunner(config),
        prompter=ctx.prompter,
        console=ctx.console,
    )
