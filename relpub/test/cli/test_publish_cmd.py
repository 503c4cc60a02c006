"""Tests for the publish and check-output commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import relpub.cli.commands.check_output as check_output_cmd
import relpub.cli.commands.publish as publish_cmd
from relpub import __version__
from relpub.cli.app import app
from relpub.cli.context import CLIContext
from relpub.core.config import load_config
from relpub.core.result import Err, Ok, Result
from relpub.output.console import MockConsole
from relpub.release.errors import PublishError
from relpub.release.prompts import ScriptedPrompter

runner = CliRunner()

CONFIG = """
[repository]
owner = "angular"
name = "material2"

[release]
packages = ["cdk", "material"]
"""


def _project(tmp_path: Path, *, version: str = "5.0.0") -> Path:
    (tmp_path / "relpub.toml").write_text(CONFIG, encoding="utf-8")
    (tmp_path / "package.json").write_text(json.dumps({"version": version}), encoding="utf-8")
    return tmp_path


class FakeTask:
    def __init__(self, result: Result[object, PublishError]) -> None:
        self.result = result

    def run(self) -> Result[object, PublishError]:
        return self.result


def _patch(
    monkeypatch: pytest.MonkeyPatch, result: Result[object, PublishError]
) -> MockConsole:
    console = MockConsole()

    def fake_build_context(project_dir: Path | None, config: Path | None) -> CLIContext:
        assert project_dir is not None
        loaded = load_config(project_dir, config)
        assert isinstance(loaded, Ok)
        return CLIContext(config=loaded.value, console=console, prompter=ScriptedPrompter.of())

    monkeypatch.setattr(publish_cmd, "build_context", fake_build_context)
    monkeypatch.setattr(publish_cmd, "build_publish_task", lambda ctx: FakeTask(result))
    return console


def test_version_flag() -> None:
    """--version prints the package version."""
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_publish_success_exits_zero(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """A successful run exits 0."""
    _patch(monkeypatch, Ok(object()))

    result = runner.invoke(app, ["publish", "--project-dir", str(_project(tmp_path))])

    assert result.exit_code == 0


@pytest.mark.parametrize("kind", ["declined", "not_on_publish_branch"])
def test_clean_abort_exits_zero(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, kind: str
) -> None:
    """Declining or leaving the branch choice to the operator exits 0."""
    error = PublishError(kind=kind, message="Aborting publish...")  # type: ignore[arg-type]
    console = _patch(monkeypatch, Err(error))

    result = runner.invoke(app, ["publish", "-C", str(_project(tmp_path))])

    assert result.exit_code == 0
    assert console.find("Aborting publish...")
    assert not console.has_error()


def test_failure_exits_one_and_prints_details(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Failures exit 1 and print hint and details."""
    error = PublishError(
        kind="publish_failed",
        message='An error occurred while publishing "material".',
        hint="already published: cdk",
        details="npm ERR! code E403",
    )
    console = _patch(monkeypatch, Err(error))

    result = runner.invoke(app, ["publish", "-C", str(_project(tmp_path))])

    assert result.exit_code == 1
    assert console.has_error()
    assert console.find("hint: already published: cdk")
    assert console.find("npm ERR! code E403")


def test_missing_config_exits_one(tmp_path: Path) -> None:
    """A missing relpub.toml exits 1."""
    result = runner.invoke(app, ["publish", "-C", str(tmp_path)])

    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_check_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """check-output checks every package and exits 1 on failure."""
    project = _project(tmp_path)
    console = MockConsole()
    seen: list[tuple[str, str | None]] = []

    def fake_build_context(project_dir: Path | None, config: Path | None) -> CLIContext:
        loaded = load_config(project, config)
        assert isinstance(loaded, Ok)
        return CLIContext(config=loaded.value, console=console, prompter=ScriptedPrompter.of())

    def fake_check(
        output_root: Path,
        package_name: str,
        *,
        console: MockConsole,
        expected_version: str | None = None,
    ) -> bool:
        seen.append((package_name, expected_version))
        return package_name != "material"

    monkeypatch.setattr(check_output_cmd, "build_context", fake_build_context)
    monkeypatch.setattr(check_output_cmd, "check_release_package", fake_check)

    result = runner.invoke(app, ["check-output", "-C", str(project)])

    assert result.exit_code == 1
    assert seen == [("cdk", "5.0.0"), ("material", "5.0.0")]
    assert console.find("Release output is invalid for: material")
