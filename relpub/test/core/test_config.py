"""Tests for relpub.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from relpub.core.config import ReleaseConfig, load_config
from relpub.core.result import Err, Ok

MINIMAL = """
[repository]
owner = "angular"
name = "material2"

[release]
packages = ["cdk", "material"]
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "relpub.toml"
    path.write_text(text, encoding="utf-8")
    return path


# =============================================================================
# load_config()
# =============================================================================


class TestLoadConfig:
    """Tests for loading relpub.toml."""

    def test_minimal_config_uses_defaults(self, tmp_path: Path) -> None:
        """Only owner, name and packages are required."""
        _write(tmp_path, MINIMAL)

        result = load_config(tmp_path)

        assert isinstance(result, Ok)
        config = result.value
        assert config.project_dir == tmp_path
        assert config.packages == ("cdk", "material")
        assert config.output_dir == tmp_path / "dist" / "releases"
        assert config.manifest_path == tmp_path / "package.json"
        assert config.clean_command == ("gulp", "clean")
        assert config.build_command == ("gulp", "{package}:build-release")
        assert config.build_cwd is None
        assert config.default_branch == "main"
        assert config.remote is None
        assert config.upstream_remote == "https://github.com/angular/material2.git"

    def test_full_config(self, tmp_path: Path) -> None:
        """Every key is read from its table."""
        _write(
            tmp_path,
            """
[repository]
owner = "acme"
name = "widgets"
default_branch = "master"
remote = "upstream"

[release]
packages = ["core", "forms", "testing"]
output_dir = "out/npm"
manifest = "packages/package.json"

[build]
cwd = "tools"
clean = "npm run clean"
build = "npm run build -- --pkg={package}"
""",
        )

        result = load_config(tmp_path)

        assert isinstance(result, Ok)
        config = result.value
        assert config.packages == ("core", "forms", "testing")
        assert config.output_dir == tmp_path / "out" / "npm"
        assert config.manifest_path == tmp_path / "packages" / "package.json"
        assert config.clean_command == ("npm", "run", "clean")
        assert config.build_command == ("npm", "run", "build", "--", "--pkg={package}")
        assert config.build_cwd == tmp_path / "tools"
        assert config.default_branch == "master"
        assert config.remote == "upstream"
        assert config.upstream_remote == "upstream"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        """--config points at a file outside the project root."""
        other = tmp_path / "conf" / "release.toml"
        other.parent.mkdir()
        other.write_text(MINIMAL, encoding="utf-8")

        result = load_config(tmp_path, other)

        assert isinstance(result, Ok)
        assert result.value.project_dir == tmp_path

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file is an error, not an exception."""
        result = load_config(tmp_path)

        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Syntax errors are reported with the path."""
        _write(tmp_path, "[repository\nowner=")

        result = load_config(tmp_path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    @pytest.mark.parametrize(
        "text",
        [
            '[release]\npackages = ["a"]\n',
            '[repository]\nowner = "o"\nname = "n"\n',
            '[repository]\nowner = "o"\nname = "n"\n[release]\npackages = []\n',
            '[repository]\nowner = "o"\nname = "n"\n[release]\npackages = ["a", 3]\n',
            '[repository]\nowner = "o"\nname = "n"\n[release]\npackages = ["a", "a"]\n',
        ],
    )
    def test_invalid_structure(self, tmp_path: Path, text: str) -> None:
        """Missing or malformed keys are rejected."""
        _write(tmp_path, text)

        result = load_config(tmp_path)

        assert isinstance(result, Err)
        assert "Invalid config structure" in result.error.message


# =============================================================================
# ReleaseConfig
# =============================================================================


class TestReleaseConfig:
    """Tests for derived ReleaseConfig values."""

    def test_urls(self, tmp_path: Path) -> None:
        """URLs are derived from owner and name."""
        config = ReleaseConfig(
            project_dir=tmp_path,
            repository_owner="angular",
            repository_name="material2",
            packages=("cdk",),
            output_dir=tmp_path / "dist",
            manifest_path=tmp_path / "package.json",
        )
        assert config.releases_url == "https://github.com/angular/material2/releases"
        assert config.upstream_remote == "https://github.com/angular/material2.git"
        assert config.package_output("cdk") == tmp_path / "dist" / "cdk"

    def test_frozen(self, tmp_path: Path) -> None:
        """The config cannot be changed after loading."""
        config = ReleaseConfig(
            project_dir=tmp_path,
            repository_owner="o",
            repository_name="n",
            packages=("a",),
            output_dir=tmp_path,
            manifest_path=tmp_path / "package.json",
        )
        with pytest.raises(AttributeError):
            config.packages = ("b",)  # type: ignore[misc]
