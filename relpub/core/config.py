"""Typed release configuration.

The publish workflow never reads ambient state (cwd, globals); everything it
needs is carried by a ``ReleaseConfig`` loaded from ``relpub.toml`` in the
project directory:

    [repository]
    owner = "angular"
    name = "material2"
    default_branch = "main"
    # remote = "upstream"  (defaults to the GitHub repository URL)

    [release]
    packages = ["cdk", "material"]
    output_dir = "dist/releases"
    manifest = "package.json"

    [build]
    cwd = "."
    clean = "gulp clean"
    build = "gulp {package}:build-release"
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ReleaseConfig",
    "load_config",
]

CONFIG_FILE_NAME = "relpub.toml"

DEFAULT_BRANCH = "main"
DEFAULT_OUTPUT_DIR = "dist/releases"
DEFAULT_MANIFEST = "package.json"
DEFAULT_CLEAN_COMMAND = "gulp clean"
DEFAULT_BUILD_COMMAND = "gulp {package}:build-release"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Everything one publish run needs to know about the project.

    Attributes:
        project_dir: Repository root (git commands run here)
        repository_owner: GitHub owner, used for the releases URL
        repository_name: GitHub repository name
        packages: Ordered package list; build, validation and publish follow it
        output_dir: Directory holding one release output folder per package
        manifest_path: JSON manifest carrying the ``version`` field
        clean_command: Command run before building
        build_command: Command template; tokens containing ``{package}`` are
            repeated once per package
        build_cwd: Working directory for the build commands
        default_branch: Branch major and minor releases are published from
        remote: Git remote or URL holding the upstream publish branches;
            None means the canonical GitHub repository
    """

    project_dir: Path
    repository_owner: str
    repository_name: str
    packages: tuple[str, ...]
    output_dir: Path
    manifest_path: Path
    clean_command: tuple[str, ...] = tuple(shlex.split(DEFAULT_CLEAN_COMMAND))
    build_command: tuple[str, ...] = tuple(shlex.split(DEFAULT_BUILD_COMMAND))
    build_cwd: Path | None = None
    default_branch: str = DEFAULT_BRANCH
    remote: str | None = None

    @property
    def releases_url(self) -> str:
        return f"https://github.com/{self.repository_owner}/{self.repository_name}/releases"

    @property
    def upstream_remote(self) -> str:
        """Remote the publish branch is compared against."""
        if self.remote:
            return self.remote
        return f"https://github.com/{self.repository_owner}/{self.repository_name}.git"

    def package_output(self, package_name: str) -> Path:
        return self.output_dir / package_name

    @classmethod
    def from_dict(cls, data: Mapping[str, object], *, project_dir: Path) -> ReleaseConfig:
        """Create a ReleaseConfig from a mapping (parsed TOML).

        Raises:
            ValueError: If a required key is missing or malformed.
        """
        repository: StrDict = get_table(data, "repository") or {}
        release: StrDict = get_table(data, "release") or {}
        build: StrDict = get_table(data, "build") or {}

        owner = get_str(repository, "owner")
        name = get_str(repository, "name")
        if owner is None or name is None:
            raise ValueError("[repository] owner and name are required")

        packages = get_str_list(release, "packages")
        if not packages:
            raise ValueError("[release] packages must be a non-empty list of names")
        if len(set(packages)) != len(packages):
            raise ValueError("[release] packages must not contain duplicates")

        clean = shlex.split(get_str(build, "clean") or DEFAULT_CLEAN_COMMAND)
        build_cmd = shlex.split(get_str(build, "build") or DEFAULT_BUILD_COMMAND)
        if not clean or not build_cmd:
            raise ValueError("[build] clean and build commands must not be empty")

        build_cwd = get_str(build, "cwd")

        return cls(
            project_dir=project_dir,
            repository_owner=owner,
            repository_name=name,
            packages=tuple(packages),
            output_dir=project_dir / (get_str(release, "output_dir") or DEFAULT_OUTPUT_DIR),
            manifest_path=project_dir / (get_str(release, "manifest") or DEFAULT_MANIFEST),
            clean_command=tuple(clean),
            build_command=tuple(build_cmd),
            build_cwd=project_dir / build_cwd if build_cwd else None,
            default_branch=get_str(repository, "default_branch") or DEFAULT_BRANCH,
            remote=get_str(repository, "remote"),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(
    project_dir: Path, config_path: Path | None = None
) -> Result[ReleaseConfig, ConfigError]:
    """Load the release configuration for a project.

    Args:
        project_dir: Repository root
        config_path: Explicit config file (defaults to ``<project_dir>/relpub.toml``)

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    path = config_path if config_path is not None else project_dir / CONFIG_FILE_NAME
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfig.from_dict(result.value, project_dir=project_dir))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))
