"""Release output validation.

Checks the built output of one package before anything is tagged or
published. Failures are collected per file and printed as a group so the
operator sees everything wrong with a package at once.
"""

from __future__ import annotations

import json
from pathlib import Path

from relpub.core.structured import StrDict, as_str_dict, get_str
from relpub.output.console import ConsoleProtocol, Style

__all__ = ["ENTRY_POINT_FIELDS", "check_release_package", "collect_package_failures"]

ENTRY_POINT_FIELDS: tuple[str, ...] = ("main", "module", "es2015", "typings", "types")

REQUIRED_FILES: tuple[str, ...] = ("LICENSE", "README.md")

# Failures keyed by the file they were found in ("" for the package itself).
PackageFailures = dict[str, list[str]]


def _read_manifest(path: Path) -> StrDict | str:
    try:
        data = as_str_dict(json.loads(path.read_text(encoding="utf-8")))
    except OSError as e:
        return f"Cannot read package.json: {e}"
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return f"Invalid package.json: {e}"
    if data is None:
        return "package.json must contain a JSON object"
    return data


def _check_entry_points(manifest_path: Path, manifest: StrDict) -> list[str]:
    failures: list[str] = []
    for key in ENTRY_POINT_FIELDS:
        target = get_str(manifest, key)
        if target is None:
            continue
        if not (manifest_path.parent / target).is_file():
            failures.append(f'Entry-point "{key}" refers to missing file "{target}".')
    return failures


def collect_package_failures(
    package_path: Path, *, expected_version: str | None = None
) -> PackageFailures:
    """Run all output checks for one package directory."""
    failures: PackageFailures = {}

    def add(message: str, file_name: str = "") -> None:
        failures.setdefault(file_name, []).append(message)

    if not package_path.is_dir():
        add(f"Release output directory not found: {package_path}")
        return failures

    for name in REQUIRED_FILES:
        if not (package_path / name).is_file():
            add(f'No "{name}" file found in package output.')

    primary = package_path / "package.json"
    if not primary.is_file():
        add('No "package.json" file found in package output.')

    for manifest_path in sorted(package_path.rglob("package.json")):
        rel = manifest_path.relative_to(package_path)
        if "node_modules" in rel.parts:
            continue
        manifest = _read_manifest(manifest_path)
        if isinstance(manifest, str):
            add(manifest, str(rel))
            continue
        for message in _check_entry_points(manifest_path, manifest):
            add(message, str(rel))
        if manifest_path == primary and expected_version is not None:
            version = get_str(manifest, "version")
            if version != expected_version:
                add(
                    f'Expected version "{expected_version}" but found "{version}".',
                    str(rel),
                )

    return failures


def _print_failures(
    package_name: str, failures: PackageFailures, console: ConsoleProtocol
) -> None:
    console.error(f'Package "{package_name}" has invalid release output:')
    for file_name, messages in failures.items():
        if file_name:
            console.print(f"      {file_name}", Style.ERROR)
        for message in messages:
            console.print(f"        - {message}", Style.ERROR)


def check_release_package(
    output_root: Path,
    package_name: str,
    *,
    console: ConsoleProtocol,
    expected_version: str | None = None,
) -> bool:
    """Validate ``<output_root>/<package_name>``; print failures and return False if any."""
    failures = collect_package_failures(
        output_root / package_name, expected_version=expected_version
    )
    if failures:
        _print_failures(package_name, failures, console)
        return False
    return True
