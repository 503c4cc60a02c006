"""Publish workflow.

One linear run: verify the checkout, build and validate the release output,
tag the release, then publish every package to npm. Each step either passes
or ends the run with an ``Err(PublishError)``; nothing is retried except the
npm login, and nothing is rolled back (a created tag or an already published
package stays as it is).
"""

from __future__ import annotations

import json
import re
from dataclasses import replace
from pathlib import Path

from relpub.core.config import ReleaseConfig
from relpub.core.result import Err, Ok, Result
from relpub.core.structured import as_str_dict, get_str
from relpub.output.console import ConsoleProtocol, Style
from relpub.release.branches import allowed_publish_branches
from relpub.release.contracts import (
    BuilderProtocol,
    GitProtocol,
    PackageCheck,
    PublishOutcome,
    RegistryProtocol,
)
from relpub.release.dist_tag import needs_stable_next_confirmation, prompt_dist_tag
from relpub.release.errors import PublishError
from relpub.release.prompts import PrompterProtocol
from relpub.release.validation import check_release_package
from relpub.release.version import Version, parse_version

MAX_LOGIN_ATTEMPTS = 2

VERSION_BUMP_RE = re.compile(r"chore: bump version")

STABLE_NEXT_QUESTION = 'Are you sure that you want to release a stable version to the "next" tag?'
CONFIRM_RELEASE_QUESTION = "Are you sure that you want to release now?"

__all__ = [
    "MAX_LOGIN_ATTEMPTS",
    "PublishReleaseTask",
    "read_manifest_version",
]


def read_manifest_version(manifest_path: Path) -> Result[Version, PublishError]:
    """Read and parse the ``version`` field of a JSON manifest."""
    try:
        data = as_str_dict(json.loads(manifest_path.read_text(encoding="utf-8")))
    except OSError as e:
        return Err(
            PublishError(kind="invalid_manifest", message=f"Cannot read {manifest_path}: {e}")
        )
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Err(
            PublishError(kind="invalid_manifest", message=f"Invalid JSON in {manifest_path}: {e}")
        )

    raw = get_str(data, "version") if data is not None else None
    if raw is None:
        return Err(
            PublishError(
                kind="invalid_manifest",
                message=f'No "version" field found in {manifest_path.name}.',
            )
        )

    version = parse_version(raw)
    if version is None:
        return Err(
            PublishError(
                kind="invalid_version",
                message=f"Cannot parse current version in {manifest_path.name}.",
                hint=f'make sure "{raw}" is a valid semver version',
            )
        )
    return Ok(version)


class PublishReleaseTask:
    """Interactive release of every configured package.

    All collaborators are injected; see ``relpub.cli.context`` for the
    production wiring.
    """

    def __init__(
        self,
        config: ReleaseConfig,
        *,
        git: GitProtocol,
        registry: RegistryProtocol,
        builder: BuilderProtocol,
        prompter: PrompterProtocol,
        console: ConsoleProtocol,
        check_package: PackageCheck = check_release_package,
    ) -> None:
        self.config = config
        self.git = git
        self.registry = registry
        self.builder = builder
        self.prompter = prompter
        self.console = console
        self.check_package = check_package

    def run(self) -> Result[PublishOutcome, PublishError]:
        version_r = read_manifest_version(self.config.manifest_path)
        if isinstance(version_r, Err):
            return version_r
        version = version_r.value
        version_name = version.format()

        self.console.header(f"{self.config.repository_name} release script")

        # Unstaged changes are not tied to a branch, so checking once before
        # switching is enough.
        clean = self._verify_no_uncommitted_changes()
        if isinstance(clean, Err):
            return clean

        branch_r = self._switch_to_publish_branch(version)
        if isinstance(branch_r, Err):
            return branch_r
        publish_branch = branch_r.value

        bump = self._verify_last_commit_version_bump()
        if isinstance(bump, Err):
            return bump

        upstream = self._verify_local_commits_match_upstream(publish_branch)
        if isinstance(upstream, Err):
            return upstream

        dist_tag = prompt_dist_tag(self.prompter, version)
        if needs_stable_next_confirmation(dist_tag, version):
            if not self.prompter.confirm(STABLE_NEXT_QUESTION):
                return Err(PublishError(kind="declined", message="Aborting publish..."))

        built = self._build_release_packages()
        if isinstance(built, Err):
            return built
        self.console.success("Built the release output.")

        checked = self._check_release_output(version_name)
        if isinstance(checked, Err):
            return checked
        self.console.success("Release output passed validation checks.")

        tagged = self.git.create_tag("HEAD", version_name, "")
        if isinstance(tagged, Err):
            return Err(
                PublishError(
                    kind="tag_failed",
                    message=f'Could not create release tag "{version_name}".',
                    details=tagged.error.message,
                )
            )
        self.console.success(f'Created release tag: "{version_name}"')

        # From here on the tag exists; every abort reminds the operator of it.
        tag_hint = f'tag "{version_name}" was already created; remove it before retrying'

        authed = self._check_registry_authentication()
        if isinstance(authed, Err):
            return Err(replace(authed.error, hint=tag_hint))

        if not self.prompter.confirm(CONFIRM_RELEASE_QUESTION):
            return Err(PublishError(kind="declined", message="Aborting publish...", hint=tag_hint))

        published: list[str] = []
        for package_name in self.config.packages:
            result = self._publish_package(package_name, dist_tag)
            if isinstance(result, Err):
                already = ", ".join(published) if published else "none"
                return Err(
                    replace(
                        result.error,
                        hint=f"{tag_hint}; already published: {already}",
                    )
                )
            published.append(package_name)

        self.console.newline()
        self.console.success("Published all packages successfully")
        self.console.warning("Please push the newly created tag to GitHub and draft a new release.")
        self.console.print(f"      {self.config.releases_url}", Style.WARNING)

        return Ok(
            PublishOutcome(
                version=version,
                tag=version_name,
                dist_tag=dist_tag,
                published=tuple(published),
                releases_url=self.config.releases_url,
            )
        )

    def _verify_no_uncommitted_changes(self) -> Result[None, PublishError]:
        status = self.git.status()
        if isinstance(status, Err):
            return Err(
                PublishError(
                    kind="dirty_tree",
                    message="Could not determine the state of the working tree.",
                    details=status.error.message,
                )
            )
        if not status.value.is_clean:
            changed = "\n".join(f"{e.pretty_xy()} {e.path}" for e in status.value.entries)
            return Err(
                PublishError(
                    kind="dirty_tree",
                    message="There are changes which are not committed and should be discarded.",
                    details=changed,
                )
            )
        return Ok(None)

    def _switch_to_publish_branch(self, version: Version) -> Result[str, PublishError]:
        allowed = allowed_publish_branches(version, default_branch=self.config.default_branch)
        current = self.git.current_branch()

        if current is not None and current in allowed:
            self.console.success(f'Using the "{current}" branch.')
            return Ok(current)

        # Several branches could host this release; the operator has to pick.
        if len(allowed) != 1:
            return Err(
                PublishError(
                    kind="not_on_publish_branch",
                    message="You are not on an allowed publish branch.",
                    hint=f"switch to one of: {', '.join(allowed)}",
                )
            )

        target = allowed[0]
        switched = self.git.checkout(target)
        if isinstance(switched, Err):
            return Err(
                PublishError(
                    kind="branch_switch_failed",
                    message=f'Could not switch to the "{target}" branch.',
                    hint="make sure the branch exists or switch to it manually",
                    details=switched.error.message,
                )
            )
        self.console.success(f'Switched to the "{target}" branch.')
        return Ok(target)

    def _verify_last_commit_version_bump(self) -> Result[None, PublishError]:
        title = self.git.commit_title("HEAD")
        if isinstance(title, Err):
            return Err(
                PublishError(
                    kind="missing_version_bump",
                    message="Could not read the latest commit of the current branch.",
                    details=title.error.message,
                )
            )
        if not VERSION_BUMP_RE.search(title.value):
            return Err(
                PublishError(
                    kind="missing_version_bump",
                    message="The latest commit of the current branch does not seem to be a "
                    "version bump.",
                    hint="stage the release using the staging script first",
                )
            )
        return Ok(None)

    def _verify_local_commits_match_upstream(
        self, publish_branch: str
    ) -> Result[None, PublishError]:
        remote = self.config.upstream_remote
        upstream_sha = self.git.remote_head_sha(remote, publish_branch)
        if isinstance(upstream_sha, Err):
            return Err(
                PublishError(
                    kind="upstream_unreachable",
                    message=f'Could not read the "{publish_branch}" branch from {remote}.',
                    details=upstream_sha.error.message,
                )
            )

        local_sha = self.git.commit_sha("HEAD")
        if isinstance(local_sha, Err):
            return Err(
                PublishError(
                    kind="upstream_unreachable",
                    message="Could not resolve the local HEAD commit.",
                    details=local_sha.error.message,
                )
            )

        if upstream_sha.value != local_sha.value:
            return Err(
                PublishError(
                    kind="upstream_mismatch",
                    message="The current branch is not in sync with the remote branch.",
                    hint=f'make sure your local branch "{publish_branch}" is up to date',
                )
            )
        return Ok(None)

    def _build_release_packages(self) -> Result[None, PublishError]:
        result = self.builder.clean()
        if not isinstance(result, Err):
            result = self.builder.build(self.config.packages)
        if isinstance(result, Err):
            return Err(
                PublishError(
                    kind="build_failed",
                    message="Could not build the release output.",
                    details=str(result.error),
                )
            )
        return Ok(None)

    def _check_release_output(self, version_name: str) -> Result[None, PublishError]:
        # Every package is checked so all failures show up in one run.
        failed = [
            name
            for name in self.config.packages
            if not self.check_package(
                self.config.output_dir,
                name,
                console=self.console,
                expected_version=version_name,
            )
        ]
        if failed:
            return Err(
                PublishError(
                    kind="validation_failed",
                    message="Release output does not pass all release validations.",
                    hint="fix all failures or reach out to the team",
                    details="failed packages: " + ", ".join(failed),
                )
            )
        return Ok(None)

    def _check_registry_authentication(self) -> Result[None, PublishError]:
        if self.registry.is_authenticated():
            self.console.success("NPM is authenticated.")
            return Ok(None)

        self.console.warning('NPM is currently not authenticated. Running "npm login"..')
        for _ in range(MAX_LOGIN_ATTEMPTS):
            if self.registry.run_interactive_login():
                self.console.success("Successfully authenticated NPM.")
                return Ok(None)
            self.console.error("Could not authenticate successfully. Please try again.")

        return Err(
            PublishError(
                kind="auth_failed",
                message=f"Could not authenticate after {MAX_LOGIN_ATTEMPTS} tries.",
            )
        )

    def _publish_package(self, package_name: str, dist_tag: str) -> Result[None, PublishError]:
        self.console.step(f'Publishing "{package_name}"..')
        error_output = self.registry.publish(self.config.package_output(package_name), dist_tag)
        if error_output:
            return Err(
                PublishError(
                    kind="publish_failed",
                    message=f'An error occurred while publishing "{package_name}".',
                    details=error_output,
                )
            )
        self.console.success(f'Successfully published "{package_name}"')
        return Ok(None)
