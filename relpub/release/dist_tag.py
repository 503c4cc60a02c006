from __future__ import annotations

from relpub.release.prompts import Choice, PrompterProtocol
from relpub.release.version import Version

LATEST_TAG = "latest"
NEXT_TAG = "next"

DIST_TAG_QUESTION = "What is the npm dist-tag you want to publish to?"


def dist_tag_choices(version: Version) -> tuple[Choice, ...]:
    """Dist tags a release of ``version`` may be published under.

    Pre-releases only ever go to the "next" tag.
    """
    lts_tag = f"{version.major}.x"
    next_choice = Choice(value=NEXT_TAG, label=f"Next release (npm-tag: {NEXT_TAG})")
    if version.is_prerelease:
        return (next_choice,)
    return (
        Choice(value=LATEST_TAG, label=f"Latest release (npm-tag: {LATEST_TAG})"),
        next_choice,
        Choice(value=lts_tag, label=f"Long-term support release (npm-tag: {lts_tag})"),
    )


def prompt_dist_tag(prompter: PrompterProtocol, version: Version) -> str:
    return prompter.select(DIST_TAG_QUESTION, dist_tag_choices(version))


def needs_stable_next_confirmation(dist_tag: str, version: Version) -> bool:
    return dist_tag == NEXT_TAG and not version.is_prerelease
