"""Fixed text templates for a release.

Each template takes exactly one ``{version}`` field. They are constants on
purpose; nothing reads them from config.
"""

from __future__ import annotations

RELEASE_NOTES_HEADER_TEMPLATE = "Release {version}"
RELEASE_COMMIT_MESSAGE_TEMPLATE = "Release {version}"
RELEASE_BRANCH_TEMPLATE = "release/{version}"


def format_template(template: str, version: str) -> str:
    return template.format(version=version)


def release_notes_header(version: str) -> str:
    return format_template(RELEASE_NOTES_HEADER_TEMPLATE, version)


def release_commit_message(version: str) -> str:
    """Message shared by the release commit and its annotated tag."""
    return format_template(RELEASE_COMMIT_MESSAGE_TEMPLATE, version)


def release_branch_name(version: str) -> str:
    return format_template(RELEASE_BRANCH_TEMPLATE, version)
