"""Error types for the release flow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "remote_sync",
    "invalid_version_format",
    "checkout",
    "notes_write",
    "no_changes",
    "tag_exists",
    "branch_exists",
    "remote_push",
    "git_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    ``kind`` names the failure; the CLI maps it to an exit code and renders
    ``message`` plus the optional ``hint``.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
