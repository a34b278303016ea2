from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from relcut.core.result import Err, Ok, Result
from relcut.git.repository import TagRef
from relcut.release.errors import ReleaseError


# ASCII digits only: str patterns would otherwise accept e.g. Arabic-Indic digits.
_VERSION_RE = re.compile(r"^v([0-9]+)\.([0-9]+)$")

BASE_VERSION = "v0.0"


@dataclass(frozen=True, slots=True, order=True)
class ReleaseVersion:
    major: int
    minor: int

    def to_tag(self) -> str:
        return f"v{self.major}.{self.minor}"

    def next_minor(self) -> ReleaseVersion:
        return ReleaseVersion(self.major, self.minor + 1)


def is_version_tag(name: str) -> bool:
    return _VERSION_RE.match(name) is not None


def parse_version(name: str) -> Result[ReleaseVersion, ReleaseError]:
    m = _VERSION_RE.match(name)
    if m is None:
        return Err(
            ReleaseError(
                kind="invalid_version_format",
                message=f"tag '{name}' does not match the 'vX.Y' format",
            )
        )
    return Ok(ReleaseVersion(int(m.group(1)), int(m.group(2))))


def increment_version(name: str) -> Result[str, ReleaseError]:
    """Return the next minor version: ``v2.7`` -> ``v2.8``."""
    parsed = parse_version(name)
    if isinstance(parsed, Err):
        return parsed
    return Ok(parsed.value.next_minor().to_tag())


def latest_version_tag(tags: Iterable[TagRef]) -> str | None:
    """Pick the version tag whose commit is the most recent.

    Numbers are ignored on purpose: a hotfix ``v1.9`` committed after ``v2.0``
    is the latest. On equal timestamps the first tag in iteration order wins
    (``max`` keeps the first maximal element).
    """
    candidates = [t for t in tags if is_version_tag(t.name)]
    if not candidates:
        return None
    return max(candidates, key=lambda t: t.commit_timestamp).name


def next_version_from_tags(tags: Iterable[TagRef]) -> Result[str, ReleaseError]:
    return increment_version(latest_version_tag(tags) or BASE_VERSION)
