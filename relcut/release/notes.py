from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relcut.core.result import Err, Ok, Result
from relcut.release.errors import ReleaseError
from relcut.release.templates import release_notes_header


@dataclass(frozen=True, slots=True)
class WrittenNotes:
    rel_path: str
    abs_path: Path
    content: str


def render_release_notes(*, version: str, notes_url: str | None) -> str:
    """Header line, then the URL on the next line when one is given.

    No trailing newline: the file holds exactly this text.
    """
    lines = [release_notes_header(version)]
    if notes_url is not None and notes_url.strip():
        lines.append(notes_url.strip())
    return "\n".join(lines)


def write_release_notes(
    *,
    repo_root: Path,
    rel_path: str,
    version: str,
    notes_url: str | None,
) -> Result[WrittenNotes, ReleaseError]:
    """Overwrite the release notes file; previous content is discarded."""
    path = repo_root / rel_path
    content = render_release_notes(version=version, notes_url=notes_url)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps the exact bytes on Windows too
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        return Err(
            ReleaseError(
                kind="notes_write",
                message=f"failed to write release notes: {e}",
                hint=str(path),
            )
        )

    return Ok(WrittenNotes(rel_path=rel_path, abs_path=path, content=content))
