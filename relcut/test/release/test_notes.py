from __future__ import annotations

from pathlib import Path

from relcut.core.result import Err, Ok
from relcut.release.notes import render_release_notes, write_release_notes
from relcut.release.templates import (
    release_branch_name,
    release_commit_message,
    release_notes_header,
)


def test_templates() -> None:
    assert release_notes_header("v1.2") == "Release v1.2"
    assert release_commit_message("v1.2") == "Release v1.2"
    assert release_branch_name("v1.2") == "release/v1.2"


def test_render_without_url() -> None:
    assert render_release_notes(version="v1.2", notes_url=None) == "Release v1.2"
    assert render_release_notes(version="v1.2", notes_url="  ") == "Release v1.2"


def test_render_with_url() -> None:
    assert render_release_notes(version="v1.2", notes_url="http://x") == "Release v1.2\nhttp://x"


def test_write_creates_parent_dirs(tmp_path: Path) -> None:
    result = write_release_notes(
        repo_root=tmp_path,
        rel_path="a/b/notes.txt",
        version="v0.3",
        notes_url="http://x",
    )

    assert isinstance(result, Ok)
    path = tmp_path / "a" / "b" / "notes.txt"
    assert result.value.abs_path == path
    assert path.read_bytes() == b"Release v0.3\nhttp://x"


def test_write_replaces_previous_content(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("Release v0.2\nhttp://old\nmore text\n", encoding="utf-8")

    write_release_notes(repo_root=tmp_path, rel_path="notes.txt", version="v0.3", notes_url=None)

    assert path.read_text(encoding="utf-8") == "Release v0.3"


def test_write_reports_io_errors(tmp_path: Path) -> None:
    (tmp_path / "notes.txt").mkdir()

    result = write_release_notes(
        repo_root=tmp_path,
        rel_path="notes.txt",
        version="v0.3",
        notes_url=None,
    )

    assert isinstance(result, Err)
    assert result.error.kind == "notes_write"
    assert result.error.hint == str(tmp_path / "notes.txt")
