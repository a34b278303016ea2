"""Full release runs against real git repositories (a bare remote plus a clone)."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from relcut.core.config import ReleaseConfig
from relcut.core.result import Err, Ok, Result
from relcut.git.repository import Repository
from relcut.output.console import MockConsole
from relcut.release.errors import ReleaseError
from relcut.release.sequencer import ReleaseSequencer
from relcut.release.version import latest_version_tag

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")

NOTES = "tools/release/release_notes.txt"


def git(cwd: Path, *args: str, env: dict[str, str] | None = None) -> str:
    full_env = {**os.environ, **(env or {})}
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        env=full_env,
        capture_output=True,
        text=True,
        check=True,
    )
    return proc.stdout.strip()


@pytest.fixture
def work(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A repository on `main` with one commit, tracking a bare `origin`."""
    empty_config = tmp_path / "gitconfig"
    empty_config.write_text("", encoding="utf-8")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(empty_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for role in ("AUTHOR", "COMMITTER"):
        monkeypatch.setenv(f"GIT_{role}_NAME", "Release Bot")
        monkeypatch.setenv(f"GIT_{role}_EMAIL", "release@example.com")

    remote = tmp_path / "remote.git"
    remote.mkdir()
    git(remote, "init", "--bare", "-q")

    repo = tmp_path / "work"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    (repo / "README.md").write_text("demo\n", encoding="utf-8")
    git(repo, "add", "README.md")
    git(repo, "commit", "-q", "-m", "initial")
    git(repo, "remote", "add", "origin", str(remote))
    git(repo, "push", "-q", "origin", "main")
    return repo


def run_release(
    repo: Path,
    version_override: str | None = None,
    notes_url: str | None = None,
) -> tuple[ReleaseSequencer, Result[str, ReleaseError]]:
    seq = ReleaseSequencer(
        Repository(repo),
        repo_root=repo,
        config=ReleaseConfig(),
        console=MockConsole(),
    )
    return seq, seq.prepare_release(version_override, notes_url)


def test_first_release(work: Path) -> None:
    _, result = run_release(work)

    assert result == Ok("v0.1")
    assert (work / NOTES).read_text(encoding="utf-8") == "Release v0.1"

    assert git(work, "cat-file", "-t", "v0.1") == "tag"
    assert git(work, "tag", "-l", "--format=%(contents:subject)", "v0.1") == "Release v0.1"
    assert git(work, "log", "-1", "--format=%s", "v0.1") == "Release v0.1"

    tagged = git(work, "rev-parse", "v0.1^{commit}")
    assert git(work, "rev-parse", "release/v0.1") == tagged
    assert git(work, "rev-parse", "main") == tagged
    assert git(work, "rev-parse", "--abbrev-ref", "HEAD") == "release/v0.1"
    assert git(work, "show", "--name-only", "--format=", "HEAD") == NOTES

    remote_refs = git(work, "ls-remote", "origin")
    assert f"{tagged}\trefs/heads/main" in remote_refs
    assert f"{tagged}\trefs/heads/release/v0.1" in remote_refs
    assert "refs/tags/v0.1" in remote_refs


def test_second_release_bumps_minor(work: Path) -> None:
    run_release(work)
    _, result = run_release(work, notes_url="https://example.com/v0.2")

    assert result == Ok("v0.2")
    assert (work / NOTES).read_text(encoding="utf-8") == "Release v0.2\nhttps://example.com/v0.2"
    assert "refs/heads/release/v0.2" in git(work, "ls-remote", "origin")


def test_latest_tag_follows_commit_dates(work: Path) -> None:
    (work / "a.txt").write_text("a", encoding="utf-8")
    git(work, "add", "a.txt")
    git(work, "commit", "-q", "-m", "old", env={"GIT_COMMITTER_DATE": "2020-01-01T00:00:00Z"})
    git(work, "tag", "-a", "v3.0", "-m", "v3.0")

    (work / "b.txt").write_text("b", encoding="utf-8")
    git(work, "add", "b.txt")
    git(work, "commit", "-q", "-m", "new", env={"GIT_COMMITTER_DATE": "2024-01-01T00:00:00Z"})
    git(work, "tag", "v1.4")  # lightweight
    git(work, "tag", "not-a-version")

    tags = Repository(work).list_tags()
    assert isinstance(tags, Ok)
    assert latest_version_tag(tags.value) == "v1.4"

    _, result = run_release(work)
    assert result == Ok("v1.5")


def test_rerun_with_same_notes_has_no_changes(work: Path) -> None:
    run_release(work)

    seq, result = run_release(work, version_override="v0.1")

    assert isinstance(result, Err)
    assert result.error.kind == "no_changes"
    assert seq.error is result.error


def test_existing_tag_is_not_moved(work: Path) -> None:
    run_release(work)
    original = git(work, "rev-parse", "v0.1^{commit}")

    _, result = run_release(work, version_override="v0.1", notes_url="http://x")

    assert isinstance(result, Err)
    assert result.error.kind == "tag_exists"
    assert git(work, "rev-parse", "v0.1^{commit}") == original
    # the new commit stays on main: nothing is rolled back
    assert git(work, "rev-parse", "main") != original


def test_unreachable_remote(work: Path, tmp_path: Path) -> None:
    git(work, "remote", "set-url", "origin", str(tmp_path / "missing.git"))

    _, result = run_release(work)

    assert isinstance(result, Err)
    assert result.error.kind == "remote_sync"
    assert not (work / NOTES).exists()
    assert git(work, "tag", "-l") == ""
