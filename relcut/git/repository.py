"""Git repository abstraction.

This module provides the Repository class, the git-CLI implementation of
the operations a release needs. All operations return Result types; refusals
the release flow cares about (tag or branch already exists, nothing to
commit) are classified through ``GitError.reason``.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.list_tags():
        case Ok(tags):
            for tag in tags:
                print(tag.name, tag.commit_timestamp)
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from relcut.core.config import DEFAULT_GIT_NETWORK_TIMEOUT_SECONDS, DEFAULT_GIT_TIMEOUT_SECONDS
from relcut.core.result import Err, Ok, Result
from relcut.platform.process import ProcessError
from relcut.platform.process import run as run_process

__all__ = [
    "Commit",
    "GitError",
    "GitErrorReason",
    "Repository",
    "Tag",
    "TagRef",
    "find_repo_root",
]

GitErrorReason = Literal["failed", "already_exists", "nothing_to_commit"]

_NETWORK_COMMANDS = frozenset({"fetch", "pull", "push", "clone"})

# refname, peeled commit date (annotated tags), commit date (lightweight tags)
_TAG_FORMAT = "%(refname:strip=2)%09%(*committerdate:unix)%09%(committerdate:unix)"

# git translates its diagnostics; refusals are classified on the C-locale text
_UNTRANSLATED_ENV = {"LC_ALL": "C", "LANGUAGE": ""}

_NOTHING_TO_COMMIT_MARKERS = (
    "nothing to commit",
    "nothing added to commit",
    "no changes added to commit",
)


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
        reason: Classification of well-known refusals
    """

    command: str
    message: str
    returncode: int = 1
    reason: GitErrorReason = "failed"


@dataclass(frozen=True, slots=True)
class TagRef:
    """A tag and the commit time of the commit it references.

    Attributes:
        name: Short tag name (e.g. "v1.4")
        commit_timestamp: Committer date of the tagged commit, seconds since epoch
    """

    name: str
    commit_timestamp: int


@dataclass(frozen=True, slots=True)
class Commit:
    """A commit created by this tool."""

    sha: str
    message: str


@dataclass(frozen=True, slots=True)
class Tag:
    """An annotated tag created by this tool."""

    name: str
    message: str
    target: Commit


def find_repo_root(start: Path) -> Path | None:
    """Search upward from start for a directory containing ``.git``.

    Returns the repository root if found, None otherwise.
    """
    for parent in (start, *start.parents):
        if (parent / ".git").exists():
            return parent
    return None


class Repository:
    """Git repository driven through the ``git`` command line.

    Attributes:
        path: Path to the repository root
    """

    def __init__(
        self,
        path: Path,
        *,
        timeout: float = DEFAULT_GIT_TIMEOUT_SECONDS,
        network_timeout: float = DEFAULT_GIT_NETWORK_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize repository.

        Args:
            path: Path to repository root (containing .git)
            timeout: Timeout for local commands, in seconds
            network_timeout: Timeout for fetch/push, in seconds
        """
        self.path = path
        self._timeout = timeout
        self._network_timeout = network_timeout

    def exists(self) -> bool:
        """Check if this is a git repository (.git dir, or file for worktrees)."""
        return (self.path / ".git").exists()

    def is_valid_tag_name(self, name: str) -> Result[bool, GitError]:
        """Ask git whether name can be used as a tag name.

        Names starting with "-" are refused too: git would read them as options.
        """
        if not name or name.startswith("-") or "\0" in name:
            return Ok(False)
        result = self._run(["check-ref-format", f"refs/tags/{name}"])
        if isinstance(result, Ok):
            return Ok(True)
        if result.error.returncode == 1:
            return Ok(False)
        return Err(self._error("check-ref-format", result.error, "check-ref-format failed"))

    def fetch(self, remote: str) -> Result[None, GitError]:
        """Refresh remote-tracking refs (and followed tags) from remote."""
        result = self._run(["fetch", remote])
        if isinstance(result, Err):
            return Err(self._error(f"fetch {remote}", result.error, "fetch failed"))
        return Ok(None)

    def list_tags(self) -> Result[list[TagRef], GitError]:
        """List tags with the commit time of the commit each one references.

        Tags are returned in refname order. Tags that do not reference a
        commit (e.g. a tag on a tree) are skipped.
        """
        result = self._run(["for-each-ref", f"--format={_TAG_FORMAT}", "refs/tags"])
        if isinstance(result, Err):
            return Err(self._error("for-each-ref refs/tags", result.error, "listing tags failed"))
        return Ok(self._parse_tags(result.value))

    def checkout(
        self,
        branch: str,
        *,
        create_branch: bool = False,
        start_point: str | None = None,
    ) -> Result[None, GitError]:
        """Switch to branch, optionally creating it at start_point.

        Creating a branch that already exists fails with reason "already_exists".
        """
        args = ["checkout"]
        if create_branch:
            args.extend(["-b", branch])
            if start_point is not None:
                args.append(start_point)
        else:
            args.append(branch)

        result = self._run(args)
        if isinstance(result, Err):
            error = self._error(" ".join(args), result.error, "checkout failed")
            if create_branch and "already exists" in error.message:
                error = _with_reason(error, "already_exists")
            return Err(error)
        return Ok(None)

    def stage(self, paths: Sequence[str]) -> Result[None, GitError]:
        """Stage exactly the given repository-relative paths."""
        result = self._run(["add", "--", *paths])
        if isinstance(result, Err):
            return Err(self._error("add", result.error, "git add failed"))
        return Ok(None)

    def commit(self, message: str) -> Result[Commit, GitError]:
        """Commit the index.

        An empty index fails with reason "nothing_to_commit".
        """
        result = self._run(["commit", "-m", message])
        if isinstance(result, Err):
            error = self._error("commit", result.error, "git commit failed")
            lowered = result.error.output.lower()
            if any(marker in lowered for marker in _NOTHING_TO_COMMIT_MARKERS):
                error = _with_reason(error, "nothing_to_commit")
            return Err(error)

        sha = self._run(["rev-parse", "HEAD"])
        if isinstance(sha, Err):
            return Err(self._error("rev-parse HEAD", sha.error, "could not resolve HEAD"))
        return Ok(Commit(sha=sha.value.strip(), message=message))

    def create_tag(self, name: str, message: str, points_to: Commit) -> Result[Tag, GitError]:
        """Create an annotated tag on a commit.

        Existing tags are never overwritten: the call fails with reason
        "already_exists" instead.
        """
        result = self._run(["tag", "-a", name, "-m", message, points_to.sha])
        if isinstance(result, Err):
            error = self._error(f"tag {name}", result.error, "git tag failed")
            if "already exists" in error.message:
                error = _with_reason(error, "already_exists")
            return Err(error)
        return Ok(Tag(name=name, message=message, target=points_to))

    def push(
        self,
        remote: str,
        refs: Sequence[str],
        *,
        include_tags: bool = False,
    ) -> Result[None, GitError]:
        """Push refs to remote, plus all tags when include_tags is set."""
        args = ["push"]
        if include_tags:
            args.append("--tags")
        args.extend([remote, *refs])

        result = self._run(args)
        if isinstance(result, Err):
            return Err(self._error(f"push {remote}", result.error, "push failed"))
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = self._network_timeout if command in _NETWORK_COMMANDS else self._timeout
        env = {**os.environ, **_UNTRANSLATED_ENV}
        return run_process(
            ["git", "-C", str(self.path), *args], cwd=self.path, env=env, timeout=timeout
        )

    @staticmethod
    def _error(command: str, e: ProcessError, fallback: str) -> GitError:
        return GitError(command=command, message=e.output or fallback, returncode=e.returncode)

    @staticmethod
    def _parse_tags(output: str) -> list[TagRef]:
        tags: list[TagRef] = []
        for line in output.splitlines():
            if not line.strip():
                continue
            name, _, rest = line.partition("\t")
            peeled, _, direct = rest.partition("\t")
            stamp = peeled.strip() or direct.strip()
            if not stamp.isdigit():
                continue
            tags.append(TagRef(name=name.strip(), commit_timestamp=int(stamp)))
        return tags


def _with_reason(error: GitError, reason: GitErrorReason) -> GitError:
    return GitError(
        command=error.command,
        message=error.message,
        returncode=error.returncode,
        reason=reason,
    )
