"""Version-control operations the release sequencer depends on.

``relcut.git.Repository`` satisfies this protocol; tests pass an in-memory
fake instead.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from relcut.core.result import Result
from relcut.git.repository import Commit, GitError, Tag, TagRef


class GitOperations(Protocol):
    def fetch(self, remote: str) -> Result[None, GitError]: ...

    def is_valid_tag_name(self, name: str) -> Result[bool, GitError]: ...

    def list_tags(self) -> Result[list[TagRef], GitError]: ...

    def checkout(
        self,
        branch: str,
        *,
        create_branch: bool = False,
        start_point: str | None = None,
    ) -> Result[None, GitError]: ...

    def stage(self, paths: Sequence[str]) -> Result[None, GitError]: ...

    def commit(self, message: str) -> Result[Commit, GitError]: ...

    def create_tag(self, name: str, message: str, points_to: Commit) -> Result[Tag, GitError]: ...

    def push(
        self,
        remote: str,
        refs: Sequence[str],
        *,
        include_tags: bool = False,
    ) -> Result[None, GitError]: ...
