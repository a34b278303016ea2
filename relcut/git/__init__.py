"""Git operations module.

Usage:
    from relcut.git import Repository, find_repo_root

    repo = Repository(find_repo_root(Path.cwd()))
    tags = repo.list_tags()
"""

from relcut.git.repository import (
    Commit,
    GitError,
    GitErrorReason,
    Repository,
    Tag,
    TagRef,
    find_repo_root,
)

__all__ = [
    "Commit",
    "GitError",
    "GitErrorReason",
    "Repository",
    "Tag",
    "TagRef",
    "find_repo_root",
]
