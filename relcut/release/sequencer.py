"""Release sequencer: fetch, version, notes, commit, tag, branch, push.

The run is strictly linear and fail-fast. The first failing step ends the
run; nothing is retried and nothing already done is undone, so a failed push
leaves the local commit, tag and branch in place for the operator to inspect.
"""

from __future__ import annotations

from enum import Enum, auto
from pathlib import Path

from relcut.core.config import ReleaseConfig
from relcut.core.result import Err, Ok, Result
from relcut.git.repository import Commit, GitError
from relcut.output.console import ConsoleProtocol, Style
from relcut.release.errors import ReleaseError, ReleaseErrorKind
from relcut.release.notes import render_release_notes, write_release_notes
from relcut.release.ports import GitOperations
from relcut.release.templates import release_branch_name, release_commit_message
from relcut.release.version import BASE_VERSION, increment_version, latest_version_tag

__all__ = ["ReleaseSequencer", "ReleaseStage"]


class ReleaseStage(Enum):
    IDLE = auto()
    SYNCED = auto()
    VERSION_RESOLVED = auto()
    ON_BASE_BRANCH = auto()
    NOTES_WRITTEN = auto()
    COMMITTED = auto()
    TAGGED = auto()
    BRANCHED = auto()
    PUSHED = auto()
    DONE = auto()
    FAILED = auto()


class ReleaseSequencer:
    """Cuts one release from the base branch.

    Attributes:
        stage: Last stage reached; FAILED once a step has failed
        failed_at: Stage that was being entered when the run failed
        error: The error that ended the run, if any
    """

    def __init__(
        self,
        git: GitOperations,
        *,
        repo_root: Path,
        config: ReleaseConfig,
        console: ConsoleProtocol,
        dry_run: bool = False,
    ) -> None:
        self._git = git
        self._repo_root = repo_root
        self._config = config
        self._console = console
        self._dry_run = dry_run

        self.stage = ReleaseStage.IDLE
        self.failed_at: ReleaseStage | None = None
        self.error: ReleaseError | None = None

    def prepare_release(
        self,
        version_override: str | None = None,
        release_notes_url: str | None = None,
    ) -> Result[str, ReleaseError]:
        """Run every step in order and return the new version."""
        if self.stage is not ReleaseStage.IDLE:
            raise RuntimeError(f"release sequencer already used (stage: {self.stage.name})")

        synced = self._sync()
        if isinstance(synced, Err):
            return self._fail(ReleaseStage.SYNCED, synced.error)
        self.stage = ReleaseStage.SYNCED

        resolved = self.resolve_version(version_override)
        if isinstance(resolved, Err):
            return self._fail(ReleaseStage.VERSION_RESOLVED, resolved.error)
        version = resolved.value
        self.stage = ReleaseStage.VERSION_RESOLVED

        on_base = self._checkout_base_branch()
        if isinstance(on_base, Err):
            return self._fail(ReleaseStage.ON_BASE_BRANCH, on_base.error)
        self.stage = ReleaseStage.ON_BASE_BRANCH

        written = self._update_release_notes(version, release_notes_url)
        if isinstance(written, Err):
            return self._fail(ReleaseStage.NOTES_WRITTEN, written.error)
        self.stage = ReleaseStage.NOTES_WRITTEN

        committed = self._commit_release_notes(version)
        if isinstance(committed, Err):
            return self._fail(ReleaseStage.COMMITTED, committed.error)
        self.stage = ReleaseStage.COMMITTED

        tagged = self._create_release_tag(committed.value, version)
        if isinstance(tagged, Err):
            return self._fail(ReleaseStage.TAGGED, tagged.error)
        self.stage = ReleaseStage.TAGGED

        branched = self._create_release_branch(version)
        if isinstance(branched, Err):
            return self._fail(ReleaseStage.BRANCHED, branched.error)
        self.stage = ReleaseStage.BRANCHED

        pushed = self._push_release(branched.value)
        if isinstance(pushed, Err):
            return self._fail(ReleaseStage.PUSHED, pushed.error)
        self.stage = ReleaseStage.PUSHED

        self.stage = ReleaseStage.DONE
        return Ok(version)

    def resolve_version(self, version_override: str | None = None) -> Result[str, ReleaseError]:
        """Use the override when given, else bump the most recent version tag."""
        if version_override is not None and version_override.strip():
            version = version_override
            valid = self._git.is_valid_tag_name(version)
            if isinstance(valid, Err):
                return Err(
                    _git_failure("git_failed", "could not validate the version name", valid.error)
                )
            if not valid.value:
                return Err(
                    ReleaseError(
                        kind="invalid_version_format",
                        message=f"version name {version!r} is not a valid tag name",
                    )
                )
            self._console.success(f"New version: {version}")
            return Ok(version)

        self._console.warning("Version name not provided, determining from the latest git tag...")
        tags = self._git.list_tags()
        if isinstance(tags, Err):
            return Err(_git_failure("git_failed", "failed to list tags", tags.error))

        latest = latest_version_tag(tags.value)
        if latest is None:
            self._console.warning(f"No version tag found, going with {BASE_VERSION}...")
            latest = BASE_VERSION
        else:
            self._console.info(f"Latest tag found: {latest}")

        version = increment_version(latest)
        if isinstance(version, Ok):
            self._console.success(f"New version: {version.value}")
        return version

    def _sync(self) -> Result[None, ReleaseError]:
        remote = self._config.remote
        self._console.info(f"Fetching latest data from {remote}...")
        if self._dry_run:
            self._echo(f"git fetch {remote}")
            return Ok(None)

        return self._git.fetch(remote).map_err(
            lambda e: _git_failure("remote_sync", f"failed to fetch from '{remote}'", e)
        )

    def _checkout_base_branch(self) -> Result[None, ReleaseError]:
        branch = self._config.base_branch
        if self._dry_run:
            self._echo(f"git checkout {branch}")
            return Ok(None)

        return self._git.checkout(branch).map_err(
            lambda e: _git_failure(
                "checkout",
                f"failed to switch to base branch '{branch}'",
                e,
                hint="Commit or stash local changes, and make sure the branch exists.",
            )
        )

    def _update_release_notes(
        self,
        version: str,
        notes_url: str | None,
    ) -> Result[None, ReleaseError]:
        if notes_url is None or not notes_url.strip():
            self._console.warning("No release notes URL provided...")

        rel_path = self._config.notes_path
        self._console.info(f"Updating release notes at: {rel_path}")
        if self._dry_run:
            content = render_release_notes(version=version, notes_url=notes_url)
            self._echo(f"write {rel_path}: {content!r}")
            return Ok(None)

        written = write_release_notes(
            repo_root=self._repo_root,
            rel_path=rel_path,
            version=version,
            notes_url=notes_url,
        )
        return written.map(lambda _: None)

    def _commit_release_notes(self, version: str) -> Result[Commit, ReleaseError]:
        message = release_commit_message(version)
        rel_path = self._config.notes_path
        self._console.info(f'Adding and committing changes: "{message}"')
        if self._dry_run:
            self._echo(f"git add -- {rel_path}")
            self._echo(f'git commit -m "{message}"')
            return Ok(Commit(sha="(dry-run)", message=message))

        staged = self._git.stage([rel_path])
        if isinstance(staged, Err):
            return Err(_git_failure("git_failed", f"failed to stage {rel_path}", staged.error))

        def classify(e: GitError) -> ReleaseError:
            if e.reason == "nothing_to_commit":
                return _git_failure(
                    "no_changes",
                    f"nothing to commit: {rel_path} already reads '{version}'",
                    e,
                )
            return _git_failure(
                "git_failed",
                "git commit failed",
                e,
                hint="Configure git user.name/user.email, then retry.",
            )

        return self._git.commit(message).map_err(classify)

    def _create_release_tag(self, commit: Commit, version: str) -> Result[None, ReleaseError]:
        message = release_commit_message(version)
        self._console.info(f"Creating git tag: {version}")
        if self._dry_run:
            self._echo(f'git tag -a {version} -m "{message}" HEAD')
            return Ok(None)

        def classify(e: GitError) -> ReleaseError:
            if e.reason == "already_exists":
                return _git_failure(
                    "tag_exists",
                    f"tag already exists: {version}",
                    e,
                    hint=f"Delete the stale tag (git tag -d {version}) or pass another version name.",
                )
            return _git_failure("git_failed", f"failed to create tag {version}", e)

        return self._git.create_tag(version, message, commit).map(lambda _: None).map_err(classify)

    def _create_release_branch(self, version: str) -> Result[str, ReleaseError]:
        branch = release_branch_name(version)
        self._console.info(f"Creating new branch '{branch}' from '{version}' tag...")
        if self._dry_run:
            self._echo(f"git checkout -b {branch} {version}")
            return Ok(branch)

        def classify(e: GitError) -> ReleaseError:
            if e.reason == "already_exists":
                return _git_failure(
                    "branch_exists",
                    f"branch already exists: {branch}",
                    e,
                    hint=f"Delete the stale branch (git branch -D {branch}) then retry.",
                )
            return _git_failure("checkout", f"failed to create branch {branch}", e)

        created = self._git.checkout(branch, create_branch=True, start_point=version)
        return created.map(lambda _: branch).map_err(classify)

    def _push_release(self, branch: str) -> Result[None, ReleaseError]:
        remote = self._config.remote
        refs = [self._config.base_branch, branch]
        self._console.info(f"Pushing release branch and tag to '{remote}'...")
        if self._dry_run:
            self._echo(f"git push --tags {remote} {' '.join(refs)}")
            return Ok(None)

        return self._git.push(remote, refs, include_tags=True).map_err(
            lambda e: _git_failure(
                "remote_push",
                f"failed to push to '{remote}'",
                e,
                hint="Local commit, tag and branch were kept; push them manually once fixed.",
            )
        )

    def _fail(self, entering: ReleaseStage, error: ReleaseError) -> Err[ReleaseError]:
        self.stage = ReleaseStage.FAILED
        self.failed_at = entering
        self.error = error
        return Err(error)

    def _echo(self, command: str) -> None:
        self._console.print(f"  {command}", Style.DIM)


def _git_failure(
    kind: ReleaseErrorKind,
    message: str,
    e: GitError,
    *,
    hint: str | None = None,
) -> ReleaseError:
    detail = e.message.strip()
    if hint is None:
        hint = detail or None
    elif detail:
        message = f"{message}: {detail}"
    return ReleaseError(kind=kind, message=message, hint=hint)
