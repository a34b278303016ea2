from __future__ import annotations

import typer

from relcut.cli.commands._helpers import exit_on_release_error
from relcut.cli.context import build_context
from relcut.core.result import Err
from relcut.release.sequencer import ReleaseSequencer


def prepare(
    version_name: str | None = typer.Option(
        None,
        "--version-name",
        envvar="RELCUT_VERSION_NAME",
        help="Use this version instead of bumping the latest vX.Y tag.",
    ),
    release_notes_url: str | None = typer.Option(
        None,
        "--release-notes-url",
        envvar="RELCUT_RELEASE_NOTES_URL",
        help="URL written under the version line of the release notes.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the git commands without fetching, writing or pushing.",
    ),
) -> None:
    """Prepare a new release from the base branch."""
    ctx = build_context()
    sequencer = ReleaseSequencer(
        ctx.repository,
        repo_root=ctx.repo_root,
        config=ctx.config.release,
        console=ctx.console,
        dry_run=dry_run,
    )

    result = sequencer.prepare_release(version_name, release_notes_url)
    if isinstance(result, Err):
        exit_on_release_error(result.error, ctx.console)

    ctx.console.newline()
    if dry_run:
        ctx.console.success(f"Dry run complete for release {result.value}")
    else:
        ctx.console.success(f"Successfully prepared release {result.value}!")
