from __future__ import annotations

import typer

from relcut.cli.commands._helpers import exit_on_release_error
from relcut.cli.context import build_context
from relcut.core.result import Err
from relcut.release.errors import ReleaseError
from relcut.release.version import next_version_from_tags


def next_version() -> None:
    """Print the version the next release would get (local tags only, no fetch)."""
    ctx = build_context()

    tags = ctx.repository.list_tags()
    if isinstance(tags, Err):
        exit_on_release_error(
            ReleaseError(kind="git_failed", message="failed to list tags", hint=tags.error.message),
            ctx.console,
        )

    result = next_version_from_tags(tags.value)
    if isinstance(result, Err):
        exit_on_release_error(result.error, ctx.console)
    typer.echo(result.value)
