from __future__ import annotations

import os
from pathlib import Path

import typer

from relcut import __version__
from relcut.cli.commands.next_version import next_version
from relcut.cli.commands.prepare import prepare
from relcut.cli.context import REPO_ENV_VAR
from relcut.core.errors import ErrorCode
from relcut.git.repository import Repository


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(prepare)
app.command("next-version")(next_version)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    repo: Path | None = typer.Option(
        None,
        "--repo",
        help="Repository root (overrides detection from the current directory)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if repo is not None:
        try:
            root = repo.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --repo: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not Repository(root).exists():
            typer.echo(f"error: --repo '{root}' is not a git repository", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

        os.environ[REPO_ENV_VAR] = str(root)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


def main() -> None:
    app()
