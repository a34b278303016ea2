"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from relcut.core.errors import ErrorCode
from relcut.output.console import ConsoleProtocol, Style
from relcut.release.errors import ReleaseError


def release_error_code(error: ReleaseError) -> ErrorCode:
    match error.kind:
        case "remote_sync" | "remote_push":
            return ErrorCode.NETWORK_ERROR
        case "notes_write":
            return ErrorCode.IO_ERROR
        case "checkout" | "git_failed":
            return ErrorCode.ENV_ERROR
        case _:
            return ErrorCode.USER_ERROR


def exit_on_release_error(error: ReleaseError, console: ConsoleProtocol) -> NoReturn:
    """Print the error (and hint) then exit with the matching code."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(release_error_code(error)))
