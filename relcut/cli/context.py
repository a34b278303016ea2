from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from relcut.core.config import CONFIG_FILE_NAME, Config, load_config_or_default
from relcut.core.errors import ErrorCode
from relcut.core.result import Err
from relcut.git.repository import Repository, find_repo_root
from relcut.output.console import ConsoleProtocol, RichConsole

REPO_ENV_VAR = "RELCUT_REPO"


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo_root: Path
    repository: Repository
    config: Config
    console: ConsoleProtocol


def detect_repo_root() -> Path | None:
    """RELCUT_REPO (set by --repo) wins, else search upward from the cwd."""
    env = os.environ.get(REPO_ENV_VAR)
    if env:
        root = Path(env).expanduser().resolve()
        return root if Repository(root).exists() else None
    return find_repo_root(Path.cwd().resolve())


def build_context() -> CLIContext:
    repo_root = detect_repo_root()
    if repo_root is None:
        typer.echo("error: not inside a git repository (use --repo)", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    config_result = load_config_or_default(repo_root / CONFIG_FILE_NAME)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    config = config_result.value

    return CLIContext(
        repo_root=repo_root,
        repository=Repository(
            repo_root,
            timeout=config.git.timeout,
            network_timeout=config.git.network_timeout,
        ),
        config=config,
        console=RichConsole(),
    )
