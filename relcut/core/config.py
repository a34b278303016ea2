"""Typed configuration loading.

The optional ``relcut.toml`` at the repository root tunes where releases are
cut from and where the release notes live:

    [release]
    remote = "origin"
    base_branch = "main"
    notes_path = "tools/release/release_notes.txt"

    [git]
    timeout = 30
    network_timeout = 180
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_positive_number, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "Config",
    "ConfigError",
    "GitConfig",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "relcut.toml"

DEFAULT_REMOTE = "origin"
DEFAULT_BASE_BRANCH = "main"
DEFAULT_NOTES_PATH = "tools/release/release_notes.txt"

# Local git operations (tag listing, checkout, add, commit, tag)
DEFAULT_GIT_TIMEOUT_SECONDS = 30.0

# Network-bound git operations (fetch, push)
DEFAULT_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Where releases are cut from and where the notes file lives."""

    remote: str = DEFAULT_REMOTE
    base_branch: str = DEFAULT_BASE_BRANCH
    notes_path: str = DEFAULT_NOTES_PATH


@dataclass(frozen=True, slots=True)
class GitConfig:
    """Subprocess timeouts for git, in seconds."""

    timeout: float = DEFAULT_GIT_TIMEOUT_SECONDS
    network_timeout: float = DEFAULT_GIT_NETWORK_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    git: GitConfig = field(default_factory=GitConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from parsed TOML.

        Raises:
            TypeError: If a value has the wrong type.
            ValueError: If a timeout is not positive or notes_path escapes the repository.
        """
        release: StrDict = get_table(data, "release") or {}
        git: StrDict = get_table(data, "git") or {}

        notes_path = get_str(release, "notes_path") or DEFAULT_NOTES_PATH
        _check_relative(notes_path)

        return cls(
            release=ReleaseConfig(
                remote=get_str(release, "remote") or DEFAULT_REMOTE,
                base_branch=get_str(release, "base_branch") or DEFAULT_BASE_BRANCH,
                notes_path=notes_path,
            ),
            git=GitConfig(
                timeout=get_positive_number(git, "timeout") or DEFAULT_GIT_TIMEOUT_SECONDS,
                network_timeout=get_positive_number(git, "network_timeout")
                or DEFAULT_GIT_NETWORK_TIMEOUT_SECONDS,
            ),
        )


def _check_relative(notes_path: str) -> None:
    p = PurePosixPath(notes_path.replace("\\", "/"))
    if p.is_absolute() or ".." in p.parts:
        raise ValueError(f"release.notes_path must stay inside the repository: {notes_path}")


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relcut.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, defaults otherwise.

    A file that exists but is broken is still an error: silently falling
    back would cut a release from the wrong branch.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
