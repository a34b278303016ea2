"""Console output abstraction.

Release steps report progress through ``ConsoleProtocol`` so the sequencer
does not depend on Rich. Production uses ``RichConsole``; tests use
``MockConsole`` and assert on what would have been printed.

Every status line carries a short prefix (``info:``, ``warning:``, ``error:``,
``OK``) so the output stays readable when piped into a CI log without colors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """How a line is rendered."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()  # echoed git commands, hints

    def __str__(self) -> str:
        return self.name.lower()


# (prefix, rich style) per status style
_STATUS: dict[Style, tuple[str, str]] = {
    Style.SUCCESS: ("OK", "green"),
    Style.ERROR: ("error:", "red bold"),
    Style.WARNING: ("warning:", "yellow"),
    Style.INFO: ("info:", "cyan"),
}

_PLAIN: dict[Style, str] = {
    Style.DEFAULT: "",
    Style.DIM: "dim",
}


class ConsoleProtocol(Protocol):
    """What the release flow needs from a console."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message verbatim, in the given style."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def newline(self) -> None: ...


class RichConsole:
    """Console writing to the terminal through Rich.

    Messages are never interpreted as Rich markup: branch names such as
    ``release/[rc]`` are printed as given.
    """

    def __init__(self) -> None:
        from rich.console import Console

        self._console = Console(highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = _PLAIN.get(style) or _STATUS.get(style, ("", ""))[1]
        self._console.print(message, style=rich_style or None, markup=False)

    def success(self, message: str) -> None:
        self._status(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._status(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._status(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._status(Style.INFO, message)

    def newline(self) -> None:
        self._console.print()

    def _status(self, style: Style, message: str) -> None:
        from rich.text import Text

        prefix, rich_style = _STATUS[style]
        line = Text.assemble((prefix, rich_style), " ", message)
        self._console.print(line)


@dataclass
class OutputRecord:
    """One captured line."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Captures output in memory, with the same prefixes as RichConsole."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self._status(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._status(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._status(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._status(Style.INFO, message)

    def newline(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    def _status(self, style: Style, message: str) -> None:
        prefix = _STATUS[style][0]
        self.outputs.append(OutputRecord(f"{prefix} {message}", style))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    def has_error(self) -> bool:
        return any(o.style is Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style is Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Captured lines containing substring."""
        return [o for o in self.outputs if substring in o.message]
