"""Result type for explicit error handling.

Every git call and every release step returns either ``Ok(value)`` or
``Err(error)``. Callers branch on the outcome instead of catching exceptions,
which keeps the fail-fast release sequence readable top to bottom.

Usage:
    match repo.fetch("origin"):
        case Ok(_):
            console.success("fetched")
        case Err(e):
            console.error(e.message)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def map(self, f: Callable[[T], U]) -> Err[E]:
        return self

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Translate the error, e.g. a GitError into a ReleaseError."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[E]
