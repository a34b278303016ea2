"""Helpers for reading untyped TOML tables.

Used at the config boundary so the rest of the code only sees typed values.
A missing key reads as None. A key that is present with the wrong type or an
out-of-range value raises, so a broken config never silently turns into
defaults.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value, stripped.

    Returns None if missing or empty after stripping.

    Raises:
        TypeError: If the value is not a string.
    """
    if key not in table:
        return None
    value = table[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value.strip() or None


def get_positive_number(table: Mapping[str, object], key: str) -> float | None:
    """Get a positive int or float value.

    Raises:
        TypeError: If the value is not a number (booleans included).
        ValueError: If the value is zero or negative.
    """
    if key not in table:
        return None
    value = table[key]
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise TypeError(f"'{key}' must be a number, got {type(value).__name__}")
    if value <= 0:
        raise ValueError(f"'{key}' must be positive, got {value}")
    return float(value)


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table from a mapping.

    Raises:
        TypeError: If the value is not a table.
    """
    if key not in table:
        return None
    value = as_str_dict(table[key])
    if value is None:
        raise TypeError(f"[{key}] must be a table")
    return value
