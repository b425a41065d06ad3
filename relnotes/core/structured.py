"""Narrowing helpers for untyped JSON/TOML data.

The manifest (JSON) and `relnotes.toml` (TOML) both arrive as plain `object`
trees. These helpers check shapes at runtime and narrow types for the checker.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d)


def as_str_dict(obj: object) -> StrDict | None:
    return obj if is_str_dict(obj) else None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Return a stripped, non-empty string value or None.

    Numbers are not coerced: a manifest entry `"file-version": 2` is treated
    as missing rather than guessed at.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def get_text(table: Mapping[str, object], key: str) -> str | None:
    """Return a string value exactly as written, or None if it is blank."""
    value = table.get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))


def get_str_list(table: Mapping[str, object], key: str) -> list[str] | None:
    """Return the list of non-empty strings under key, or None if not a list."""
    value = table.get(key)
    if not isinstance(value, list):
        return None
    items = cast(list[object], value)
    return [s.strip() for s in items if isinstance(s, str) and s.strip()]
