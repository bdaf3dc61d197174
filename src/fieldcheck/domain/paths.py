"""Dot-notation lookup into nested records.

Pure functions, no infrastructure dependencies. A path such as
``"user.profile.age"`` is walked one segment at a time.

INVARIANT: Lookups never raise for missing paths. Absence is reported
with the :data:`MISSING` sentinel, which is distinct from ``""``, ``0``,
``False``, and ``None``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final


class _Missing:
    """Type of the :data:`MISSING` sentinel."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()

PATH_SEPARATOR = "."


def split_path(path: str) -> list[str]:
    """Split a field path into its segments.

    Examples:
        >>> split_path("user.profile.age")
        ['user', 'profile', 'age']
        >>> split_path("name")
        ['name']
    """
    return path.split(PATH_SEPARATOR)


def resolve_path(data: Mapping[str, Any], path: str) -> Any:
    """Return the value at *path* inside *data*, or :data:`MISSING`.

    Each segment must name a key of a mapping. A missing key, or an
    intermediate value that is not a mapping, resolves to MISSING.
    """
    current: Any = data
    for key in split_path(path):
        if not isinstance(current, Mapping) or key not in current:
            return MISSING
        current = current[key]
    return current
