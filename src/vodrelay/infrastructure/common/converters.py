"""Type conversion utilities."""

from __future__ import annotations

import re
from typing import Any

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h|d|y)?\s*$", re.IGNORECASE)

_DURATION_UNITS: dict[str, float] = {
    "ms": 0.001,
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
    "y": 365.25 * 86400,
}


def to_int(raw: str | int | None) -> int | None:
    """Convert string or int to int, return None if invalid.

    Only the leading integer of a string counts, the way query-string
    page numbers are usually read:
        - None → None
        - int → int (passthrough)
        - "3" → 3
        - " 12abc" → 12
        - "-2" → -2
        - "" / "abc" → None
    """
    if raw is None:
        return None

    if isinstance(raw, bool):
        return None

    if isinstance(raw, int):
        return raw

    if isinstance(raw, str):
        match = _LEADING_INT_RE.match(raw)
        if match is None:
            return None
        return int(match.group(1))

    return None


def parse_duration_seconds(raw: str | int | float) -> int:
    """Parse a cache duration like ``"1d"``, ``"12h"``, ``"30m"`` or ``3600``.

    Plain numbers are seconds. Raises ``ValueError`` on anything else.
    """
    if isinstance(raw, bool):
        raise ValueError(f"Invalid duration: {raw!r}")
    if isinstance(raw, (int, float)):
        if raw < 0:
            raise ValueError(f"Duration must be >= 0, got {raw!r}")
        return int(raw)

    match = _DURATION_RE.match(raw)
    if match is None:
        raise ValueError(f"Invalid duration: {raw!r}")
    value = float(match.group(1))
    unit = (match.group(2) or "s").lower()
    return int(value * _DURATION_UNITS[unit])


def split_csv(raw: Any) -> list[str]:
    """Split a comma-separated string into trimmed, non-empty items.

    Lists and tuples pass through (items trimmed, empties dropped).
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, (list, tuple, set, frozenset)):
        items = [str(item) for item in raw]
    else:
        raise TypeError(f"Expected comma-separated string or list, got: {type(raw)!r}")
    return [item.strip() for item in items if item.strip()]
