"""
Generic, format-agnostic parsing utilities.

This module must NOT depend on format-specific libraries (like BeautifulSoup)
so it can be used on values coming from XML, JSON snapshots or query strings.
"""

from __future__ import annotations

import math
from typing import Any


def parse_int(value: Any) -> int | None:
    """Parse a value to an integer, handling common edge cases.

    Accepts strings, ints, floats, or None. Returns None for empty strings or "-".
    """
    if value in (None, "", "-") or isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (ValueError, TypeError):
        return None


def parse_float(value: Any) -> float | None:
    """Best-effort numeric extraction; non-numeric or non-finite values give None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if text in ("", "-"):
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def parse_bool(value: Any) -> bool | None:
    """Parse CHPP style booleans ("True"/"False", 1/0)."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    normalized = str(value).strip().lower()
    if normalized in {"true", "1", "yes"}:
        return True
    if normalized in {"false", "0", "no"}:
        return False
    return None


def to_number(value: Any) -> float:
    """Numeric value or 0 for anything missing/non-numeric."""
    parsed = parse_float(value)
    return parsed if parsed is not None else 0.0
