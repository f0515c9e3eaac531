"""Field-level diff between two raw attribute bags."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class FieldDiff:
    field_name: str
    old_value: str | None
    new_value: str | None


def serialize_value(value: Any) -> str | None:
    """Normalize one attribute to the string form stored in the change log.

    None stays None, strings pass through, booleans become ``true``/``false``,
    integral floats lose their ``.0`` and dicts/lists become compact JSON.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def diff_records(
    old: Mapping[str, Any] | None, new: Mapping[str, Any] | None
) -> list[FieldDiff]:
    """Return every key of either record whose serialized values differ.

    Keys are reported in order of first appearance: old record first, then
    keys only present in the new record. A key missing on one side is
    compared as None.
    """
    old = old or {}
    new = new or {}

    keys = list(old.keys())
    seen = set(keys)
    keys.extend(key for key in new.keys() if key not in seen)

    diffs: list[FieldDiff] = []
    for key in keys:
        old_value = serialize_value(old.get(key))
        new_value = serialize_value(new.get(key))
        if old_value != new_value:
            diffs.append(FieldDiff(field_name=key, old_value=old_value, new_value=new_value))
    return diffs
