"""Content hashing for raw player attribute bags."""

from __future__ import annotations

import hashlib
import json
from typing import Any


def serialize_record(record: Any) -> str:
    """Compact JSON in the record's own key order (keys are not sorted)."""
    return json.dumps(record, separators=(",", ":"), ensure_ascii=False, default=str)


def compute_content_hash(record: Any) -> str:
    """Compute SHA-256 hex digest of a record's serialized form.

    Two records with the same keys in a different order hash differently.
    The digest only gates snapshot creation, so that is acceptable.
    """
    return hashlib.sha256(serialize_record(record).encode("utf-8")).hexdigest()
