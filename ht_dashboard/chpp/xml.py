"""Convert HattrickData XML documents into JSON-compatible dicts.

Conversion rules:
- child elements become keys, repeated children become lists
- attributes are merged into the element's dict under their own names
- text of an element that also has attributes is stored under ``_text``
- integer and decimal text is coerced to numbers, everything else stays a string

Keys are kept verbatim (``KeeperSkill``, ``PlayerForm``...) because they
become change-log field names and scoring inputs downstream.
"""

from __future__ import annotations

import re
from typing import Any

from bs4 import BeautifulSoup, Tag

from .exceptions import ChppParseError

ROOT_ELEMENT = "HattrickData"
TEXT_KEY = "_text"

_INT_RE = re.compile(r"^-?(0|[1-9]\d*)$")
_FLOAT_RE = re.compile(r"^-?\d+\.\d+$")


def coerce_scalar(text: str) -> Any:
    """Turn numeric text into int/float; leave anything else untouched."""
    if _INT_RE.match(text):
        return int(text)
    if _FLOAT_RE.match(text):
        return float(text)
    return text


def element_to_value(tag: Tag) -> Any:
    children = [child for child in tag.children if isinstance(child, Tag)]
    attributes: dict[str, Any] = {
        name: coerce_scalar(str(value)) for name, value in tag.attrs.items()
    }

    if not children:
        text = tag.get_text().strip()
        if not attributes:
            return coerce_scalar(text)
        if text:
            attributes[TEXT_KEY] = coerce_scalar(text)
        return attributes

    result: dict[str, Any] = attributes
    repeated: set[str] = set()
    for child in children:
        key = child.name
        value = element_to_value(child)
        if key not in result:
            result[key] = value
        elif key in repeated:
            result[key].append(value)
        else:
            result[key] = [result[key], value]
            repeated.add(key)
    return result


def parse_chpp_xml(text: str) -> dict[str, Any]:
    """Parse a CHPP response body and return the HattrickData mapping."""
    if not text or not text.strip():
        raise ChppParseError("Empty CHPP response body")
    soup = BeautifulSoup(text, "xml")
    root = soup.find(ROOT_ELEMENT)
    if root is None:
        raise ChppParseError(f"Missing {ROOT_ELEMENT} root element")
    value = element_to_value(root)
    if not isinstance(value, dict):
        raise ChppParseError(f"{ROOT_ELEMENT} has no child elements")
    return value


def ensure_list(value: Any) -> list[Any]:
    """Single XML children come back as scalars/dicts; normalize to a list."""
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return value
    return [value]


def as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}
