"""Tolerant decoding of JSON answers returned by language models."""

from __future__ import annotations

import json
import re
from typing import Any

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)
_STRAY_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Return the payload of a markdown-fenced answer, or the text itself."""
    match = _FENCED_BLOCK.search(text)
    if match:
        return match.group(1).strip()
    return _STRAY_FENCE.sub("", text).strip()


def parse_json_object(text: str) -> dict[str, Any] | None:
    """Parse a (possibly fenced) JSON object; None if it is not one."""
    try:
        parsed = json.loads(strip_code_fences(text))
    except ValueError:
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed


def as_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value
    return str(value)


def as_string_list(value: Any) -> list[str]:
    """Coerce a decoded JSON value into a list of strings; nulls are dropped."""
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value if item is not None]
