"""Lookups over loosely-typed provider records.

The analytics provider names the same metric differently per platform and per
API version ("likes", "likeCount", "reactions", ...). Callers pass the candidate
names in priority order and take the first usable value.
"""

import math
import re
from typing import Any, Mapping

# Leading float, the same prefix a lenient parser accepts ("12.5k" -> 12.5)
_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

STRUCTURED_DATE_KEYS = ("publishedAt", "created", "createTime", "publicationDate")
FLAT_DATE_KEYS = ("publishDate", "date", "timestamp", "createdAt", "created", "postedAt")


def _parse_number(value: Any) -> float | None:
    """Coerce a native number or numeric string, None when not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if not match:
            return None
        number = float(match.group(0))
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def extract_number(record: Mapping[str, Any], *keys: str) -> float:
    """Return the first numeric value found under ``keys``, else 0."""
    for key in keys:
        number = _parse_number(record.get(key))
        if number is not None:
            return number
    return 0


def extract_string(record: Mapping[str, Any], *keys: str) -> str:
    """Return the first non-empty string found under ``keys``, else ""."""
    for key in keys:
        value = record.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


def extract_date(record: Mapping[str, Any]) -> str:
    """Return the publish date as the provider spelled it, else "".

    v2 responses wrap dates as ``{"dateTime": ..., "timezone": ...}``; older
    responses use flat strings.
    """
    for key in STRUCTURED_DATE_KEYS:
        value = record.get(key)
        if isinstance(value, str) and value:
            return value
        if isinstance(value, Mapping):
            nested = value.get("dateTime")
            if isinstance(nested, str) and nested:
                return nested
    return extract_string(record, *FLAT_DATE_KEYS)
