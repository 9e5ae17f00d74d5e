"""Input sanitizers shared by the request payload models."""

from __future__ import annotations

import math
import re
from typing import Any, List
from urllib.parse import urlparse

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def sanitize_string(value: Any, max_length: int) -> str:
    """Trim and truncate; anything that is not a string becomes ''."""
    if not isinstance(value, str):
        return ""
    return value.strip()[:max_length]


def parse_string_array(value: Any, max_items: int = 20) -> List[str]:
    """Accept a list of strings or a comma-separated string; drop blanks."""
    if isinstance(value, list):
        items = [item.strip() for item in value if isinstance(item, str)]
    elif isinstance(value, str):
        items = [item.strip() for item in value.split(",")]
    else:
        return []
    return [item for item in items if item][:max_items]


def is_valid_http_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value or ""))


def to_slug(value: str, max_length: int = 80) -> str:
    slug = _NON_SLUG_RE.sub("-", (value or "").lower().strip()).strip("-")
    return slug[:max_length]


def parse_boolean(value: Any, fallback: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return fallback


def parse_integer(value: Any, fallback: int = 0) -> int:
    if isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        return math.floor(value) if math.isfinite(value) else fallback
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return fallback
        return math.floor(parsed) if math.isfinite(parsed) else fallback
    return fallback
