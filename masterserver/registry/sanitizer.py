"""Listing field sanitizer."""

from __future__ import annotations

import re
from typing import Any, Mapping

# Everything outside letters, digits, hyphen, colon and whitespace is dropped.
_DISALLOWED = re.compile(r"[^-:a-zA-Z0-9\s]+")


def to_text(value: Any) -> str:
    """Coerce a decoded JSON value to the string a JS client would produce."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, dict):
        return "[object Object]"
    if isinstance(value, list):
        return ",".join(to_text(v) for v in value)
    return str(value)


def sanitize_value(value: Any) -> str:
    return _DISALLOWED.sub("", to_text(value))


def sanitize(fields: Mapping[str, Any]) -> dict[str, str]:
    """Return a copy of *fields* with every value sanitized to a string.

    Never rejects: a value with nothing left after filtering becomes "".
    """
    return {str(k): sanitize_value(v) for k, v in fields.items()}
