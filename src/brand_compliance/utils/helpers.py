"""
Shared helper functions.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any


def dig(data: Any, *keys: str, default: Any = None) -> Any:
    """Walk nested mappings, returning `default` as soon as a level is missing."""
    current = data
    for key in keys:
        if not isinstance(current, Mapping):
            return default
        current = current.get(key)
        if current is None:
            return default
    return current


def as_list(value: Any) -> list:
    """Coerce None / scalars / sequences into a list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def env_flag(value: str | None) -> bool:
    """Interpret an environment switch. Only the literal 'true' (any case) enables it."""
    return (value or "").strip().lower() == "true"


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with a trailing 'Z'."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
