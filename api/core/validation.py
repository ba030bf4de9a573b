"""
Request-body field presence checks.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def _has_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def is_available(body: Mapping[str, Any] | None, fields: Iterable[str], all_required: bool = True) -> bool:
    """
    Check that fields are present in `body` with a non-empty value.

    all_required=True: every field must be present.
    all_required=False: at least one field must be present.
    """
    body = body or {}
    checks = [_has_value(body.get(name)) for name in fields]
    if not checks:
        return False
    return all(checks) if all_required else any(checks)


def pick_fields(body: Mapping[str, Any] | None, allowed: Iterable[str]) -> dict[str, Any]:
    """
    Keep only allow-listed keys that carry a non-empty value.
    Strings are stripped.
    """
    body = body or {}
    picked: dict[str, Any] = {}
    for name in allowed:
        value = body.get(name)
        if not _has_value(value):
            continue
        picked[name] = value.strip() if isinstance(value, str) else value
    return picked
