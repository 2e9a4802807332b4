"""Argument helpers shared by tool handlers."""

from __future__ import annotations

from typing import Any

from ..errors import SmartToolError


def require_str(tool: str, args: dict[str, Any], key: str) -> str:
    value = args.get(key)
    if not isinstance(value, str) or not value:
        raise SmartToolError(
            tool=tool,
            action="validate",
            reason=f"Missing required argument: {key}",
            suggestion=f"Pass '{key}' as a non-empty string",
        )
    return value


def require_text(tool: str, args: dict[str, Any], key: str) -> str:
    """Like require_str, but an empty string is a legitimate value."""
    value = args.get(key)
    if not isinstance(value, str):
        raise SmartToolError(
            tool=tool,
            action="validate",
            reason=f"Missing required argument: {key}",
            suggestion=f"Pass '{key}' as a string",
        )
    return value


def clamp_timeout(args: dict[str, Any], *, default: int, low: int, high: int, key: str = "timeout") -> int:
    """Read a millisecond timeout, falling back to ``default`` and clamping to [low, high]."""
    raw = args.get(key)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return max(low, min(value, high))


def as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in {"0", "false", "no", "off", ""}
    return bool(value)
