"""Redaction utilities for logging.

Prefers safety over fidelity: secrets are replaced by a size summary and long
strings (typed text, scripts) are truncated before they reach a log line.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

MAX_LOGGED_CHARS = 200

_SENSITIVE_KEYS = {
    "secret",
    "password",
    "pass",
    "pwd",
    "token",
    "auth",
    "authorization",
    "cookie",
    "key",
    "api_key",
    "api-key",
}

# Arguments that carry user content rather than identifiers.
_CONTENT_KEYS = {
    "type_text": {"text"},
    "execute_javascript": {"code"},
}


def _is_sensitive_key(key: str) -> bool:
    lk = (key or "").strip().lower()
    if not lk:
        return False
    if lk in _SENSITIVE_KEYS:
        return True
    return any(part in lk for part in ("password", "token", "secret", "apikey", "api_key"))


def _redacted_summary(value: Any) -> str:
    if value is None:
        return "<redacted>"
    if isinstance(value, str):
        return f"<redacted str len={len(value)}>"
    if isinstance(value, (list, tuple, set)):
        return f"<redacted list len={len(value)}>"
    if isinstance(value, dict):
        return f"<redacted dict keys={len(value)}>"
    return "<redacted>"


def redact_url(url: str) -> str:
    """Drop userinfo and mask sensitive query parameters; other params stay."""
    if not isinstance(url, str) or not url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    netloc = parts.netloc.split("@", 1)[1] if "@" in parts.netloc else parts.netloc
    query = parts.query
    if query:
        pairs = parse_qsl(query, keep_blank_values=True)
        if any(_is_sensitive_key(k) for k, _ in pairs):
            query = urlencode([(k, "<redacted>" if _is_sensitive_key(k) else v) for k, v in pairs])
    if netloc == parts.netloc and query == parts.query:
        return url
    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


def truncate_for_log(value: str, max_chars: int = MAX_LOGGED_CHARS) -> str:
    if len(value) <= max_chars:
        return value
    return value[:max_chars] + f"... <truncated len={len(value)}>"


def _redact_any(value: Any, *, tool: str, key: str | None) -> Any:
    if isinstance(value, dict):
        return {k: _redact_any(v, tool=tool, key=str(k)) for k, v in value.items()}
    if isinstance(value, list):
        return [_redact_any(v, tool=tool, key=key) for v in value]

    lk = (key or "").lower()
    if lk and _is_sensitive_key(lk):
        return _redacted_summary(value)
    if lk in _CONTENT_KEYS.get(tool, set()):
        return _redacted_summary(value)
    if isinstance(value, str):
        if lk == "url":
            return redact_url(value)
        return truncate_for_log(value)
    return value


def redact_tool_arguments(tool: str, args: dict[str, Any]) -> dict[str, Any]:
    """Redact tool arguments for safe logging."""
    return _redact_any(args, tool=tool, key=None)


__all__ = ["MAX_LOGGED_CHARS", "redact_tool_arguments", "redact_url", "truncate_for_log"]
