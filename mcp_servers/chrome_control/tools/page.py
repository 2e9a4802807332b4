"""
Page-level tools.

Provides:
- navigate_to: Navigate a tab to an http(s) URL
- go_back / go_forward: Browser history
- reload_tab: Reload the current page
- get_page_content: Full document HTML
- execute_javascript: Evaluate caller-supplied code (length-capped)
"""

from __future__ import annotations

import urllib.parse
from typing import Any

from ..config import ControlConfig
from ..errors import SmartToolError
from ..http_client import HttpClientError
from .base import get_session

DEFAULT_LOAD_TIMEOUT = 10.0


def ensure_allowed_navigation(url: str, config: ControlConfig) -> None:
    """Only http(s) URLs, and only allowlisted hosts when an allowlist is set."""
    if not isinstance(url, str) or not url.strip():
        raise SmartToolError(
            tool="navigate_to",
            action="validate",
            reason="URL must be a non-empty string",
            suggestion="Pass an absolute http:// or https:// URL",
        )
    parsed = urllib.parse.urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise SmartToolError(
            tool="navigate_to",
            action="validate",
            reason="URL must start with http:// or https://",
            suggestion="Pass an absolute http:// or https:// URL",
            details={"url": url},
        )
    if not config.is_host_allowed(parsed.hostname or ""):
        raise SmartToolError(
            tool="navigate_to",
            action="validate",
            reason=f"Host {parsed.hostname} is not in allowlist",
            suggestion="Add the host to MCP_ALLOW_HOSTS",
            details={"url": url},
        )


def navigate_to(
    config: ControlConfig,
    tab_id: str,
    url: str,
    *,
    wait_load: bool = True,
    timeout: float = DEFAULT_LOAD_TIMEOUT,
) -> dict[str, Any]:
    """Navigate ``tab_id`` to ``url``.

    Returns:
        Dict with url, tab id, and whether the load event was observed
    """
    ensure_allowed_navigation(url, config)

    with get_session(config, tab_id) as (session, _target):
        try:
            loaded = session.navigate(url, wait_load=wait_load, timeout=timeout)
        except HttpClientError as e:
            raise SmartToolError(
                tool="navigate_to",
                action="navigate",
                reason=str(e),
                suggestion="Check URL is valid and accessible",
                details={"url": url},
            ) from e
        return {"success": True, "url": url, "tab_id": tab_id, "loaded": loaded}


def _history(config: ControlConfig, tab_id: str, delta: int, tool: str) -> dict[str, Any]:
    with get_session(config, tab_id) as (session, _target):
        moved = session.history_step(delta, timeout=DEFAULT_LOAD_TIMEOUT)
        if not moved:
            raise SmartToolError(
                tool=tool,
                action="navigate",
                reason="No history entry in that direction",
                suggestion="Ensure there is history to go to",
            )
        return {"success": True, "url": session.get_url(), "tab_id": tab_id}


def go_back(config: ControlConfig, tab_id: str) -> dict[str, Any]:
    """Navigate back in browser history."""
    return _history(config, tab_id, -1, "go_back")


def go_forward(config: ControlConfig, tab_id: str) -> dict[str, Any]:
    """Navigate forward in browser history."""
    return _history(config, tab_id, 1, "go_forward")


def reload_tab(config: ControlConfig, tab_id: str, *, ignore_cache: bool = False) -> dict[str, Any]:
    with get_session(config, tab_id) as (session, _target):
        loaded = session.reload(ignore_cache=ignore_cache, timeout=DEFAULT_LOAD_TIMEOUT)
        return {"success": True, "url": session.get_url(), "tab_id": tab_id, "loaded": loaded}


def get_page_content(config: ControlConfig, tab_id: str) -> dict[str, Any]:
    with get_session(config, tab_id) as (session, _target):
        content = session.get_dom()
        return {
            "success": True,
            "content": content,
            "length": len(content),
            "url": session.get_url(),
            "title": session.get_title(),
            "tab_id": tab_id,
        }


def execute_javascript(config: ControlConfig, tab_id: str, code: str) -> dict[str, Any]:
    """
    Evaluate JavaScript in the tab's page context.

    Promises are awaited; the value is returned by value (JSON-serializable).

    Raises:
        SmartToolError: If code is empty or longer than config.max_script_chars
        EvaluationError: If the script throws
    """
    if not code or not isinstance(code, str):
        raise SmartToolError(
            tool="execute_javascript",
            action="validate",
            reason="Code must be a non-empty string",
            suggestion="Provide valid JavaScript code",
        )
    if len(code) > config.max_script_chars:
        raise SmartToolError(
            tool="execute_javascript",
            action="validate",
            reason=f"JavaScript code exceeds maximum length of {config.max_script_chars} characters",
            suggestion="Split the script into smaller pieces",
            details={"length": len(code)},
        )

    with get_session(config, tab_id) as (session, _target):
        result = session.eval_js(code)
        return {"success": True, "result": result, "tab_id": tab_id}


__all__ = [
    "ensure_allowed_navigation",
    "execute_javascript",
    "get_page_content",
    "go_back",
    "go_forward",
    "navigate_to",
    "reload_tab",
]
