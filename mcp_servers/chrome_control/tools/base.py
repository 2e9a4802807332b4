"""
Base utilities for the element interaction tools.

Provides:
- SmartToolError and the error taxonomy (re-exported from ..errors)
- get_session / with_scope: the per-call interaction scope
- validate_selector: input hygiene for selectors and hints
- truncate_text: log-safe previews
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import Any, TypeVar

from ..browser_session import BrowserSession
from ..config import ControlConfig
from ..errors import (
    ElementNotFound,
    EvaluationError,
    InteractionFailed,
    InvalidSelector,
    SmartToolError,
    TabNotFound,
)
from ..http_client import HttpClientError
from ..session_cdp import CdpConnection
from ..tabs import TabRegistry, TargetInfo

logger = logging.getLogger("mcp.chrome_control.scope")

T = TypeVar("T")

MAX_SELECTOR_LENGTH = 1000
_INJECTION_MARKERS = ("javascript:", "<script", "eval(")


def validate_selector(selector: Any, *, tool: str = "selector") -> str:
    """Reject empty, oversized, or script-bearing selectors. Returns the selector."""
    if not isinstance(selector, str) or not selector.strip():
        raise InvalidSelector(
            tool=tool,
            action="validate",
            reason="Selector must be a non-empty string",
            suggestion="Pass a CSS selector or a short hint like 'submit button'",
        )
    lowered = selector.lower()
    if any(marker in lowered for marker in _INJECTION_MARKERS):
        raise InvalidSelector(
            tool=tool,
            action="validate",
            reason="Invalid selector: potential security risk detected",
            suggestion="Remove script content from the selector",
            details={"selector": selector[:100]},
        )
    if len(selector) > MAX_SELECTOR_LENGTH:
        raise InvalidSelector(
            tool=tool,
            action="validate",
            reason=f"Selector too long (max {MAX_SELECTOR_LENGTH} characters)",
            suggestion="Use a shorter, more specific selector",
            details={"length": len(selector)},
        )
    return selector


def truncate_text(text: str, max_length: int = 100) -> str:
    if not isinstance(text, str):
        text = str(text)
    return text[:max_length] + "..." if len(text) > max_length else text


def _open_session(config: ControlConfig, target: TargetInfo) -> BrowserSession:
    conn = CdpConnection(target.websocket_url or "", timeout=config.cdp_timeout)
    session = BrowserSession(conn, target.id, target.url, trusted_input=config.trusted_input)
    try:
        session.enable_domains(page=True, runtime=True)
    except Exception:
        # Never leak the websocket when initialization fails.
        session.close()
        raise
    try:
        session.enable_domains(dom=True)
    except HttpClientError as exc:
        logger.warning("dom_enable_failed tab=%s err=%s", target.id, exc)
    return session


@contextmanager
def get_session(config: ControlConfig, tab_id: str) -> Generator[tuple[BrowserSession, TargetInfo], None, None]:
    """Interaction scope: one fresh connection to one tab, closed on every exit path.

    Usage:
        with get_session(config, tab_id) as (session, target):
            title = session.eval_js("document.title")
    """
    target = TabRegistry(config).resolve(tab_id)
    session = _open_session(config, target)
    try:
        yield session, target
    finally:
        session.close()


def with_scope(config: ControlConfig, tab_id: str, fn: Callable[[BrowserSession], T]) -> T:
    """Run ``fn`` inside an interaction scope for ``tab_id``."""
    with get_session(config, tab_id) as (session, _target):
        return fn(session)


__all__ = [
    "ElementNotFound",
    "EvaluationError",
    "InteractionFailed",
    "InvalidSelector",
    "MAX_SELECTOR_LENGTH",
    "SmartToolError",
    "TabNotFound",
    "get_session",
    "truncate_text",
    "validate_selector",
    "with_scope",
]
