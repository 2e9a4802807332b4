"""
Interaction executor: wait -> scroll -> locate -> act.

Trusted CDP input (Input.dispatchMouseEvent / Input.insertText) is preferred.
When no coordinate is available, trusted input is disabled, or the trusted
path throws, the simulated DOM path runs instead, at most once per call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...errors import InteractionFailed
from ...http_client import HttpClientError
from ..base import truncate_text
from ..coordinates import locate
from ..strategies import Strategy, first_success
from ..types import Coordinate, ElementSnapshot, InputMethod, InteractionResult, ResolvedSelector
from ..wait import wait_for_visible
from .dom import commit_value, focus_element, prepare_value, scroll_into_view, set_value_simulated, simulated_click

if TYPE_CHECKING:
    from ...browser_session import BrowserSession

logger = logging.getLogger("mcp.chrome_control.input")


def _trusted(action: str, selector: str, fn) -> bool:
    """Run a trusted-input call, turning transport errors into InteractionFailed."""
    try:
        fn()
    except HttpClientError as exc:
        raise InteractionFailed(
            tool="input",
            action=action,
            reason=f"Trusted input failed: {exc}",
            suggestion="Falling back to simulated DOM events",
            details={"selector": selector, "method": "trusted"},
        ) from exc
    return True


def _approach(session: BrowserSession, selector: str, timeout_ms: int) -> tuple[ElementSnapshot, Coordinate | None]:
    """Wait for the node, bring it into view, then measure it.

    Hidden nodes get no coordinate: a trusted press at their box would land on
    whatever is painted there instead.
    """
    snapshot = wait_for_visible(session, selector, timeout_ms)
    scroll_into_view(session, selector)
    if not snapshot.visible:
        logger.info("element_hidden selector=%r; using simulated events", selector)
        return snapshot, None
    return snapshot, locate(session, selector)


def _fallback_failed(action: str, selector: str, failures: list[tuple[str, str]]) -> InteractionFailed:
    return InteractionFailed(
        tool="input",
        action=action,
        reason="; ".join(f"{name}: {err}" for name, err in failures) or "No input method succeeded",
        suggestion="Check that the element is enabled and not covered by an overlay",
        details={"selector": selector, "attempts": [name for name, _ in failures]},
    )


def click_resolved(session: BrowserSession, resolved: ResolvedSelector, *, timeout_ms: int) -> InteractionResult:
    selector = resolved.selector
    snapshot, point = _approach(session, selector, timeout_ms)

    def trusted(sel: str) -> bool | None:
        if point is None or not session.trusted_input:
            return None
        return _trusted("click", sel, lambda: session.click(point.x, point.y))

    def simulated(sel: str) -> bool:
        simulated_click(session, sel)
        return True

    failures: list[tuple[str, str]] = []
    outcome = first_success(
        [Strategy("trusted", trusted), Strategy("simulated", simulated)],
        selector,
        tolerate=(InteractionFailed,),
        failures=failures,
    )
    if outcome is None:
        raise _fallback_failed("click", selector, failures)
    if outcome.failures:
        logger.warning("trusted_click_failed selector=%r; used simulated events", selector)

    method: InputMethod = "trusted" if outcome.name == "trusted" else "simulated"
    return InteractionResult(
        success=True,
        selector=selector,
        provenance=resolved.provenance,
        method=method,
        coordinates=point,
        original_hint=resolved.hint if resolved.hint != selector else None,
        extra={"visible": snapshot.visible},
    )


def type_resolved(
    session: BrowserSession,
    resolved: ResolvedSelector,
    text: str,
    *,
    clear: bool = True,
    timeout_ms: int,
    preview_chars: int = 100,
) -> InteractionResult:
    """Focus the node, optionally clear it, insert ``text``, then commit.

    With ``clear=False`` the caret is moved to the end first, so the final
    value is the original value followed by ``text``.
    """
    selector = resolved.selector
    snapshot, point = _approach(session, selector, timeout_ms)

    if point is not None and session.trusted_input:
        try:
            _trusted("focus", selector, lambda: session.click(point.x, point.y))
        except InteractionFailed as exc:
            logger.warning("trusted_focus_failed selector=%r err=%s", selector, exc.reason)
    # A label or overlay can swallow the click; make sure the node itself has focus.
    focus_element(session, selector)
    prepare_value(session, selector, clear=clear)

    def trusted(sel: str) -> bool | None:
        if not session.trusted_input:
            return None
        return _trusted("type", sel, lambda: session.insert_text(text))

    def simulated(sel: str) -> bool:
        set_value_simulated(session, sel, text)
        return True

    failures: list[tuple[str, str]] = []
    outcome = first_success(
        [Strategy("trusted", trusted), Strategy("simulated", simulated)],
        selector,
        tolerate=(InteractionFailed,),
        failures=failures,
    )
    if outcome is None:
        raise _fallback_failed("type", selector, failures)
    if outcome.failures:
        logger.warning("trusted_insert_failed selector=%r; used simulated events", selector)

    final_value = commit_value(session, selector)
    method: InputMethod = "trusted" if outcome.name == "trusted" else "simulated"
    return InteractionResult(
        success=True,
        selector=selector,
        provenance=resolved.provenance,
        method=method,
        coordinates=point,
        original_hint=resolved.hint if resolved.hint != selector else None,
        text_preview=truncate_text(text, preview_chars),
        extra={
            "visible": snapshot.visible,
            "cleared": bool(clear),
            "value_length": len(final_value),
        },
    )


__all__ = ["click_resolved", "type_resolved"]
