"""
Element interaction tools.

Provides:
- click_element: resolve -> wait -> locate -> click
- type_text: resolve -> wait -> locate -> focus/clear -> insert -> commit
- element_exists: three-state existence check, never fails on "not found"
- get_element_text: text, value and attributes of one element
- analyze_form: list a form's interactive fields

Each call owns exactly one interaction scope (see base.get_session).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..config import ControlConfig
from ..errors import ElementNotFound, SmartToolError
from . import forms
from .base import get_session, validate_selector
from .input import click_resolved, type_resolved
from .js_helpers import iife
from .selectors import DEFAULT_TABLES, PageProbe, SelectorTables, resolve_selector
from .types import ElementType, ResolvedSelector
from .wait import check_element, wait_for_visible

if TYPE_CHECKING:
    from ..browser_session import BrowserSession

logger = logging.getLogger("mcp.chrome_control.elements")

_TEXT_JS = """
const el = __ccQuery(SELECTOR);
if (!el) return null;
return {
  text: String(el.textContent || '').trim(),
  inner_text: String(el.innerText || '').trim(),
  value: el.value == null ? '' : String(el.value),
  tag_name: String(el.tagName || '').toLowerCase(),
  attributes: Object.fromEntries(Array.from(el.attributes || []).map((a) => [a.name, a.value])),
};
"""


def resolve_hint(
    session: BrowserSession,
    hint: str,
    element_type: ElementType | None = None,
    *,
    tables: SelectorTables = DEFAULT_TABLES,
) -> ResolvedSelector:
    """Resolver cascade, then the literal hint as a last resort.

    The literal fallback covers valid selectors for nodes that do not exist
    yet; the visibility wait decides whether they ever show up. Hints that
    are not valid CSS are never used verbatim.
    """
    try:
        return resolve_selector(PageProbe(session), hint, element_type, tables=tables)
    except ElementNotFound as exc:
        if not exc.details.get("literal"):
            raise
        logger.debug("resolve_fallback_literal hint=%r", hint)
        return ResolvedSelector(hint, "exact", hint)


def click_element(
    config: ControlConfig,
    tab_id: str,
    selector: str,
    *,
    timeout_ms: int | None = None,
    tables: SelectorTables = DEFAULT_TABLES,
) -> dict[str, Any]:
    """Click the element a selector or hint refers to.

    Args:
        config: Control configuration
        tab_id: Target tab id
        selector: CSS selector or hint ("submit button")
        timeout_ms: Visibility wait budget (default: config.element_timeout_ms)

    Returns:
        Interaction result dict: success, selector, provenance, method,
        coordinates, and original_hint/discovery when the hint was resolved.
    """
    validate_selector(selector, tool="click_element")
    timeout_ms = config.element_timeout_ms if timeout_ms is None else timeout_ms

    with get_session(config, tab_id) as (session, _target):
        resolved = resolve_hint(session, selector, "clickable", tables=tables)
        result = click_resolved(session, resolved, timeout_ms=timeout_ms).to_dict()
        if resolved.discovery:
            result["discovery"] = resolved.discovery
        result["tab_id"] = tab_id
        return result


def type_text(
    config: ControlConfig,
    tab_id: str,
    selector: str,
    text: str,
    *,
    clear: bool = True,
    timeout_ms: int | None = None,
    tables: SelectorTables = DEFAULT_TABLES,
) -> dict[str, Any]:
    """Type ``text`` into the element a selector or hint refers to.

    The result carries a truncated preview of the text, never the text itself.
    """
    validate_selector(selector, tool="type_text")
    if not isinstance(text, str):
        raise SmartToolError(
            tool="type_text",
            action="validate",
            reason="Text must be a string",
            suggestion="Pass the text to type as a string",
        )
    timeout_ms = config.element_timeout_ms if timeout_ms is None else timeout_ms

    with get_session(config, tab_id) as (session, _target):
        resolved = resolve_hint(session, selector, "input", tables=tables)
        result = type_resolved(
            session,
            resolved,
            text,
            clear=clear,
            timeout_ms=timeout_ms,
            preview_chars=config.text_preview_chars,
        ).to_dict()
        if resolved.discovery:
            result["discovery"] = resolved.discovery
        result["tab_id"] = tab_id
        return result


def element_exists(
    config: ControlConfig,
    tab_id: str,
    selector: str,
    *,
    timeout_ms: int | None = None,
    tables: SelectorTables = DEFAULT_TABLES,
) -> dict[str, Any]:
    """Report whether an element exists and is visible.

    "Not found" and "hidden" are answers, not failures: the result is always
    ``success: True`` unless the tab or the selector itself is invalid.
    """
    validate_selector(selector, tool="element_exists")
    timeout_ms = config.exists_timeout_ms if timeout_ms is None else timeout_ms

    with get_session(config, tab_id) as (session, _target):
        try:
            resolved = resolve_hint(session, selector, tables=tables)
        except ElementNotFound:
            return {
                "success": True,
                "exists": False,
                "visible": False,
                "state": "not-found",
                "selector": selector,
                "tab_id": tab_id,
            }
        snapshot = check_element(session, resolved.selector, timeout_ms)
        result: dict[str, Any] = {"success": True, **snapshot.to_dict()}
        result["selector"] = resolved.selector
        result["provenance"] = resolved.provenance
        if resolved.selector != selector:
            result["original_hint"] = selector
        result["tab_id"] = tab_id
        return result


def get_element_text(
    config: ControlConfig,
    tab_id: str,
    selector: str,
    *,
    timeout_ms: int | None = None,
    tables: SelectorTables = DEFAULT_TABLES,
) -> dict[str, Any]:
    """Text content, inner text, value, tag and attributes of one element."""
    validate_selector(selector, tool="get_element_text")
    timeout_ms = config.element_timeout_ms if timeout_ms is None else timeout_ms

    with get_session(config, tab_id) as (session, _target):
        resolved = resolve_hint(session, selector, tables=tables)
        snapshot = wait_for_visible(session, resolved.selector, timeout_ms)
        element = session.eval_js(iife(_TEXT_JS, SELECTOR=resolved.selector))
        if not isinstance(element, dict):
            # Removed between the wait and the read.
            raise ElementNotFound(
                tool="get_element_text",
                action="read",
                reason=f"Element '{resolved.selector}' disappeared before it could be read",
                suggestion="Retry once the page settles",
                details={"state": "not-found", "selector": resolved.selector},
            )
        result: dict[str, Any] = {
            "success": True,
            "selector": resolved.selector,
            "provenance": resolved.provenance,
            "visible": snapshot.visible,
            "element": element,
            "tab_id": tab_id,
        }
        if resolved.selector != selector:
            result["original_hint"] = selector
        return result


def analyze_form(config: ControlConfig, tab_id: str, selector: str = "form") -> dict[str, Any]:
    """Describe a form's fields; ``found: False`` when the selector matches nothing."""
    validate_selector(selector, tool="analyze_form")

    with get_session(config, tab_id) as (session, _target):
        info = forms.analyze_form(session, selector)
        if info is None:
            return {"success": True, "found": False, "selector": selector, "tab_id": tab_id}
        return {"success": True, "found": True, "selector": selector, "tab_id": tab_id, **info}


__all__ = [
    "analyze_form",
    "click_element",
    "element_exists",
    "get_element_text",
    "resolve_hint",
    "type_text",
]
