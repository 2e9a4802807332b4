"""
Element tool handlers - click, type, existence, text, form inspection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...tools import elements
from ..args import as_bool, clamp_timeout, require_str, require_text
from ..types import HandlerFunc, ToolResult

if TYPE_CHECKING:
    from ...config import ControlConfig

ELEMENT_TIMEOUT_RANGE = (1000, 30000)
EXISTS_TIMEOUT_RANGE = (100, 10000)


def _element_timeout(config: ControlConfig, args: dict[str, Any]) -> int:
    low, high = ELEMENT_TIMEOUT_RANGE
    return clamp_timeout(args, default=config.element_timeout_ms, low=low, high=high)


def handle_click_element(config: ControlConfig, args: dict[str, Any]) -> ToolResult:
    result = elements.click_element(
        config,
        require_str("click_element", args, "tab_id"),
        require_str("click_element", args, "selector"),
        timeout_ms=_element_timeout(config, args),
    )
    return ToolResult.json(result)


def handle_type_text(config: ControlConfig, args: dict[str, Any]) -> ToolResult:
    result = elements.type_text(
        config,
        require_str("type_text", args, "tab_id"),
        require_str("type_text", args, "selector"),
        require_text("type_text", args, "text"),
        clear=as_bool(args.get("clear"), True),
        timeout_ms=_element_timeout(config, args),
    )
    return ToolResult.json(result)


def handle_element_exists(config: ControlConfig, args: dict[str, Any]) -> ToolResult:
    low, high = EXISTS_TIMEOUT_RANGE
    result = elements.element_exists(
        config,
        require_str("element_exists", args, "tab_id"),
        require_str("element_exists", args, "selector"),
        timeout_ms=clamp_timeout(args, default=config.exists_timeout_ms, low=low, high=high),
    )
    return ToolResult.json(result)


def handle_get_element_text(config: ControlConfig, args: dict[str, Any]) -> ToolResult:
    result = elements.get_element_text(
        config,
        require_str("get_element_text", args, "tab_id"),
        require_str("get_element_text", args, "selector"),
        timeout_ms=_element_timeout(config, args),
    )
    return ToolResult.json(result)


def handle_analyze_form(config: ControlConfig, args: dict[str, Any]) -> ToolResult:
    result = elements.analyze_form(
        config,
        require_str("analyze_form", args, "tab_id"),
        args.get("form_selector") or args.get("selector") or "form",
    )
    return ToolResult.json(result)


ELEMENT_HANDLERS: dict[str, HandlerFunc] = {
    "click_element": handle_click_element,
    "type_text": handle_type_text,
    "element_exists": handle_element_exists,
    "get_element_text": handle_get_element_text,
    "analyze_form": handle_analyze_form,
}
