"""
Page tool handlers - navigation, history, content, script execution.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...tools import page
from ..args import as_bool, require_str
from ..types import HandlerFunc, ToolResult

if TYPE_CHECKING:
    from ...config import ControlConfig


def handle_navigate_to(config: ControlConfig, args: dict[str, Any]) -> ToolResult:
    result = page.navigate_to(
        config,
        require_str("navigate_to", args, "tab_id"),
        require_str("navigate_to", args, "url"),
        wait_load=as_bool(args.get("wait_load"), True),
    )
    return ToolResult.json(result)


def handle_go_back(config: ControlConfig, args: dict[str, Any]) -> ToolResult:
    return ToolResult.json(page.go_back(config, require_str("go_back", args, "tab_id")))


def handle_go_forward(config: ControlConfig, args: dict[str, Any]) -> ToolResult:
    return ToolResult.json(page.go_forward(config, require_str("go_forward", args, "tab_id")))


def handle_reload_tab(config: ControlConfig, args: dict[str, Any]) -> ToolResult:
    result = page.reload_tab(
        config,
        require_str("reload_tab", args, "tab_id"),
        ignore_cache=as_bool(args.get("ignore_cache"), False),
    )
    return ToolResult.json(result)


def handle_get_page_content(config: ControlConfig, args: dict[str, Any]) -> ToolResult:
    return ToolResult.json(page.get_page_content(config, require_str("get_page_content", args, "tab_id")))


def handle_execute_javascript(config: ControlConfig, args: dict[str, Any]) -> ToolResult:
    result = page.execute_javascript(
        config,
        require_str("execute_javascript", args, "tab_id"),
        require_str("execute_javascript", args, "code"),
    )
    return ToolResult.json(result)


PAGE_HANDLERS: dict[str, HandlerFunc] = {
    "navigate_to": handle_navigate_to,
    "go_back": handle_go_back,
    "go_forward": handle_go_forward,
    "reload_tab": handle_reload_tab,
    "get_page_content": handle_get_page_content,
    "execute_javascript": handle_execute_javascript,
}
