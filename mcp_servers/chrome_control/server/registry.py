"""
Tool registry with dispatch table.

This is the call boundary: every exception raised below it becomes a
``success: False`` result, so one failed call never takes the caller down.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..errors import SmartToolError
from ..http_client import HttpClientError
from .redaction import redact_tool_arguments
from .types import HandlerFunc, ToolResult

if TYPE_CHECKING:
    from ..config import ControlConfig

logger = logging.getLogger("mcp.chrome_control.registry")


def _call_context(arguments: dict[str, Any]) -> dict[str, Any]:
    """Identifiers echoed back on failure so the caller can tell calls apart."""
    context: dict[str, Any] = {}
    for key in ("tab_id", "selector", "form_selector", "url"):
        value = arguments.get(key)
        if isinstance(value, str):
            context[key] = value
    return context


class ToolRegistry:
    """Name -> handler table."""

    def __init__(self) -> None:
        self._handlers: dict[str, HandlerFunc] = {}

    def register_many(self, handlers: dict[str, HandlerFunc]) -> None:
        self._handlers.update(handlers)

    def dispatch(self, name: str, config: ControlConfig, arguments: dict[str, Any] | None = None) -> ToolResult:
        """
        Run the named tool and convert any failure into a failure result.

        Args:
            name: Tool name
            config: Control configuration
            arguments: Tool arguments (tab_id, selector, ...)

        Returns:
            ToolResult whose ``data`` always has ``success``
        """
        arguments = arguments if isinstance(arguments, dict) else {}
        logger.info("tool=%s args=%s", name, redact_tool_arguments(name, arguments))

        handler = self._handlers.get(name)
        if handler is None:
            return ToolResult.error(f"Unknown tool: {name}", tool=name, error_type="UnknownTool")

        context = _call_context(arguments)
        try:
            return handler(config, arguments)
        except SmartToolError as e:
            logger.info("tool_error tool=%s type=%s action=%s reason=%s", name, e.error_type, e.action, e.reason)
            return ToolResult.error(
                e.reason,
                tool=name,
                error_type=e.error_type,
                suggestion=e.suggestion,
                details=e.details,
                stage=e.tool,
                action=e.action,
                **context,
            )
        except HttpClientError as e:
            logger.info("http_error tool=%s err=%s", name, e)
            return ToolResult.error(str(e), tool=name, error_type="HttpClientError", **context)
        except Exception as exc:
            logger.exception("tool_call_failed tool=%s", name)
            return ToolResult.error(str(exc), tool=name, error_type=type(exc).__name__, **context)

    def call(self, name: str, config: ControlConfig, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
        """Dispatch and return the plain result dict."""
        return self.dispatch(name, config, arguments).data

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers.keys())


def create_default_registry() -> ToolRegistry:
    """Registry with every element and page tool."""
    from .handlers import ALL_HANDLERS

    registry = ToolRegistry()
    registry.register_many(ALL_HANDLERS)
    return registry


__all__ = ["ToolRegistry", "create_default_registry"]
