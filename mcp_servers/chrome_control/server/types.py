"""
Type definitions for tool results and handlers.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..config import ControlConfig


@dataclass(slots=True)
class ToolContent:
    """Single content item in tool response."""

    type: str
    text: str | None = None


@dataclass(slots=True)
class ToolResult:
    """Result of a tool execution.

    ``data`` is the JSON-serializable result dict; ``content`` is the same
    payload rendered as JSON text for transports that only carry text.
    """

    content: list[ToolContent] = field(default_factory=list)
    is_error: bool = False
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def json(cls, data: dict[str, Any]) -> ToolResult:
        text = json.dumps(data, ensure_ascii=False, default=str)
        return cls(content=[ToolContent(type="text", text=text)], is_error=not data.get("success", True), data=data)

    @classmethod
    def error(
        cls,
        message: str,
        *,
        tool: str | None = None,
        error_type: str = "Error",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        **extra: Any,
    ) -> ToolResult:
        """Failure result: ``success: False`` plus enough context to diagnose."""
        payload: dict[str, Any] = {"success": False, "error": message, "error_type": error_type}
        if tool:
            payload["tool"] = tool
        if suggestion:
            payload["suggestion"] = suggestion
        if details:
            payload["details"] = details
        payload.update({k: v for k, v in extra.items() if v is not None})
        return cls.json(payload)


HandlerFunc = Callable[["ControlConfig", dict[str, Any]], ToolResult]
