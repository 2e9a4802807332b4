"""Structured errors raised by the interaction engine.

Every error carries enough context for an agent to decide what to do next:
which tool failed, during which action, why, and a suggestion. The tool
registry turns them into failure results at the call boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar


@dataclass
class SmartToolError(Exception):
    """Structured error with context for AI agents."""

    tool: str
    action: str
    reason: str
    suggestion: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    error_type: ClassVar[str] = "SmartToolError"

    def __str__(self) -> str:
        text = f"[{self.tool}] {self.action} failed: {self.reason}"
        if self.suggestion:
            text += f". Suggestion: {self.suggestion}"
        return text


class TabNotFound(SmartToolError):
    """The tab id matched no live target. Callers must re-list tabs."""

    error_type = "TabNotFound"


class ElementNotFound(SmartToolError):
    """Resolution or visibility wait exhausted.

    ``details["state"]`` is ``"not-found"`` when no strategy resolved the hint,
    ``"timeout"`` when the visibility wait ran out with no matching node.
    """

    error_type = "ElementNotFound"

    @property
    def state(self) -> str:
        return str(self.details.get("state") or "not-found")


class InvalidSelector(SmartToolError):
    error_type = "InvalidSelector"


class InteractionFailed(SmartToolError):
    error_type = "InteractionFailed"


class EvaluationError(SmartToolError):
    """In-page script raised; ``reason`` is the page's own exception text."""

    error_type = "EvaluationError"


__all__ = [
    "ElementNotFound",
    "EvaluationError",
    "InteractionFailed",
    "InvalidSelector",
    "SmartToolError",
    "TabNotFound",
]
