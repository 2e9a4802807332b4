"""
Call-scoped value types passed between the interaction stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

Provenance = Literal["exact", "text-match", "pattern-match"]
ElementState = Literal["not-found", "hidden", "visible"]
CoordinateMethod = Literal["content-quad", "box-model", "bounding-rect"]
InputMethod = Literal["trusted", "simulated"]
ElementType = Literal["clickable", "input"]


@dataclass(slots=True, frozen=True)
class ResolvedSelector:
    selector: str
    provenance: Provenance
    hint: str
    category: str | None = None

    @property
    def discovery(self) -> str | None:
        """Human-readable note on how a non-literal hint was resolved."""
        if self.provenance == "exact":
            return None
        if self.category:
            return f"'{self.hint}' matched {self.category} pattern {self.selector}"
        return f"'{self.hint}' matched element text as {self.selector}"


@dataclass(slots=True)
class ElementSnapshot:
    """Element state at one instant; stale as soon as another round-trip happens."""

    exists: bool
    visible: bool
    state: ElementState
    bounds: dict[str, float] | None = None
    styles: dict[str, str] | None = None

    @classmethod
    def from_page(cls, raw: dict[str, Any] | None) -> ElementSnapshot:
        raw = raw if isinstance(raw, dict) else {}
        exists = bool(raw.get("exists"))
        visible = exists and bool(raw.get("visible"))
        state: ElementState = "visible" if visible else ("hidden" if exists else "not-found")
        bounds = raw.get("bounds") if isinstance(raw.get("bounds"), dict) else None
        styles = raw.get("styles") if isinstance(raw.get("styles"), dict) else None
        return cls(exists=exists, visible=visible, state=state, bounds=bounds, styles=styles)

    def to_dict(self) -> dict[str, Any]:
        return {
            "exists": self.exists,
            "visible": self.visible,
            "state": self.state,
            "bounds": self.bounds,
            "styles": self.styles,
        }


@dataclass(slots=True, frozen=True)
class Coordinate:
    x: int
    y: int
    method: CoordinateMethod

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "method": self.method}


@dataclass(slots=True)
class InteractionResult:
    success: bool
    selector: str
    provenance: Provenance
    method: InputMethod
    coordinates: Coordinate | None = None
    original_hint: str | None = None
    text_preview: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "success": self.success,
            "selector": self.selector,
            "provenance": self.provenance,
            "method": self.method,
            "coordinates": self.coordinates.to_dict() if self.coordinates else None,
        }
        if self.original_hint is not None:
            out["original_hint"] = self.original_hint
        if self.text_preview is not None:
            out["text_preview"] = self.text_preview
        out.update(self.extra)
        return out
