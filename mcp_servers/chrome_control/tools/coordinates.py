"""
Clickable point for a node.

Tried strictly in order, each only when the previous one failed or produced
zero-area geometry:

1. DOM.getContentQuads  (transform-aware)
2. DOM.getBoxModel      (content box)
3. getBoundingClientRect() in the page
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from ..errors import EvaluationError
from ..http_client import HttpClientError
from .js_helpers import iife
from .strategies import Strategy, first_success
from .types import Coordinate, CoordinateMethod

if TYPE_CHECKING:
    from ..browser_session import BrowserSession

logger = logging.getLogger("mcp.chrome_control.coordinates")

_RECT_JS = """
const el = __ccQuery(SELECTOR);
if (!el) return null;
const r = el.getBoundingClientRect();
return { x: r.left, y: r.top, width: r.width, height: r.height };
"""


def quad_area(quad: Sequence[float]) -> float:
    """Shoelace area of a 4-point quad given as [x1, y1, ..., x4, y4]."""
    xs = quad[0::2]
    ys = quad[1::2]
    total = 0.0
    for i in range(4):
        j = (i + 1) % 4
        total += xs[i] * ys[j] - xs[j] * ys[i]
    return abs(total) / 2.0


def quad_center(quad: Any, method: CoordinateMethod) -> Coordinate | None:
    """Mean of the four corners, or None for malformed or degenerate quads."""
    if not isinstance(quad, (list, tuple)) or len(quad) < 8:
        return None
    try:
        points = [float(v) for v in quad[:8]]
    except (TypeError, ValueError):
        return None
    if quad_area(points) <= 0:
        return None
    x = sum(points[0::2]) / 4.0
    y = sum(points[1::2]) / 4.0
    return Coordinate(round(x), round(y), method)


class _NodeLookup:
    """Resolves the selector to a DOM node id once per locate() call."""

    def __init__(self, session: BrowserSession, selector: str) -> None:
        self.session = session
        self.selector = selector
        self._node_id: int | None = None
        self._looked_up = False

    def node_id(self) -> int | None:
        if not self._looked_up:
            self._looked_up = True
            doc = self.session.send("DOM.getDocument", {"depth": 0})
            root = (doc.get("root") or {}).get("nodeId")
            if root:
                found = self.session.send("DOM.querySelector", {"nodeId": root, "selector": self.selector})
                self._node_id = found.get("nodeId") or None
        return self._node_id


def locate(session: BrowserSession, selector: str) -> Coordinate | None:
    """Center point of the first node matching ``selector`` in viewport space."""
    lookup = _NodeLookup(session, selector)

    def content_quad(_: str) -> Coordinate | None:
        if not session.dom_enabled:
            return None
        node_id = lookup.node_id()
        if not node_id:
            return None
        quads = session.send("DOM.getContentQuads", {"nodeId": node_id}).get("quads") or []
        for quad in quads:
            point = quad_center(quad, "content-quad")
            if point is not None:
                return point
        return None

    def box_model(_: str) -> Coordinate | None:
        if not session.dom_enabled:
            return None
        node_id = lookup.node_id()
        if not node_id:
            return None
        model = session.send("DOM.getBoxModel", {"nodeId": node_id}).get("model") or {}
        return quad_center(model.get("content"), "box-model")

    def bounding_rect(sel: str) -> Coordinate | None:
        rect = session.eval_js(iife(_RECT_JS, SELECTOR=sel))
        if not isinstance(rect, dict):
            return None
        try:
            x, y = float(rect["x"]), float(rect["y"])
            width, height = float(rect["width"]), float(rect["height"])
        except (KeyError, TypeError, ValueError):
            return None
        if width <= 0 or height <= 0:
            return None
        return Coordinate(round(x + width / 2), round(y + height / 2), "bounding-rect")

    outcome = first_success(
        [
            Strategy("content-quad", content_quad),
            Strategy("box-model", box_model),
            Strategy("bounding-rect", bounding_rect),
        ],
        selector,
        tolerate=(HttpClientError, EvaluationError),
    )
    if outcome is None:
        logger.debug("locate_failed selector=%r", selector)
        return None
    if outcome.failures:
        logger.debug("locate selector=%r method=%s after=%s", selector, outcome.name, outcome.failures)
    return outcome.value


__all__ = ["locate", "quad_area", "quad_center"]
