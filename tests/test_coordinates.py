from __future__ import annotations

from typing import Any

from mcp_servers.chrome_control.http_client import HttpClientError
from mcp_servers.chrome_control.tools.coordinates import locate, quad_area, quad_center


class DummySession:
    def __init__(
        self,
        *,
        quads: list[list[float]] | None = None,
        content: list[float] | None = None,
        rect: dict[str, float] | None = None,
        dom_fails: bool = False,
        dom_enabled: bool = True,
    ) -> None:
        self.quads = quads or []
        self.content = content
        self.rect = rect
        self.dom_fails = dom_fails
        self.dom_enabled = dom_enabled
        self.methods: list[str] = []

    def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:  # noqa: ARG002
        self.methods.append(method)
        if self.dom_fails:
            raise HttpClientError(f"{method}: DOM agent is not enabled")
        if method == "DOM.getDocument":
            return {"root": {"nodeId": 1}}
        if method == "DOM.querySelector":
            return {"nodeId": 7}
        if method == "DOM.getContentQuads":
            return {"quads": self.quads}
        if method == "DOM.getBoxModel":
            return {"model": {"content": self.content}} if self.content else {}
        return {}

    def eval_js(self, expression: str, *, timeout: float | None = None) -> Any:  # noqa: ARG002
        self.methods.append("eval")
        return self.rect


SQUARE = [10.0, 20.0, 110.0, 20.0, 110.0, 60.0, 10.0, 60.0]


def test_content_quad_center_is_corner_mean() -> None:
    session = DummySession(quads=[SQUARE])
    point = locate(session, "#go")  # type: ignore[arg-type]

    assert point is not None
    assert (point.x, point.y, point.method) == (60, 40, "content-quad")
    # Node id is looked up once.
    assert session.methods.count("DOM.querySelector") == 1


def test_zero_area_quad_falls_through_to_box_model() -> None:
    flat = [10.0, 20.0, 110.0, 20.0, 110.0, 20.0, 10.0, 20.0]
    session = DummySession(quads=[flat], content=SQUARE)
    point = locate(session, "#go")  # type: ignore[arg-type]

    assert point is not None
    assert point.method == "box-model"
    assert session.methods.count("DOM.getDocument") == 1


def test_bounding_rect_used_when_dom_methods_fail() -> None:
    session = DummySession(dom_fails=True, rect={"x": 0, "y": 0, "width": 50, "height": 20})
    point = locate(session, "#go")  # type: ignore[arg-type]

    assert point is not None
    assert (point.x, point.y, point.method) == (25, 10, "bounding-rect")


def test_dom_methods_skipped_when_dom_disabled() -> None:
    session = DummySession(dom_enabled=False, rect={"x": 4, "y": 6, "width": 10, "height": 10})
    point = locate(session, "#go")  # type: ignore[arg-type]

    assert point is not None
    assert point.method == "bounding-rect"
    assert session.methods == ["eval"]


def test_no_geometry_returns_none() -> None:
    session = DummySession(rect={"x": 0, "y": 0, "width": 0, "height": 0})
    assert locate(session, "#go") is None  # type: ignore[arg-type]


def test_quad_helpers() -> None:
    assert quad_area(SQUARE) == 4000.0
    assert quad_center([1, 2, 3], "box-model") is None
    assert quad_center(None, "box-model") is None
    assert quad_center(["a"] * 8, "box-model") is None
