from __future__ import annotations

from typing import Any

import pytest

from mcp_servers.chrome_control.errors import ElementNotFound, InvalidSelector
from mcp_servers.chrome_control.tools.wait import WAIT_SLACK_S, check_element, wait_for_visible


class DummySession:
    def __init__(self, result: Any) -> None:
        self.result = result
        self.calls: list[tuple[str, float | None]] = []

    def eval_js(self, expression: str, *, timeout: float | None = None) -> Any:
        self.calls.append((expression, timeout))
        return self.result


VISIBLE = {
    "exists": True,
    "visible": True,
    "bounds": {"x": 10, "y": 20, "width": 100, "height": 30, "top": 20, "left": 10},
    "styles": {"display": "block", "visibility": "visible", "opacity": "1"},
}


def test_visible_element_returns_visible_snapshot() -> None:
    session = DummySession(VISIBLE)
    snapshot = wait_for_visible(session, "#go", 5000)  # type: ignore[arg-type]

    assert snapshot.state == "visible"
    assert snapshot.exists is True
    assert snapshot.bounds and snapshot.bounds["width"] == 100


def test_wait_is_bounded_by_timeout_plus_slack() -> None:
    session = DummySession(VISIBLE)
    wait_for_visible(session, "#go", 1500)  # type: ignore[arg-type]

    expression, timeout = session.calls[0]
    assert timeout == pytest.approx(1.5 + WAIT_SLACK_S)
    assert "const TIMEOUT_MS = 1500;" in expression


def test_wait_observes_mutations_and_disconnects() -> None:
    session = DummySession(VISIBLE)
    wait_for_visible(session, "#go", 100)  # type: ignore[arg-type]

    expression = session.calls[0][0]
    assert "new MutationObserver" in expression
    assert "attributeFilter: ['style', 'class', 'hidden']" in expression
    assert "observer.disconnect()" in expression
    assert "setInterval(check" in expression


def test_hidden_element_is_reported_not_raised() -> None:
    session = DummySession({"exists": True, "visible": False, "styles": {"display": "none"}})
    snapshot = wait_for_visible(session, "#modal", 200)  # type: ignore[arg-type]

    assert snapshot.state == "hidden"
    assert snapshot.exists is True
    assert snapshot.visible is False


def test_missing_element_times_out() -> None:
    session = DummySession({"exists": False, "visible": False})
    with pytest.raises(ElementNotFound) as exc:
        wait_for_visible(session, "#never", 300)  # type: ignore[arg-type]

    assert exc.value.state == "timeout"
    assert exc.value.details["timeout_ms"] == 300


def test_existence_check_reports_not_found() -> None:
    session = DummySession({"exists": False, "visible": False})
    snapshot = check_element(session, "#never", 100)  # type: ignore[arg-type]

    assert snapshot.state == "not-found"
    assert snapshot.to_dict()["exists"] is False


def test_unparseable_selector_is_invalid() -> None:
    session = DummySession({"invalid": True, "exists": False, "visible": False})
    with pytest.raises(InvalidSelector):
        wait_for_visible(session, "a[[", 100)  # type: ignore[arg-type]


def test_negative_timeout_is_treated_as_immediate_check() -> None:
    session = DummySession({"exists": True, "visible": False})
    check_element(session, "#x", -5)  # type: ignore[arg-type]

    expression, timeout = session.calls[0]
    assert "const TIMEOUT_MS = 0;" in expression
    assert timeout == pytest.approx(WAIT_SLACK_S)
