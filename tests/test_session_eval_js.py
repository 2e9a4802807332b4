from __future__ import annotations

from typing import Any

import pytest

from mcp_servers.chrome_control.browser_session import BrowserSession
from mcp_servers.chrome_control.errors import EvaluationError
from mcp_servers.chrome_control.http_client import HttpClientError


def test_eval_js_awaits_promises_and_returns_by_value() -> None:
    calls: list[tuple[str, dict[str, Any] | None]] = []

    class DummyConn:
        def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
            calls.append((method, params))
            if method == "Runtime.evaluate":
                return {"result": {"type": "number", "value": 123}}
            return {}

    session = BrowserSession(DummyConn(), tab_id="t1")  # type: ignore[arg-type]
    value = session.eval_js("1 + 2")
    assert value == 123

    eval_calls = [(m, p) for (m, p) in calls if m == "Runtime.evaluate"]
    assert len(eval_calls) == 1
    params = eval_calls[0][1] or {}
    assert params.get("awaitPromise") is True
    assert params.get("returnByValue") is True
    assert "replMode" not in params
    # Runtime is enabled once, lazily.
    assert [m for (m, _p) in calls].count("Runtime.enable") == 1


def test_eval_js_maps_undefined_to_none() -> None:
    class DummyConn:
        def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:  # noqa: ARG002
            if method == "Runtime.evaluate":
                return {"result": {"type": "undefined"}}
            return {}

    session = BrowserSession(DummyConn(), tab_id="t1")  # type: ignore[arg-type]
    assert session.eval_js("globalThis.__nope && 1") is None


def test_eval_js_maps_null_to_none() -> None:
    class DummyConn:
        def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:  # noqa: ARG002
            if method == "Runtime.evaluate":
                return {"result": {"type": "object", "subtype": "null"}}
            return {}

    session = BrowserSession(DummyConn(), tab_id="t1")  # type: ignore[arg-type]
    assert session.eval_js("null") is None


def test_eval_js_raises_evaluation_error_with_page_text() -> None:
    class DummyConn:
        def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:  # noqa: ARG002
            if method == "Runtime.evaluate":
                return {
                    "result": {"type": "object", "subtype": "error"},
                    "exceptionDetails": {
                        "text": "Uncaught",
                        "lineNumber": 0,
                        "columnNumber": 6,
                        "exception": {"description": "ReferenceError: nope is not defined\n    at <anonymous>:1:7"},
                    },
                }
            return {}

    session = BrowserSession(DummyConn(), tab_id="t1")  # type: ignore[arg-type]
    with pytest.raises(EvaluationError) as exc:
        session.eval_js("nope()")

    assert exc.value.reason == "ReferenceError: nope is not defined"
    assert exc.value.details["column"] == 6


def test_eval_js_timeout_override_is_restored() -> None:
    seen: list[float] = []

    class DummyConn:
        timeout = 30.0

        def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:  # noqa: ARG002
            if method == "Runtime.evaluate":
                seen.append(self.timeout)
                raise HttpClientError("CDP response timed out (Runtime.evaluate)")
            return {}

    conn = DummyConn()
    session = BrowserSession(conn, tab_id="t1")  # type: ignore[arg-type]
    with pytest.raises(HttpClientError):
        session.eval_js("new Promise(() => {})", timeout=3.5)

    assert seen == [3.5]
    assert conn.timeout == 30.0


def test_trusted_click_sends_move_press_release() -> None:
    batches: list[list[dict[str, Any]]] = []

    class DummyConn:
        def send_many(self, commands: list[dict[str, Any]]) -> list[dict[str, Any]]:
            batches.append(commands)
            return [{} for _ in commands]

    BrowserSession(DummyConn(), tab_id="t1").click(12, 34)  # type: ignore[arg-type]

    types = [cmd["params"]["type"] for cmd in batches[0]]
    assert types == ["mouseMoved", "mousePressed", "mouseReleased"]
    assert all(cmd["method"] == "Input.dispatchMouseEvent" for cmd in batches[0])
    assert batches[0][1]["params"]["x"] == 12
