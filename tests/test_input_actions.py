from __future__ import annotations

import json
import re
from typing import Any

import pytest

from mcp_servers.chrome_control.errors import InteractionFailed
from mcp_servers.chrome_control.http_client import HttpClientError
from mcp_servers.chrome_control.tools.input import SIMULATED_CLICK_SEQUENCE, click_resolved, type_resolved
from mcp_servers.chrome_control.tools.types import ResolvedSelector


def _param(expression: str, name: str) -> Any:
    match = re.search(rf"^const {name} = (.*);$", expression, re.MULTILINE)
    assert match, f"{name} not passed"
    return json.loads(match.group(1))


class DummySession:
    """One input element; trusted input edits the value like a real caret would."""

    def __init__(
        self,
        *,
        value: str = "",
        visible: bool = True,
        trusted_input: bool = True,
        rect: dict[str, float] | None = None,
        fail_trusted: bool = False,
        fail_simulated: bool = False,
    ) -> None:
        self.value = value
        self.visible = visible
        self.trusted_input = trusted_input
        self.dom_enabled = False
        self.rect = rect if rect is not None else {"x": 10, "y": 10, "width": 100, "height": 20}
        self.fail_trusted = fail_trusted
        self.fail_simulated = fail_simulated
        self.log: list[str] = []

    def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:  # noqa: ARG002
        raise HttpClientError(f"{method}: unexpected")

    def click(self, x: float, y: float) -> None:
        self.log.append(f"trusted_click:{x},{y}")
        if self.fail_trusted:
            raise HttpClientError("Input.dispatchMouseEvent: Target closed")

    def insert_text(self, text: str) -> None:
        self.log.append("insert_text")
        if self.fail_trusted:
            raise HttpClientError("Input.insertText: Target closed")
        self.value += text

    def eval_js(self, expression: str, *, timeout: float | None = None) -> Any:  # noqa: ARG002
        if "new MutationObserver" in expression:
            self.log.append("wait")
            return {"exists": True, "visible": self.visible}
        if "const SEQUENCE =" in expression:
            self.log.append("simulated_click:" + ",".join(_param(expression, "SEQUENCE")))
            return {"ok": not self.fail_simulated, "reason": "detached"}
        if "behavior: 'instant'" in expression:
            self.log.append("scroll")
            return True
        if "return { x: r.left" in expression:
            self.log.append("rect")
            return self.rect
        if "document.activeElement === el" in expression:
            self.log.append("focus")
            return True
        if "const CLEAR =" in expression:
            clear = _param(expression, "CLEAR")
            self.log.append(f"prepare:clear={clear}")
            if clear:
                self.value = ""
            return {"ok": True}
        if "const TEXT =" in expression:
            self.log.append("set_value")
            if self.fail_simulated:
                return {"ok": False, "reason": "element not found"}
            self.value += _param(expression, "TEXT")
            return {"ok": True}
        if "new FocusEvent('blur'" in expression:
            self.log.append("commit")
            return {"ok": True, "value": self.value}
        raise AssertionError(f"unexpected script: {expression[:80]}")


RESOLVED = ResolvedSelector("#q", "exact", "#q")


def test_click_uses_trusted_input_at_element_center() -> None:
    session = DummySession()
    result = click_resolved(session, RESOLVED, timeout_ms=1000)  # type: ignore[arg-type]

    assert result.method == "trusted"
    assert result.coordinates is not None
    assert result.coordinates.to_dict() == {"x": 60, "y": 20, "method": "bounding-rect"}
    assert session.log == ["wait", "scroll", "rect", "trusted_click:60,20"]
    assert result.to_dict()["success"] is True


def test_click_without_coordinates_dispatches_simulated_sequence() -> None:
    session = DummySession(rect={"x": 0, "y": 0, "width": 0, "height": 0})
    result = click_resolved(session, RESOLVED, timeout_ms=1000)  # type: ignore[arg-type]

    assert result.method == "simulated"
    assert result.coordinates is None
    assert session.log[-1] == "simulated_click:" + ",".join(SIMULATED_CLICK_SEQUENCE)
    assert SIMULATED_CLICK_SEQUENCE == ("pointerover", "pointerdown", "mousedown", "mouseup", "click", "pointerup")


def test_click_falls_back_once_when_trusted_input_throws() -> None:
    session = DummySession(fail_trusted=True)
    result = click_resolved(session, RESOLVED, timeout_ms=1000)  # type: ignore[arg-type]

    assert result.method == "simulated"
    assert [entry.split(":")[0] for entry in session.log].count("simulated_click") == 1
    assert [entry.split(":")[0] for entry in session.log].count("trusted_click") == 1


def test_click_with_trusted_input_disabled_is_simulated() -> None:
    session = DummySession(trusted_input=False)
    result = click_resolved(session, RESOLVED, timeout_ms=1000)  # type: ignore[arg-type]

    assert result.method == "simulated"
    assert not any(entry.startswith("trusted_click") for entry in session.log)


def test_hidden_element_is_clicked_through_dom_events() -> None:
    session = DummySession(visible=False)
    result = click_resolved(session, RESOLVED, timeout_ms=1000)  # type: ignore[arg-type]

    assert result.method == "simulated"
    assert result.extra["visible"] is False
    assert "rect" not in session.log


def test_click_surfaces_interaction_failed_when_both_paths_fail() -> None:
    session = DummySession(fail_trusted=True, fail_simulated=True)
    with pytest.raises(InteractionFailed) as exc:
        click_resolved(session, RESOLVED, timeout_ms=1000)  # type: ignore[arg-type]

    assert exc.value.details["attempts"] == ["trusted", "simulated"]


def test_type_replaces_value_by_default() -> None:
    session = DummySession(value="old")
    result = type_resolved(session, RESOLVED, "new", timeout_ms=1000)  # type: ignore[arg-type]

    assert session.value == "new"
    assert result.method == "trusted"
    assert session.log[-4:] == ["focus", "prepare:clear=True", "insert_text", "commit"]


@pytest.mark.parametrize("trusted_input", [True, False])
def test_type_without_clear_appends(trusted_input: bool) -> None:
    session = DummySession(value="Hello", trusted_input=trusted_input)
    result = type_resolved(session, RESOLVED, " world", clear=False, timeout_ms=1000)  # type: ignore[arg-type]

    assert session.value == "Hello world"
    assert result.extra["value_length"] == len("Hello world")
    assert result.method == ("trusted" if trusted_input else "simulated")


def test_type_falls_back_to_native_setter_when_insert_fails() -> None:
    session = DummySession(value="", fail_trusted=True)
    result = type_resolved(session, RESOLVED, "abc", timeout_ms=1000)  # type: ignore[arg-type]

    assert result.method == "simulated"
    assert session.value == "abc"
    assert session.log.count("set_value") == 1
    assert session.log[-1] == "commit"


def test_type_result_carries_truncated_preview_only() -> None:
    session = DummySession()
    text = "x" * 500
    result = type_resolved(session, RESOLVED, text, timeout_ms=1000, preview_chars=100)  # type: ignore[arg-type]

    payload = result.to_dict()
    assert payload["text_preview"] == "x" * 100 + "..."
    assert text not in json.dumps(payload)
