from __future__ import annotations

import json
from typing import Any

from .errors import EvaluationError
from .http_client import HttpClientError
from .session_cdp import CdpConnection


class BrowserSession:
    """
    High-level browser session for a specific tab.

    Wraps CdpConnection with the browser operations the engine needs.
    """

    def __init__(self, connection: CdpConnection, tab_id: str, tab_url: str = "", *, trusted_input: bool = True):
        self.conn = connection
        self.tab_id = tab_id
        self.tab_url = tab_url
        self.trusted_input = trusted_input
        self._page_enabled = False
        self._runtime_enabled = False
        self._dom_enabled = False

    def close(self) -> None:
        """Close the session connection."""
        self.conn.close()

    @property
    def dom_enabled(self) -> bool:
        return self._dom_enabled

    def enable_domains(self, *, page: bool = False, runtime: bool = False, dom: bool = False) -> None:
        """Enable CDP domains once per connection; raises HttpClientError on failure."""
        if page and not self._page_enabled:
            self.conn.send("Page.enable")
            self._page_enabled = True
        if runtime and not self._runtime_enabled:
            self.conn.send("Runtime.enable")
            self._runtime_enabled = True
        if dom and not self._dom_enabled:
            self.conn.send("DOM.enable")
            self._dom_enabled = True

    def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send raw CDP command."""
        return self.conn.send(method, params)

    # ─────────────────────────────────────────────────────────────────────────
    # Navigation
    # ─────────────────────────────────────────────────────────────────────────

    def navigate(self, url: str, wait_load: bool = True, timeout: float = 10.0) -> bool:
        """Navigate to URL; returns whether the load event was observed."""
        result = self.conn.send("Page.navigate", {"url": url})
        if result.get("errorText"):
            raise HttpClientError(f"Navigation failed: {result['errorText']}")
        self.tab_url = url
        if wait_load:
            return self.wait_load(timeout)
        return False

    def wait_load(self, timeout: float = 10.0) -> bool:
        """Wait for page load event."""
        return self.conn.wait_for_event("Page.loadEventFired", timeout) is not None

    def reload(self, ignore_cache: bool = False, timeout: float = 10.0) -> bool:
        self.conn.send("Page.reload", {"ignoreCache": ignore_cache})
        return self.wait_load(timeout)

    def history_step(self, delta: int, timeout: float = 10.0) -> bool:
        """Move through navigation history; False when there is no such entry."""
        history = self.conn.send("Page.getNavigationHistory")
        entries = history.get("entries") or []
        index = int(history.get("currentIndex", 0)) + delta
        if index < 0 or index >= len(entries):
            return False
        self.conn.send("Page.navigateToHistoryEntry", {"entryId": entries[index]["id"]})
        self.wait_load(timeout)
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # JavaScript
    # ─────────────────────────────────────────────────────────────────────────

    def eval_js(self, expression: str, *, timeout: float | None = None) -> Any:
        """Evaluate JavaScript and return its value.

        Promises are awaited. A custom ``timeout`` overrides the CDP command
        timeout for this call only. Raises EvaluationError when the expression
        itself throws.
        """
        self.enable_domains(runtime=True)

        old_timeout: float | None = None
        if timeout is not None:
            old_timeout = self.conn.timeout
            self.conn.timeout = float(timeout)
        try:
            result = self.conn.send(
                "Runtime.evaluate",
                {
                    "expression": expression,
                    "returnByValue": True,
                    "awaitPromise": True,
                },
            )
        finally:
            if old_timeout is not None:
                self.conn.timeout = old_timeout

        details = result.get("exceptionDetails")
        if details:
            raise EvaluationError(
                tool="runtime",
                action="evaluate",
                reason=_exception_text(details),
                suggestion="Check the page state; the in-page script threw",
                details={"line": details.get("lineNumber"), "column": details.get("columnNumber")},
            )

        if "result" not in result:
            return None
        value = result["result"]
        # CDP reports undefined as {"type": "undefined"} without a value.
        if isinstance(value, dict) and value.get("type") == "undefined":
            return None
        if isinstance(value, dict) and value.get("type") == "object" and value.get("subtype") == "null":
            return None
        return value.get("value", value)

    def get_url(self) -> str:
        return self.eval_js("window.location.href") or ""

    def get_title(self) -> str:
        return self.eval_js("document.title") or ""

    def get_dom(self, selector: str | None = None) -> str:
        """Get DOM HTML."""
        if selector:
            js = f"document.querySelector({json.dumps(selector)})?.outerHTML || ''"
        else:
            js = "document.documentElement.outerHTML"
        return self.eval_js(js) or ""

    # ─────────────────────────────────────────────────────────────────────────
    # Trusted input
    # ─────────────────────────────────────────────────────────────────────────

    def click(self, x: float, y: float, button: str = "left", click_count: int = 1) -> None:
        """Press and release a mouse button at viewport coordinates."""
        self.conn.send_many(
            [
                {
                    "method": "Input.dispatchMouseEvent",
                    "params": {"type": "mouseMoved", "x": x, "y": y, "button": "none", "clickCount": 0},
                },
                {
                    "method": "Input.dispatchMouseEvent",
                    "params": {"type": "mousePressed", "x": x, "y": y, "button": button, "clickCount": click_count},
                },
                {
                    "method": "Input.dispatchMouseEvent",
                    "params": {"type": "mouseReleased", "x": x, "y": y, "button": button, "clickCount": click_count},
                },
            ]
        )

    def insert_text(self, text: str) -> None:
        """Insert text into the focused element as if typed."""
        if text:
            self.conn.send("Input.insertText", {"text": str(text)})


def _exception_text(details: dict[str, Any]) -> str:
    exc = details.get("exception")
    if isinstance(exc, dict):
        description = exc.get("description") or exc.get("value")
        if description:
            # First line of a stack trace is the message itself.
            return str(description).splitlines()[0]
    return str(details.get("text") or "JavaScript execution error")


__all__ = ["BrowserSession"]
