"""Raw CDP websocket connection."""

from __future__ import annotations

import json
import socket
import time
from contextlib import suppress
from typing import Any

import websocket

from .http_client import HttpClientError


class CdpConnection:
    """Low-level CDP WebSocket connection bound to a single target."""

    def __init__(self, ws_url: str, timeout: float = 5.0):
        try:
            # Handshake is bounded by the transport timeout only.
            self.ws = websocket.create_connection(ws_url, timeout=timeout, suppress_origin=True)
        except (OSError, websocket.WebSocketException) as exc:
            raise HttpClientError(f"CDP connect failed: {exc}") from exc
        self.ws_url = ws_url
        self.timeout = timeout
        self._next_id = 1
        # Events received while waiting for a command response are kept, otherwise
        # load/navigation waits become flaky.
        self._event_queue: list[dict[str, Any]] = []
        self._max_event_queue = 500

    def _push_event(self, event: dict[str, Any]) -> None:
        self._event_queue.append(event)
        if len(self._event_queue) > self._max_event_queue:
            del self._event_queue[: len(self._event_queue) - self._max_event_queue]

    def pop_event(self, event_name: str) -> dict[str, Any] | None:
        """Pop the oldest queued event params for the given event name."""
        for i, ev in enumerate(self._event_queue):
            if ev.get("method") == event_name:
                self._event_queue.pop(i)
                params = ev.get("params")
                return params if isinstance(params, dict) else {}
        return None

    def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send CDP command and wait for response."""
        msg_id = self._next_id
        self._next_id += 1

        msg: dict[str, Any] = {"id": msg_id, "method": method}
        if params:
            msg["params"] = params

        try:
            self.ws.settimeout(min(2.0, max(0.5, float(self.timeout))))
            self.ws.send(json.dumps(msg))
        except (OSError, websocket.WebSocketException) as exc:
            raise HttpClientError(str(exc)) from exc

        return self._recv_until(msg_id, method)

    def send_many(self, commands: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Send several commands sequentially, stopping at the first error."""
        return [self.send(cmd["method"], cmd.get("params")) for cmd in commands]

    def _recv(self, remaining: float) -> dict[str, Any] | None:
        try:
            # Short socket timeout so the overall deadline is enforced here.
            self.ws.settimeout(min(0.5, remaining))
            raw = self.ws.recv()
        except websocket.WebSocketTimeoutException:
            return None
        except (OSError, websocket.WebSocketException) as exc:
            if isinstance(exc, TimeoutError):
                return None
            raise HttpClientError(str(exc)) from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return None
        return data if isinstance(data, dict) else None

    def _recv_until(self, expected_id: int, method: str) -> dict[str, Any]:
        deadline = time.time() + self.timeout
        while True:
            remaining = deadline - time.time()
            if remaining <= 0:
                raise HttpClientError(f"CDP response timed out ({method})")

            data = self._recv(remaining)
            if data is None:
                continue

            if isinstance(data.get("method"), str) and "id" not in data:
                self._push_event(data)
                continue

            if data.get("id") == expected_id:
                if "error" in data:
                    err = data["error"]
                    message = err.get("message") if isinstance(err, dict) else str(err)
                    raise HttpClientError(f"{method}: {message}")
                return data.get("result", {})

    def wait_for_event(self, event_name: str, timeout: float = 10.0) -> dict[str, Any] | None:
        """Wait for specific CDP event."""
        queued = self.pop_event(event_name)
        if queued is not None:
            return queued

        deadline = time.time() + timeout
        while True:
            remaining = deadline - time.time()
            if remaining <= 0:
                return None
            data = self._recv(remaining)
            if data is None:
                continue
            if isinstance(data.get("method"), str) and "id" not in data:
                if data.get("method") == event_name:
                    params = data.get("params")
                    return params if isinstance(params, dict) else {}
                self._push_event(data)

    def close(self) -> None:
        """Close the WebSocket connection."""
        # Raw socket shutdown first: a graceful close handshake can hang on a busy page.
        sock = getattr(self.ws, "sock", None)
        if sock is not None:
            with suppress(OSError):
                sock.shutdown(socket.SHUT_RDWR)
        with suppress(OSError, websocket.WebSocketException):
            self.ws.close(timeout=0.5)


__all__ = ["CdpConnection"]
