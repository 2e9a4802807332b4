"""Tab registry: live target listing over the DevTools HTTP endpoint.

Targets are never cached; every operation resolves its tab id again so a
closed or replaced tab is reported instead of silently reused.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from .config import ControlConfig
from .errors import TabNotFound
from .http_client import http_get_json

_TAB_ID_RE = re.compile(r"^[A-Za-z0-9_\-]+$")


@dataclass(slots=True, frozen=True)
class TargetInfo:
    id: str
    type: str
    url: str
    title: str
    websocket_url: str | None = None

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> TargetInfo:
        return cls(
            id=str(raw.get("id") or ""),
            type=str(raw.get("type") or ""),
            url=str(raw.get("url") or ""),
            title=str(raw.get("title") or ""),
            websocket_url=raw.get("webSocketDebuggerUrl") or None,
        )


class TabRegistry:
    def __init__(self, config: ControlConfig) -> None:
        self.config = config

    def list_targets(self) -> list[TargetInfo]:
        raw = http_get_json(f"{self.config.endpoint}/json/list", timeout=self.config.http_timeout)
        if not isinstance(raw, list):
            return []
        return [TargetInfo.from_json(item) for item in raw if isinstance(item, dict)]

    def resolve(self, tab_id: str) -> TargetInfo:
        """Return a connectable target for ``tab_id`` or raise TabNotFound."""
        if not isinstance(tab_id, str) or not _TAB_ID_RE.match(tab_id):
            raise TabNotFound(
                tool="tabs",
                action="resolve",
                reason=f"Invalid tab id: {tab_id!r}",
                suggestion="Use an id returned by the tab listing",
                details={"tab_id": tab_id},
            )
        for target in self.list_targets():
            if target.id != tab_id:
                continue
            if not target.websocket_url:
                # Another debugger client is attached to this target.
                raise TabNotFound(
                    tool="tabs",
                    action="resolve",
                    reason=f"Tab {tab_id} is not connectable (no websocket URL)",
                    suggestion="Close other DevTools clients attached to this tab",
                    details={"tab_id": tab_id},
                )
            return target
        raise TabNotFound(
            tool="tabs",
            action="resolve",
            reason=f"Tab with ID {tab_id} not found",
            suggestion="Re-list tabs; the tab may have been closed",
            details={"tab_id": tab_id},
        )
