from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off"}


@dataclass
class ControlConfig:
    cdp_host: str = "127.0.0.1"
    cdp_port: int = 9222
    http_timeout: float = 5.0
    cdp_timeout: float = 30.0
    element_timeout_ms: int = 5000
    exists_timeout_ms: int = 1000
    trusted_input: bool = True
    allow_hosts: list[str] = field(default_factory=list)
    text_preview_chars: int = 100
    max_script_chars: int = 50_000

    @classmethod
    def from_env(cls) -> ControlConfig:
        allow_raw = os.environ.get("MCP_ALLOW_HOSTS", "")
        allow_hosts = [host.strip().lower() for host in allow_raw.split(",") if host.strip() and host.strip() != "*"]
        config = cls(
            cdp_host=os.environ.get("MCP_CHROME_HOST", "127.0.0.1").strip() or "127.0.0.1",
            cdp_port=int(os.environ.get("MCP_CHROME_PORT", "9222")),
            http_timeout=float(os.environ.get("MCP_HTTP_TIMEOUT", "5")),
            cdp_timeout=float(os.environ.get("MCP_CDP_TIMEOUT", "30")),
            element_timeout_ms=int(os.environ.get("MCP_ELEMENT_TIMEOUT_MS", "5000")),
            exists_timeout_ms=int(os.environ.get("MCP_EXISTS_TIMEOUT_MS", "1000")),
            trusted_input=_env_flag("MCP_TRUSTED_INPUT", True),
            allow_hosts=allow_hosts,
        )
        config.validate()
        return config

    def validate(self) -> None:
        errors: list[str] = []
        if not 1024 <= self.cdp_port <= 65535:
            errors.append("cdp_port must be between 1024 and 65535")
        if not 1.0 <= self.cdp_timeout <= 300.0:
            errors.append("cdp_timeout must be between 1 and 300 seconds")
        if self.http_timeout <= 0:
            errors.append("http_timeout must be positive")
        if self.element_timeout_ms < 0 or self.exists_timeout_ms < 0:
            errors.append("element timeouts must not be negative")
        if errors:
            raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    @property
    def endpoint(self) -> str:
        return f"http://{self.cdp_host}:{self.cdp_port}"

    def is_host_allowed(self, host: str) -> bool:
        host = (host or "").strip().lower().rstrip(".")
        if not self.allow_hosts:
            return True
        for raw_allowed in self.allow_hosts:
            allowed = (raw_allowed or "").strip().lower().lstrip(".").rstrip(".")
            if not allowed:
                continue
            if host == allowed:
                return True
            if host.endswith("." + allowed):
                return True
        return False
