from __future__ import annotations

import pytest

from mcp_servers.chrome_control.config import ControlConfig


def test_defaults_from_empty_env(monkeypatch) -> None:  # noqa: ANN001
    for name in (
        "MCP_CHROME_HOST",
        "MCP_CHROME_PORT",
        "MCP_CDP_TIMEOUT",
        "MCP_ELEMENT_TIMEOUT_MS",
        "MCP_EXISTS_TIMEOUT_MS",
        "MCP_TRUSTED_INPUT",
        "MCP_ALLOW_HOSTS",
    ):
        monkeypatch.delenv(name, raising=False)

    cfg = ControlConfig.from_env()
    assert cfg.endpoint == "http://127.0.0.1:9222"
    assert cfg.element_timeout_ms == 5000
    assert cfg.exists_timeout_ms == 1000
    assert cfg.trusted_input is True
    assert cfg.allow_hosts == []


def test_env_overrides(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setenv("MCP_CHROME_PORT", "9333")
    monkeypatch.setenv("MCP_TRUSTED_INPUT", "off")
    monkeypatch.setenv("MCP_ALLOW_HOSTS", "Example.com, *, ")

    cfg = ControlConfig.from_env()
    assert cfg.cdp_port == 9333
    assert cfg.trusted_input is False
    assert cfg.allow_hosts == ["example.com"]


@pytest.mark.parametrize(("key", "value"), [("MCP_CHROME_PORT", "80"), ("MCP_CDP_TIMEOUT", "0.5")])
def test_out_of_range_values_are_rejected(monkeypatch, key: str, value: str) -> None:  # noqa: ANN001
    monkeypatch.setenv(key, value)
    with pytest.raises(ValueError, match="Configuration validation failed"):
        ControlConfig.from_env()


def test_host_allowlist_matches_subdomains() -> None:
    cfg = ControlConfig(allow_hosts=["example.com"])
    assert cfg.is_host_allowed("example.com")
    assert cfg.is_host_allowed("a.b.example.com")
    assert not cfg.is_host_allowed("badexample.com")
    assert ControlConfig().is_host_allowed("anything.test")
