"""Tests for the server entry point's transport and bind checks."""

from __future__ import annotations

import pytest

from nutriscan.core.config.settings import Settings
from nutriscan.core.server import main


class _RecordingServer:
    def __init__(self) -> None:
        self.calls = []

    def run(self, **kwargs) -> None:
        self.calls.append(kwargs)


@pytest.fixture
def server(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    fake = _RecordingServer()
    monkeypatch.setattr(main, "create_app", lambda: fake)
    return fake


@pytest.mark.parametrize(
    ("host", "expected"),
    [("127.0.0.1", True), ("::1", True), ("localhost", True),
     ("0.0.0.0", False), ("10.0.0.5", False), ("nutriscan.internal", False)],
)
def test_is_loopback_host(host, expected):
    assert main._is_loopback_host(host) is expected


def test_public_http_bind_refused():
    with pytest.raises(RuntimeError, match="0.0.0.0"):
        main.check_bind(Settings(nutriscan_host="0.0.0.0"))


def test_public_http_bind_allowed_when_opted_in():
    main.check_bind(Settings(nutriscan_host="0.0.0.0", nutriscan_allow_insecure_bind=True))


def test_stdio_skips_bind_guard():
    main.check_bind(Settings(nutriscan_host="0.0.0.0", nutriscan_transport="stdio"))


def test_unknown_transport_rejected():
    with pytest.raises(ValueError, match="sse"):
        main.check_bind(Settings(nutriscan_transport="sse"))


def test_run_serves_http_on_configured_port(server, monkeypatch):
    monkeypatch.setenv("NUTRISCAN_PORT", "9200")
    main.run()
    assert server.calls == [{"transport": "streamable-http", "host": "127.0.0.1", "port": 9200}]


def test_run_over_stdio(server, monkeypatch):
    monkeypatch.setenv("NUTRISCAN_TRANSPORT", "stdio")
    monkeypatch.setenv("NUTRISCAN_HOST", "0.0.0.0")
    main.run()
    assert server.calls == [{"transport": "stdio"}]


def test_run_refuses_public_bind_before_building_the_server(server, monkeypatch):
    monkeypatch.setenv("NUTRISCAN_HOST", "0.0.0.0")
    with pytest.raises(RuntimeError):
        main.run()
    assert server.calls == []
