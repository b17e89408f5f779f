"""CLI-level coverage for the server entry point."""

from __future__ import annotations

import json

import pytest
from fastmcp import FastMCP
from pytest import CaptureFixture, MonkeyPatch

from airline_mcp.server import MCPServer
from airline_mcp_server import main as server_main
from airline_mcp_server.fastmcp_adapter import build_fastmcp_app


class _DummyApp:
    """Shim FastMCP app to capture run invocations without network I/O."""

    def __init__(self) -> None:
        self.run_calls: list[dict[str, object]] = []

    def run(self, *, transport: str, **kwargs: object) -> None:
        self.run_calls.append({"transport": transport, **kwargs})


def test_catalog_flag_lists_flight_ops_tools(capsys: CaptureFixture[str]) -> None:
    """--catalog prints tool discovery metadata and exits cleanly."""
    # Act
    exit_code = server_main.main(["flight-ops", "--catalog"])

    # Assert
    assert exit_code == 0
    catalog = json.loads(capsys.readouterr().out)
    assert set(catalog) == {
        "check_flight_delays",
        "find_alternative_flights",
        "get_affected_passengers",
        "test_connection",
    }
    assert catalog["find_alternative_flights"]["inputSchema"]["required"] == [
        "origin",
        "destination",
    ]


def test_catalog_flag_lists_customer_service_tools(
    capsys: CaptureFixture[str],
) -> None:
    """The customer-service catalog carries its own tool set."""
    # Act
    exit_code = server_main.main(["customer-service", "--catalog"])

    # Assert
    assert exit_code == 0
    catalog = json.loads(capsys.readouterr().out)
    assert "generate_proactive_message" in catalog
    assert "start_support_session" in catalog


def test_main_runs_fastmcp_with_transport(monkeypatch: MonkeyPatch) -> None:
    """main() delegates to FastMCP.run with the provided transport settings."""
    dummy_app = _DummyApp()
    monkeypatch.setattr(server_main, "build_fastmcp_app", lambda _server: dummy_app)

    exit_code = server_main.main(
        [
            "flight-ops",
            "--transport",
            "http",
            "--host",
            "127.0.0.1",
            "--port",
            "8080",
            "--path",
            "/mcp",
        ]
    )

    assert exit_code == 0
    assert dummy_app.run_calls == [
        {"transport": "http", "host": "127.0.0.1", "port": 8080, "path": "/mcp"}
    ]


def test_main_serves_stdio_through_fastmcp(monkeypatch: MonkeyPatch) -> None:
    """The default transport hands stdio to FastMCP without its banner."""
    # Arrange
    dummy_app = _DummyApp()
    monkeypatch.setattr(server_main, "build_fastmcp_app", lambda _server: dummy_app)

    # Act
    exit_code = server_main.main(["customer-service"])

    # Assert
    assert exit_code == 0
    assert dummy_app.run_calls == [{"transport": "stdio", "show_banner": False}]


def test_stdio_app_is_named_after_the_server(monkeypatch: MonkeyPatch) -> None:
    """The FastMCP app built for stdio reports the server's name and version."""
    built: list[FastMCP] = []

    def _capture(server: MCPServer) -> _DummyApp:
        built.append(build_fastmcp_app(server))
        return _DummyApp()

    monkeypatch.setattr(server_main, "build_fastmcp_app", _capture)

    assert server_main.main(["flight-ops"]) == 0
    assert built[0].name == "airline-flight-ops"
    assert built[0].version == "1.0.0"


def test_startup_failure_exits_non_zero(monkeypatch: MonkeyPatch) -> None:
    """A transport that cannot start yields exit code 1."""

    class _BrokenApp(_DummyApp):
        def run(self, *, transport: str, **kwargs: object) -> None:
            raise OSError("stdin closed")

    monkeypatch.setattr(server_main, "build_fastmcp_app", lambda _server: _BrokenApp())

    assert server_main.main(["flight-ops"]) == 1


def test_unknown_server_kind_is_rejected() -> None:
    """argparse rejects server kinds other than the two airline servers."""
    with pytest.raises(SystemExit):
        server_main.main(["baggage"])
