"""End-to-end coverage for the FastMCP server wrapper."""

from __future__ import annotations

import json

import pytest
from fastmcp.client import Client

from airline_mcp.server import MCPServer
from airline_mcp.tools import ToolDefinition, ToolOutput, ToolParameters
from airline_mcp_server.fastmcp_adapter import build_fastmcp_app
from airline_mcp_server.tools import build_server
from tests.fakes import InMemoryStore


class _NoParameters(ToolParameters):
    """The test tools take no arguments."""


def _tool(name: str, outcome: str | Exception) -> ToolDefinition:
    def handler(_: _NoParameters) -> ToolOutput:
        if isinstance(outcome, Exception):
            raise outcome
        return ToolOutput(summary=outcome)

    return ToolDefinition(
        name=name,
        description=f"{name} tool",
        parameters_model=_NoParameters,
        handler=handler,
    )


@pytest.mark.anyio()
async def test_fastmcp_server_supports_tool_discovery(
    flights_store: InMemoryStore,
) -> None:
    """The FastMCP app exposes the flight-ops toolset via the official protocol."""
    # Arrange
    app = build_fastmcp_app(build_server("flight-ops", flights_store))

    async with Client(app) as client:
        # Act
        tools = await client.list_tools()
        result = await client.call_tool(
            "check_flight_delays", {"airport": "FRA", "severity": "severe"}
        )

    # Assert
    assert [tool.name for tool in tools] == [
        "check_flight_delays",
        "find_alternative_flights",
        "get_affected_passengers",
        "test_connection",
    ]
    assert result.content[0].text.startswith(
        "Found 3 delayed/disrupted flights at FRA"
    )


@pytest.mark.anyio()
async def test_fastmcp_initialize_reports_server_identity(
    store: InMemoryStore,
) -> None:
    """The initialize handshake names the server and answers ping."""
    app = build_fastmcp_app(build_server("customer-service", store))

    async with Client(app) as client:
        alive = await client.ping()
        server_info = client.server_info

    assert alive is True
    assert server_info is not None
    assert server_info.name == "airline-customer-service"
    assert server_info.version == "1.0.0"


@pytest.mark.anyio()
async def test_fastmcp_customer_service_round_trip(store: InMemoryStore) -> None:
    """Customer-service tools render their JSON payload as the result text."""
    app = build_fastmcp_app(build_server("customer-service", store))

    async with Client(app) as client:
        result = await client.call_tool(
            "escalation_handoff",
            {"passenger_id": "P1", "issue_complexity": "vip_handling"},
        )

    handoff = json.loads(result.content[0].text)
    assert handoff["priority"] == "HIGH"
    assert handoff["context"]["recommended_agent_type"] == "Senior VIP Agent"


@pytest.mark.anyio()
async def test_fastmcp_unknown_tool_uses_server_text(store: InMemoryStore) -> None:
    """Calls to unregistered tools get the plain ``Unknown tool: <name>`` text."""
    app = build_fastmcp_app(build_server("flight-ops", store))

    async with Client(app) as client:
        result = await client.call_tool("nope", {}, raise_on_error=False)

    assert result.is_error is True
    assert result.content[0].text == "Unknown tool: nope"


@pytest.mark.anyio()
async def test_fastmcp_propagates_text_errors(
    unreachable_store: InMemoryStore,
) -> None:
    """Failures surface as error results carrying the rendered text."""
    app = build_fastmcp_app(build_server("flight-ops", unreachable_store))

    async with Client(app) as client:
        result = await client.call_tool("test_connection", {}, raise_on_error=False)

    assert result.is_error is True
    assert "Database Connection Test Failed" in result.content[0].text


@pytest.mark.anyio()
async def test_fastmcp_handler_crash_does_not_stop_the_server() -> None:
    """An unexpected handler exception fails one call and later calls succeed."""
    # Arrange
    server = MCPServer(name="crash-test")
    server.register_tools(
        _tool("crash", RuntimeError("handler blew up")), _tool("hello", "Hello!")
    )
    app = build_fastmcp_app(server)

    async with Client(app) as client:
        # Act
        crashed = await client.call_tool("crash", {}, raise_on_error=False)
        after = await client.call_tool("hello", {})

    # Assert
    assert crashed.is_error is True
    assert "handler blew up" in crashed.content[0].text
    assert after.is_error is False
    assert after.content[0].text == "Hello!"


@pytest.mark.anyio()
async def test_fastmcp_rejects_invalid_arguments_with_server_text(
    store: InMemoryStore,
) -> None:
    """Argument validation errors are rendered by the shared dispatcher."""
    app = build_fastmcp_app(build_server("flight-ops", store))

    async with Client(app) as client:
        result = await client.call_tool(
            "find_alternative_flights", {"origin": "FRA"}, raise_on_error=False
        )

    assert result.is_error is True
    assert "destination: Field required" in result.content[0].text
    assert store.calls == []
