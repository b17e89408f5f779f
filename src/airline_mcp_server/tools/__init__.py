"""Tool registration helpers for the airline MCP servers."""

from __future__ import annotations

from airline_mcp.server import MCPServer
from airline_mcp.tools import ToolDefinition
from airline_mcp_server.store import Store
from airline_mcp_server.tools.diagnostics import connection_check_tool
from airline_mcp_server.tools.flights import (
    check_flight_delays_tool,
    find_alternative_flights_tool,
)
from airline_mcp_server.tools.messaging import generate_proactive_message_tool
from airline_mcp_server.tools.passengers import get_affected_passengers_tool
from airline_mcp_server.tools.records import (
    create_delay_notification_tool,
    start_support_session_tool,
)
from airline_mcp_server.tools.workflows import (
    create_rebooking_workflow_tool,
    escalation_handoff_tool,
)

SERVER_KINDS = ("flight-ops", "customer-service")


def build_flight_ops_tools(store: Store) -> list[ToolDefinition]:
    """Instantiate the flight-operations tools with the provided store."""
    tables = store.settings.tables
    return [
        check_flight_delays_tool(store),
        find_alternative_flights_tool(store),
        get_affected_passengers_tool(store),
        connection_check_tool(
            store,
            [
                tables.flights,
                tables.passengers,
                tables.bookings,
                tables.delay_notifications,
                tables.rebooking_options,
            ],
        ),
    ]


def build_customer_service_tools(store: Store) -> list[ToolDefinition]:
    """Instantiate the customer-service tools with the provided store."""
    tables = store.settings.tables
    return [
        generate_proactive_message_tool(store),
        create_rebooking_workflow_tool(),
        escalation_handoff_tool(),
        create_delay_notification_tool(store),
        start_support_session_tool(store),
        connection_check_tool(
            store,
            [
                tables.passengers,
                tables.delay_notifications,
                tables.support_sessions,
                tables.passenger_preferences,
            ],
        ),
    ]


def build_server(kind: str, store: Store) -> MCPServer:
    """Create the named server with its tools registered."""
    if kind == "flight-ops":
        server = MCPServer(
            name="airline-flight-ops", title="Airline Flight Operations"
        )
        server.register_tools(*build_flight_ops_tools(store))
    elif kind == "customer-service":
        server = MCPServer(
            name="airline-customer-service", title="Airline Customer Service"
        )
        server.register_tools(*build_customer_service_tools(store))
    else:
        raise ValueError(f"Unknown server kind '{kind}'")
    return server
