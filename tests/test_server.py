"""Tests for the MCP server registry and JSON-RPC dispatch."""

from __future__ import annotations

import json

import pytest

from airline_mcp.errors import raise_mcp_error
from airline_mcp.server import MCPServer
from airline_mcp.tools import ToolDefinition, ToolOutput, ToolParameters


class EchoParameters(ToolParameters):
    """Parameters for the echo tool."""

    text: str


def _echo_tool() -> ToolDefinition:
    def handler(params: EchoParameters) -> ToolOutput:
        if params.text == "boom":
            raise_mcp_error("EchoError", "echo refused", hints=["Say something else"])
        return ToolOutput(summary="Echo:", data={"text": params.text})

    return ToolDefinition(
        name="echo",
        description="Echo the provided text.",
        parameters_model=EchoParameters,
        handler=handler,
    )


class TestMCPServer:
    """Behavioral coverage for MCPServer."""

    def test_register_and_list_tools(self) -> None:
        """Registers a tool and ensures it appears in the catalog."""
        # Arrange
        server = MCPServer(name="test-server")
        echo = _echo_tool()

        # Act
        server.register_tool(echo)

        # Assert
        assert server.available_tools() == ["echo"]
        catalog = server.to_catalog()
        assert catalog["echo"]["description"] == echo.description
        assert catalog["echo"]["inputSchema"]["required"] == ["text"]

    def test_prevents_duplicate_tool_names(self) -> None:
        """Duplicate tool registrations raise a ValueError."""
        # Arrange
        server = MCPServer(name="test-server")
        server.register_tool(_echo_tool())

        # Act / Assert
        with pytest.raises(ValueError):
            server.register_tool(_echo_tool())

    def test_runs_registered_tool(self) -> None:
        """Executing a registered tool renders summary and JSON payload."""
        # Arrange
        server = MCPServer(name="test-server")
        server.register_tool(_echo_tool())

        # Act
        result = server.run_tool("echo", parameters={"text": "hi"})

        # Assert
        assert result.is_error is False
        summary, body = result.text.split("\n\n", 1)
        assert summary == "Echo:"
        assert json.loads(body) == {"text": "hi"}
        assert json.loads(result.to_json())["name"] == "echo"

    def test_unknown_tool_is_a_text_result(self) -> None:
        """Unknown tool invocations produce a text result, not an exception."""
        # Arrange
        server = MCPServer(name="test-server")

        # Act
        result = server.run_tool("missing")

        # Assert
        assert result.text == "Unknown tool: missing"
        assert result.to_envelope()["content"][0]["type"] == "text"

    def test_rejects_invalid_parameters(self) -> None:
        """Invalid parameters are reported as text before the handler runs."""
        # Arrange
        server = MCPServer(name="test-server")
        server.register_tool(_echo_tool())

        # Act
        result = server.run_tool("echo", parameters={"unexpected": "value"})

        # Assert
        assert result.is_error is True
        assert result.text.startswith("Error: Invalid parameters for tool 'echo'")
        assert "text: Field required" in result.text

    def test_handler_errors_render_hints(self) -> None:
        """Structured handler failures become numbered troubleshooting text."""
        # Arrange
        server = MCPServer(name="test-server")
        server.register_tool(_echo_tool())

        # Act
        result = server.run_tool("echo", parameters={"text": "boom"})

        # Assert
        assert result.is_error is True
        assert result.text.splitlines()[0] == "Error: echo refused"
        assert "1. Say something else" in result.text

    def test_error_envelope_flags_failures(self) -> None:
        """Failed results carry isError in their envelope, successes do not."""
        # Arrange
        server = MCPServer(name="test-server")
        server.register_tool(_echo_tool())

        # Act
        ok = server.run_tool("echo", parameters={"text": "hi"})
        failed = server.run_tool("echo", parameters={"text": "boom"})

        # Assert
        assert "isError" not in ok.to_envelope()
        assert failed.to_envelope()["isError"] is True
