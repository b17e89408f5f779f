"""Tool registry and dispatcher for the airline MCP servers.

The server tracks registered tools and executes them on validated arguments,
rendering every outcome as text. It is free of I/O so that it can be driven
directly from tests; the FastMCP adapter puts it on the wire.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from airline_mcp.errors import MCPError
from airline_mcp.tools import ToolDefinition

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """Result returned by tool execution.

    Attributes:
        name: Name of the tool that produced the result.
        text: Rendered text payload.
        is_error: Whether the text describes a failure.

    """

    name: str
    text: str
    is_error: bool = False

    def to_envelope(self) -> dict[str, Any]:
        """Wrap the result in the MCP tool-result envelope."""
        envelope: dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            envelope["isError"] = True
        return envelope

    def to_json(self) -> str:
        """Serialize the result to JSON.

        Returns:
            JSON representation of the tool result.

        """
        return json.dumps({"name": self.name, **self.to_envelope()})


class MCPServer:
    """In-memory registry and dispatcher for MCP tools."""

    def __init__(
        self, name: str, version: str = "1.0.0", title: str | None = None
    ) -> None:
        """Initialize an empty server registry."""
        self.name = name
        self.version = version
        self.title = title or name
        self._tools: dict[str, ToolDefinition] = {}

    def register_tool(self, tool: ToolDefinition) -> None:
        """Register a tool with the server.

        Args:
            tool: Tool definition to register.

        Raises:
            ValueError: If a tool with the same name is already registered.

        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def register_tools(self, *tools: ToolDefinition) -> None:
        """Register multiple tools at once.

        Args:
            *tools: Collection of tool definitions to register.

        """
        for tool in tools:
            self.register_tool(tool)

    def available_tools(self) -> list[str]:
        """List the names of registered tools in registration order."""
        return list(self._tools)

    def tool_definitions(self) -> list[ToolDefinition]:
        """Return the registered tool definitions in registration order."""
        return list(self._tools.values())

    def to_catalog(self) -> dict[str, dict[str, Any]]:
        """Produce a catalog for discovery.

        Returns:
            Mapping of tool names to their metadata.

        """
        return {name: tool.metadata() for name, tool in self._tools.items()}

    def run_tool(
        self, name: str, *, parameters: dict[str, Any] | None = None
    ) -> ToolResult:
        """Execute a registered tool and render its outcome.

        Unknown tools, invalid arguments and handler failures are all reported
        as text results; nothing raised by a handler as :class:`MCPError`
        escapes this method.

        Args:
            name: Name of the registered tool to execute.
            parameters: Optional arguments for the tool.

        Returns:
            ToolResult containing the tool name and rendered text.

        """
        tool = self._tools.get(name)
        if tool is None:
            logger.warning("Unknown tool requested: %s", name)
            return ToolResult(name=name, text=f"Unknown tool: {name}", is_error=True)

        try:
            validated = tool.validate(parameters if parameters is not None else {})
            output = tool.handler(validated)
        except MCPError as error:
            logger.info("Tool %s failed: %s", name, error.message)
            return ToolResult(name=name, text=error.to_text(), is_error=True)
        return ToolResult(name=name, text=output.render())
