"""Adapters for exposing airline MCP tools via FastMCP."""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP
from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext
from fastmcp.tools import Tool, ToolResult
from pydantic import PrivateAttr

from airline_mcp.server import MCPServer
from airline_mcp.tools import ToolDefinition


def _to_fastmcp_result(server: MCPServer, name: str, arguments: Any) -> ToolResult:
    result = server.run_tool(name, parameters=arguments or {})
    return ToolResult(content=result.text, is_error=result.is_error)


class ToolDefinitionAdapter(Tool):
    """Expose a :class:`ToolDefinition` as a FastMCP tool."""

    _definition: ToolDefinition = PrivateAttr()
    _server: MCPServer = PrivateAttr()

    def __init__(self, definition: ToolDefinition, server: MCPServer) -> None:
        """Create a FastMCP tool wrapper dispatching through ``server``."""
        super().__init__(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema(),
            output_schema=None,
            tags=set(),
        )
        self._definition = definition
        self._server = server

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Dispatch through the server so validation and rendering stay shared."""
        return _to_fastmcp_result(self._server, self._definition.name, arguments)


class UnknownToolMiddleware(Middleware):
    """Answer calls to unregistered tools with the server's own text result."""

    def __init__(self, server: MCPServer) -> None:
        self._server = server

    async def on_call_tool(
        self,
        context: MiddlewareContext[Any],
        call_next: CallNext[Any, ToolResult],
    ) -> ToolResult:
        name = context.message.name
        if name not in self._server.available_tools():
            return _to_fastmcp_result(self._server, name, context.message.arguments)
        return await call_next(context)


def to_fastmcp_tools(server: MCPServer) -> list[Tool]:
    """Convert the server's tool definitions into FastMCP-compatible tools."""
    return [
        ToolDefinitionAdapter(definition, server)
        for definition in server.tool_definitions()
    ]


def build_fastmcp_app(server: MCPServer) -> FastMCP:
    """Create a FastMCP server instance with all of ``server``'s tools."""
    app = FastMCP(
        name=server.name,
        instructions=f"{server.title} tools exposed over the Model Context Protocol.",
        version=server.version,
        middleware=[UnknownToolMiddleware(server)],
    )
    for tool in to_fastmcp_tools(server):
        app.add_tool(tool)
    return app
