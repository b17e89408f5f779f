"""airline_mcp package initialization."""

from airline_mcp.errors import MCPError, raise_mcp_error
from airline_mcp.server import MCPServer, ToolResult
from airline_mcp.tools import ToolDefinition, ToolOutput, ToolParameters

__all__ = [
    "MCPError",
    "MCPServer",
    "ToolDefinition",
    "ToolOutput",
    "ToolParameters",
    "ToolResult",
    "raise_mcp_error",
]
