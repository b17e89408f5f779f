"""Tool definitions for the airline MCP servers."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, ValidationError

from airline_mcp.errors import MCPError


class ToolParameters(BaseModel):
    """Base parameters schema for MCP tools."""

    model_config = ConfigDict(extra="forbid")


def _json_default(value: object) -> object:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    if isinstance(value, BaseModel):
        return value.model_dump()
    return str(value)


def to_pretty_json(data: object) -> str:
    """Pretty-print ``data`` the way tool results embed JSON blocks."""
    return json.dumps(data, indent=2, default=_json_default)


@dataclass
class ToolOutput:
    """Structured result produced by a tool handler.

    Attributes:
        summary: Human-readable lead line; may be empty.
        data: JSON-serializable payload appended below the summary.

    """

    summary: str = ""
    data: Any = None

    def render(self) -> str:
        """Render the output as the text block sent back to the caller."""
        if self.data is None:
            return self.summary
        body = to_pretty_json(self.data)
        if not self.summary:
            return body
        return f"{self.summary}\n\n{body}"


@dataclass
class ToolDefinition:
    """Description of a tool that can be registered with the server.

    Attributes:
        name: Unique name of the tool.
        description: Human-readable description of the tool purpose.
        parameters_model: Pydantic model used to validate input parameters.
        handler: Callable that executes the tool logic on validated parameters.
    """

    name: str
    description: str
    parameters_model: type[ToolParameters]
    handler: Callable[[Any], ToolOutput]

    def validate(self, parameters: dict[str, Any]) -> ToolParameters:
        """Validate and coerce incoming tool parameters.

        Args:
            parameters: Input parameters provided for the tool.

        Raises:
            MCPError: If parameter validation fails.

        Returns:
            Validated parameter model.
        """

        try:
            return self.parameters_model.model_validate(parameters)
        except ValidationError as error:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in issue['loc']) or 'arguments'}: "
                f"{issue['msg']}"
                for issue in error.errors()
            )
            raise MCPError(
                "InvalidParameters",
                f"Invalid parameters for tool '{self.name}': {problems}",
            ) from error

    def input_schema(self) -> dict[str, Any]:
        """Return the JSON schema advertised for the tool arguments."""

        return self.parameters_model.model_json_schema()

    def metadata(self) -> dict[str, Any]:
        """Return a discovery-friendly description of the tool."""

        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }
