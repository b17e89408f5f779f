"""Custom error types for MCP tooling."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import NoReturn, TypedDict


class MCPErrorPayload(TypedDict):
    """Structured JSON payload for MCP errors."""

    error: dict[str, object | None]


class MCPError(Exception):
    """Structured MCP error containing a JSON-friendly payload.

    The error travels unchanged from a tool handler to the dispatcher, which
    renders it to text only when building the wire response.
    """

    def __init__(
        self,
        error_type: str,
        message: str,
        details: object | None = None,
        hints: Sequence[str] | None = None,
    ) -> None:
        """Create a structured MCP error payload."""
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.details = details
        self.hints = list(hints or [])
        self.error: MCPErrorPayload = {
            "error": {
                "type": error_type,
                "message": message,
                "details": details,
                "hints": self.hints,
            }
        }

    def to_dict(self) -> MCPErrorPayload:
        """Return the structured error payload."""
        return self.error

    def to_text(self) -> str:
        """Render the error as the human-readable text of a tool result."""
        lines = [f"Error: {self.message}"]
        if self.details is not None:
            if isinstance(self.details, str):
                lines.append(f"Details: {self.details}")
            else:
                lines.append(f"Details: {json.dumps(self.details, default=str)}")
        if self.hints:
            lines.append("")
            lines.append("Troubleshooting:")
            lines.extend(
                f"{number}. {hint}" for number, hint in enumerate(self.hints, 1)
            )
        return "\n".join(lines)


def raise_mcp_error(
    error_type: str,
    message: str,
    details: object | None = None,
    hints: Sequence[str] | None = None,
) -> NoReturn:
    """Raise an :class:`MCPError` with a structured payload."""
    raise MCPError(
        error_type=error_type, message=message, details=details, hints=hints
    )
