"""Connectivity check against the tables a server depends on."""

from __future__ import annotations

from collections.abc import Sequence

from airline_mcp.errors import MCPError, raise_mcp_error
from airline_mcp.tools import ToolDefinition, ToolOutput, ToolParameters
from airline_mcp_server.store import Store, StoreError
from airline_mcp_server.tools.common import troubleshooting_hints


class ConnectionCheckParams(ToolParameters):
    """The connection check takes no arguments."""


def connection_check_tool(store: Store, tables: Sequence[str]) -> ToolDefinition:
    """Create the test_connection tool probing ``tables`` in order."""

    def handler(_: ConnectionCheckParams) -> ToolOutput:
        try:
            lines = ["Database Connection Test Results:", ""]
            for table in tables:
                page = store.scan_page(table, limit=1)
                lines.extend(
                    [
                        f"{table} table:",
                        "- Accessible: Yes",
                        f"- Sample records: {len(page.items)}",
                        f"- Total scanned: {page.scanned_count}",
                        "",
                    ]
                )
            lines.append(f"AWS Region: {store.settings.region}")
            lines.append("Connection: Successful")
            return ToolOutput(summary="\n".join(lines))
        except StoreError as error:
            raise MCPError(
                "ConnectionTestFailed",
                f"Database Connection Test Failed: {error.message}",
                details={"error_code": error.error_code, "table": error.table},
                hints=troubleshooting_hints(store, tables),
            ) from error
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error(
                "ConnectionTestFailed",
                f"Database Connection Test Failed: {exc}",
                hints=troubleshooting_hints(store, tables),
            )

    return ToolDefinition(
        name="test_connection",
        description="Test DynamoDB connection and table access",
        parameters_model=ConnectionCheckParams,
        handler=handler,
    )
