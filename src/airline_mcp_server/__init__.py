"""Model Context Protocol servers for airline flight operations and service."""

from airline_mcp_server.config import StoreSettings, TableNames
from airline_mcp_server.store import DynamoStore, Store, StoreError
from airline_mcp_server.tools import (
    build_customer_service_tools,
    build_flight_ops_tools,
    build_server,
)

__all__ = [
    "DynamoStore",
    "Store",
    "StoreError",
    "StoreSettings",
    "TableNames",
    "build_customer_service_tools",
    "build_flight_ops_tools",
    "build_server",
]
