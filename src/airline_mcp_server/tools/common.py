"""Shared helpers for MCP tools."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Literal

from airline_mcp.errors import MCPError
from airline_mcp_server.store import Store, StoreError

PassengerTier = Literal["senator", "frequent_traveler", "regular"]

TIER_RANK: dict[str, int] = {"senator": 3, "frequent_traveler": 2, "regular": 1}

DELAYED_STATUSES = frozenset({"delayed", "cancelled", "diverted"})
ON_TIME_STATUSES = frozenset({"on_time", "on-time", "scheduled"})


def tier_rank(tier: object) -> int:
    """Return the priority rank of a loyalty tier; unknown tiers rank 0."""
    return TIER_RANK.get(tier, 0) if isinstance(tier, str) else 0


def normalized_status(status: object) -> str:
    """Lower-case a flight status, treating missing values as empty."""
    return status.lower() if isinstance(status, str) else ""


def is_delayed_status(status: object) -> bool:
    """Return whether a status marks a delayed, cancelled or diverted flight."""
    return normalized_status(status) in DELAYED_STATUSES


def is_on_time_status(status: object) -> bool:
    """Return whether a status marks a flight running to schedule."""
    return normalized_status(status) in ON_TIME_STATUSES


def generate_id(prefix: str) -> str:
    """Return a collision-resistant identifier such as ``NOTIFY_3f2a...``."""
    return f"{prefix}_{uuid.uuid4().hex}"


def utc_now() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def troubleshooting_hints(store: Store, tables: Sequence[str]) -> list[str]:
    """Return the checklist attached to every store failure."""
    return [
        "Check AWS credentials (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY)",
        f"Verify tables exist: {', '.join(tables)}",
        "Check IAM permissions for DynamoDB access",
        f"Confirm region is correct (currently: {store.settings.region})",
    ]


def database_error(store: Store, error: StoreError, *tables: str) -> MCPError:
    """Wrap a store failure in the error reported back to the caller."""
    return MCPError(
        "DatabaseError",
        f"Database request failed: {error.message}",
        details={"error_code": error.error_code, "table": error.table},
        hints=troubleshooting_hints(store, tables or (error.table,)),
    )
