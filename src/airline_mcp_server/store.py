"""Document store adapter backed by DynamoDB."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from decimal import Decimal
from functools import reduce
from operator import and_
from typing import Any, Protocol

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from airline_mcp.errors import MCPError
from airline_mcp_server.config import StoreSettings

logger = logging.getLogger(__name__)

Item = dict[str, Any]


class StoreError(MCPError):
    """Failure reported by the document store."""

    def __init__(
        self, message: str, *, error_code: str, table: str, operation: str
    ) -> None:
        """Record the failing table and operation alongside the AWS error code."""
        super().__init__(
            "StoreError",
            message,
            details={"error_code": error_code, "table": table, "operation": operation},
        )
        self.error_code = error_code
        self.table = table
        self.operation = operation


@dataclass
class ScanPage:
    """Single page returned by a bounded scan."""

    items: list[Item] = field(default_factory=list)
    scanned_count: int = 0


class Store(Protocol):
    """Operations the tools need from the document store."""

    settings: StoreSettings

    def scan(self, table: str, filters: Mapping[str, Any] | None = None) -> list[Item]:
        """Return every item of ``table`` whose attributes equal ``filters``."""
        ...

    def scan_page(self, table: str, limit: int) -> ScanPage:
        """Scan at most ``limit`` items of ``table``."""
        ...

    def query(
        self,
        table: str,
        key: Mapping[str, Any],
        index: str | None = None,
        limit: int | None = None,
    ) -> list[Item]:
        """Return items matching the key condition, optionally via an index."""
        ...

    def get(self, table: str, key: Mapping[str, Any]) -> Item | None:
        """Fetch one item by its full primary key."""
        ...

    def put(self, table: str, item: Mapping[str, Any]) -> None:
        """Write ``item`` unconditionally."""
        ...


def to_plain(value: Any) -> Any:
    """Convert DynamoDB values into plain JSON-friendly Python values."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {key: to_plain(inner) for key, inner in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(inner) for inner in value]
    if isinstance(value, (set, frozenset)):
        return sorted((to_plain(inner) for inner in value), key=str)
    return value


def to_store(value: Any) -> Any:
    """Convert plain Python values into types boto3 can serialize."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, Mapping):
        return {key: to_store(inner) for key, inner in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_store(inner) for inner in value]
    return value


@contextmanager
def store_errors(table: str, operation: str) -> Iterator[None]:
    """Translate botocore failures into :class:`StoreError`."""
    try:
        yield
    except ClientError as exc:
        error = exc.response.get("Error", {})
        code = str(error.get("Code") or exc.__class__.__name__)
        message = str(error.get("Message") or exc)
        logger.error("%s on %s failed: %s (%s)", operation, table, message, code)
        raise StoreError(
            message, error_code=code, table=table, operation=operation
        ) from exc
    except BotoCoreError as exc:
        logger.error("%s on %s failed: %s", operation, table, exc)
        raise StoreError(
            str(exc),
            error_code=exc.__class__.__name__,
            table=table,
            operation=operation,
        ) from exc


class DynamoStore:
    """Thin adapter issuing scan/query/get/put calls against DynamoDB tables."""

    def __init__(self, settings: StoreSettings, resource: Any | None = None) -> None:
        """Create the adapter; the boto3 resource is built on first use."""
        self.settings = settings
        self._resource = resource

    @property
    def resource(self) -> Any:
        """Return the boto3 DynamoDB service resource."""
        if self._resource is None:
            self._resource = boto3.resource(
                "dynamodb",
                region_name=self.settings.region,
                endpoint_url=self.settings.endpoint_url,
            )
        return self._resource

    def _table(self, name: str) -> Any:
        return self.resource.Table(name)

    def scan(self, table: str, filters: Mapping[str, Any] | None = None) -> list[Item]:
        """Scan ``table`` to the end, following ``LastEvaluatedKey``."""
        kwargs: dict[str, Any] = {}
        if filters:
            kwargs["FilterExpression"] = reduce(
                and_, (Attr(name).eq(value) for name, value in filters.items())
            )
        items: list[Item] = []
        with store_errors(table, "scan"):
            while True:
                response = self._table(table).scan(**kwargs)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        return [to_plain(item) for item in items]

    def scan_page(self, table: str, limit: int) -> ScanPage:
        """Scan a single bounded page of ``table``."""
        with store_errors(table, "scan"):
            response = self._table(table).scan(Limit=limit)
        return ScanPage(
            items=[to_plain(item) for item in response.get("Items", [])],
            scanned_count=int(response.get("ScannedCount", 0)),
        )

    def query(
        self,
        table: str,
        key: Mapping[str, Any],
        index: str | None = None,
        limit: int | None = None,
    ) -> list[Item]:
        """Query ``table`` (or ``index``) for items equal to ``key``."""
        kwargs: dict[str, Any] = {
            "KeyConditionExpression": reduce(
                and_, (Key(name).eq(value) for name, value in key.items())
            )
        }
        if index:
            kwargs["IndexName"] = index
        if limit:
            kwargs["Limit"] = limit
        items: list[Item] = []
        with store_errors(table, "query"):
            while True:
                response = self._table(table).query(**kwargs)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key or (limit and len(items) >= limit):
                    break
                kwargs["ExclusiveStartKey"] = last_key
        if limit:
            items = items[:limit]
        return [to_plain(item) for item in items]

    def get(self, table: str, key: Mapping[str, Any]) -> Item | None:
        """Fetch one item by primary key, or ``None`` when absent."""
        with store_errors(table, "get"):
            response = self._table(table).get_item(Key=dict(key))
        item = response.get("Item")
        return to_plain(item) if item is not None else None

    def put(self, table: str, item: Mapping[str, Any]) -> None:
        """Write ``item`` to ``table``, replacing any existing item."""
        with store_errors(table, "put"):
            self._table(table).put_item(Item=to_store(item))
