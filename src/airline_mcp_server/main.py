"""Command-line entry point for the airline MCP servers."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from airline_mcp_server.config import DEFAULT_REGION, StoreSettings
from airline_mcp_server.fastmcp_adapter import build_fastmcp_app
from airline_mcp_server.logging_config import configure_logging
from airline_mcp_server.store import DynamoStore
from airline_mcp_server.tools import SERVER_KINDS, build_server

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(description="Run an airline MCP server.")
    parser.add_argument("server", choices=SERVER_KINDS, help="Which server to run")
    parser.add_argument(
        "--catalog",
        action="store_true",
        help="Print the available tool catalog as JSON and exit.",
    )
    parser.add_argument(
        "--transport",
        choices=("stdio", "http", "sse"),
        default="stdio",
        help="Transport to serve on (default: stdio)",
    )
    parser.add_argument("--host", default="127.0.0.1", help="HTTP/SSE bind host")
    parser.add_argument("--port", type=int, default=8000, help="HTTP/SSE port")
    parser.add_argument("--path", default="/mcp", help="HTTP endpoint path")
    parser.add_argument(
        "--region", default=DEFAULT_REGION, help="AWS region of the tables"
    )
    parser.add_argument(
        "--endpoint-url", default=None, help="DynamoDB endpoint override"
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    store = DynamoStore(
        StoreSettings(region=args.region, endpoint_url=args.endpoint_url)
    )
    server = build_server(args.server, store)

    if args.catalog:
        print(json.dumps(server.to_catalog(), indent=2))
        return 0

    run_kwargs: dict[str, object] = {}
    if args.transport == "stdio":
        run_kwargs["show_banner"] = False
        logger.info("%s MCP Server running on stdio", server.title)
    else:
        run_kwargs.update(host=args.host, port=args.port)
        if args.transport == "http":
            run_kwargs["path"] = args.path

    try:
        build_fastmcp_app(server).run(transport=args.transport, **run_kwargs)
    except Exception:
        logger.exception("Server failed to start")
        return 1
    return 0


def flight_ops_main() -> int:
    """Run the flight-operations server on stdio."""
    return main(["flight-ops", *sys.argv[1:]])


def customer_service_main() -> int:
    """Run the customer-service server on stdio."""
    return main(["customer-service", *sys.argv[1:]])


if __name__ == "__main__":
    raise SystemExit(main())
