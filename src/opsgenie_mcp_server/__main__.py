#!/usr/bin/env python3
"""
OpsGenie MCP Server - Main entry point

This module provides the main entry point for the OpsGenie MCP Server.
"""

import logging
import os
import sys

from opsgenie_mcp_server.client import DEFAULT_TIMEOUT
from opsgenie_mcp_server.errors import ConfigurationError
from opsgenie_mcp_server.server import create_opsgenie_mcp_server
from opsgenie_mcp_server.server_defaults import DEFAULT_SERVER_NAME


def _configure_logging() -> None:
    # stdout carries the MCP stream; logs go to stderr
    level = os.getenv("OPSGENIE_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_server():
    """Get a configured OpsGenie MCP server instance."""
    # Get configuration from environment variables
    api_key = os.getenv("OPSGENIE_API_KEY")
    base_url = os.getenv("OPSGENIE_BASE_URL")
    server_name = os.getenv("OPSGENIE_SERVER_NAME", DEFAULT_SERVER_NAME)

    timeout_env = os.getenv("OPSGENIE_TIMEOUT")
    try:
        timeout = float(timeout_env) if timeout_env else DEFAULT_TIMEOUT
    except ValueError:
        raise ConfigurationError(f"OPSGENIE_TIMEOUT must be a number, got {timeout_env!r}")

    # Create and return the server
    return create_opsgenie_mcp_server(
        api_key=api_key,
        base_url=base_url,
        name=server_name,
        timeout=timeout,
    )


def main():
    """Main entry point for the OpsGenie MCP Server."""
    _configure_logging()
    try:
        mcp = get_server()
        mcp.run()

    except Exception as e:
        print(f"Error starting OpsGenie MCP Server: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
