"""Runtime settings, read from the environment at call time."""

from __future__ import annotations

import os

DEFAULT_ESPN_API_BASE = "https://site.api.espn.com/apis/site/v2/sports"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
TRANSPORTS = ("stdio", "sse", "streamable-http")


def get_espn_api_base() -> str:
    return os.environ.get("ESPN_API_BASE", DEFAULT_ESPN_API_BASE).rstrip("/")


def get_host() -> str:
    return os.environ.get("HOST", DEFAULT_HOST)


def get_port() -> int:
    return int(os.environ.get("PORT", str(DEFAULT_PORT)))


def get_transport() -> str:
    """MCP transport to serve on. HTTP routes are only reachable over sse/streamable-http."""
    transport = os.environ.get("MCP_TRANSPORT", "stdio")
    if transport not in TRANSPORTS:
        raise ValueError(f"Invalid MCP_TRANSPORT: {transport}. Use one of {', '.join(TRANSPORTS)}")
    return transport


def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()
