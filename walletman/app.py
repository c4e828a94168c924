"""HTTP transport for the walletman tools."""

from __future__ import annotations

from fastmcp import FastMCP

from walletman.mcp import mcp

# Streamable-HTTP ASGI app, e.g. ``uvicorn walletman.app:app``.
app = mcp.http_app()


def get_app() -> FastMCP:
    return mcp
