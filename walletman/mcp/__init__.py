"""MCP surface for walletman."""

from .server import configure_wallet_server, mcp, reset_sessions

__all__ = ["mcp", "configure_wallet_server", "reset_sessions"]
