"""Root-level handle on the walletman server for ``fastmcp run mcp_server.py:mcp``."""

from walletman.mcp.server import configure_wallet_server, mcp  # noqa: F401

__all__ = ["mcp", "configure_wallet_server"]
