"""FastMCP server that exposes wallet connect/unlock helpers as tools."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional

from fastmcp import Context, FastMCP
from playwright.async_api import Error, TimeoutError

from walletman.browser.options import DEFAULT_PASSWORD, DEFAULT_SEED, WalletOptions
from walletman.entry import WalletSession, connect
from walletman.exceptions import WalletmanError
from walletman.wallet.probe import probe_page

mcp = FastMCP(name="walletman")

logger = logging.getLogger(__name__)


@dataclass
class _SessionBundle:
    session: Optional[WalletSession] = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


_SESSION_KEY_DEFAULT = "__default__"
_server_config: Dict[str, Any] = {"flask": False, "show_test_nets": False}
_sessions: Dict[str, _SessionBundle] = {}


def configure_wallet_server(*, flask: bool = False, show_test_nets: bool = False) -> None:
    """Set the defaults used by subsequent ``connect_wallet`` calls.

    Sessions that are already connected keep the settings they were opened
    with; call :func:`reset_sessions` to drop them.
    """
    global _server_config
    _server_config = {"flask": flask, "show_test_nets": show_test_nets}


async def reset_sessions() -> None:
    """Disconnect and forget every active wallet session."""
    bundles = list(_sessions.values())
    _sessions.clear()
    for bundle in bundles:
        if bundle.session is not None:
            await _close_session(bundle.session)


async def _close_session(session: WalletSession) -> None:
    try:
        await session.browser.close()
    except Error as exc:
        logger.warning("Failed to close wallet browser: %s", exc)


def _get_bundle(client_id: Optional[str]) -> _SessionBundle:
    key = client_id or _SESSION_KEY_DEFAULT
    bundle = _sessions.get(key)
    if bundle is None:
        bundle = _SessionBundle()
        _sessions[key] = bundle
    return bundle


def _client_id_from_context(ctx: Optional[Context]) -> Optional[str]:
    return getattr(ctx, "client_id", None) if ctx is not None else None


def _require_session(bundle: _SessionBundle) -> WalletSession:
    if bundle.session is None:
        raise WalletmanError("No wallet connected. Call connect_wallet first.")
    return bundle.session


async def _run_tool(
    operation: str,
    ctx: Optional[Context],
    action: Callable[[_SessionBundle], Awaitable[Dict[str, Any]]],
) -> Dict[str, Any]:
    """Run ``action`` under the client's session lock, reporting errors as data."""
    bundle = _get_bundle(_client_id_from_context(ctx))
    logger.info("%s call", operation)
    async with bundle.lock:
        try:
            return await action(bundle)
        except TimeoutError as exc:
            return {"error": "timeout", "operation": operation, "message": str(exc)}
        except Error as exc:
            return {"error": "playwright", "operation": operation, "message": str(exc)}
        except WalletmanError as exc:
            return {"error": "wallet", "operation": operation, "message": str(exc)}
        except Exception as exc:
            logger.exception("%s failed", operation)
            return {"error": "unexpected", "operation": operation, "message": str(exc)}


def _describe(session: WalletSession) -> Dict[str, Any]:
    page = session.metamask_page
    return {"state": probe_page(page).value, "url": page.url}


@mcp.tool
async def connect_wallet(
    browser_ws_endpoint: str,
    *,
    password: str = DEFAULT_PASSWORD,
    seed: str = DEFAULT_SEED,
    show_test_nets: Optional[bool] = None,
    wallet_url: Optional[str] = None,
    ctx: Optional[Context] = None,
) -> Dict[str, Any]:
    """Attach to a running browser and bring its wallet to an unlocked state."""

    async def action(bundle: _SessionBundle) -> Dict[str, Any]:
        if bundle.session is not None:
            previous, bundle.session = bundle.session, None
            await _close_session(previous)
        options = WalletOptions(
            seed=seed,
            password=password,
            show_test_nets=(
                _server_config["show_test_nets"] if show_test_nets is None else show_test_nets
            ),
        )
        bundle.session = await connect(
            browser_ws_endpoint,
            wallet_url,
            options,
            flask=_server_config["flask"],
        )
        return {"connected": True, **_describe(bundle.session)}

    return await _run_tool("connect_wallet", ctx, action)


@mcp.tool
async def wallet_state(ctx: Optional[Context] = None) -> Dict[str, Any]:
    """Report which screen the connected wallet currently shows."""

    async def action(bundle: _SessionBundle) -> Dict[str, Any]:
        return _describe(_require_session(bundle))

    return await _run_tool("wallet_state", ctx, action)


@mcp.tool
async def unlock_wallet(
    password: str = DEFAULT_PASSWORD,
    ctx: Optional[Context] = None,
) -> Dict[str, Any]:
    """Enter ``password`` on the wallet's lock screen."""

    async def action(bundle: _SessionBundle) -> Dict[str, Any]:
        session = _require_session(bundle)
        await session.metamask.unlock(password)
        return _describe(session)

    return await _run_tool("unlock_wallet", ctx, action)


@mcp.tool
async def lock_wallet(ctx: Optional[Context] = None) -> Dict[str, Any]:
    """Lock the connected wallet."""

    async def action(bundle: _SessionBundle) -> Dict[str, Any]:
        session = _require_session(bundle)
        await session.metamask.lock()
        return _describe(session)

    return await _run_tool("lock_wallet", ctx, action)


@mcp.tool
async def disconnect_wallet(ctx: Optional[Context] = None) -> Dict[str, Any]:
    """Drop the connection to the wallet's browser."""

    async def action(bundle: _SessionBundle) -> Dict[str, Any]:
        session = _require_session(bundle)
        bundle.session = None
        await session.browser.close()
        return {"connected": False}

    return await _run_tool("disconnect_wallet", ctx, action)


def main() -> None:
    """Run the walletman MCP server using the default configuration."""
    mcp.run()


__all__ = [
    "mcp",
    "configure_wallet_server",
    "reset_sessions",
    "connect_wallet",
    "wallet_state",
    "unlock_wallet",
    "lock_wallet",
    "disconnect_wallet",
    "main",
]
