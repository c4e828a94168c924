"""Entry points that return a ready wallet together with its browser."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional

from playwright.async_api import Page

from .browser.core import WalletBrowser, connect_browser, launch
from .browser.options import LaunchOptions, WalletOptions
from .wallet.control import MetaMask
from .wallet.setup import attach, setup_bootstrapped_wallet, setup_wallet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalletSession:
    metamask: MetaMask
    browser: WalletBrowser
    metamask_page: Page


@dataclass(frozen=True)
class SnapSession(WalletSession):
    snap_id: str = ""


async def bootstrap(
    launch_options: Optional[LaunchOptions] = None,
    wallet_options: Optional[WalletOptions] = None,
) -> WalletSession:
    """Launch a browser with the wallet and bring it to an unlocked state.

    A supplied ``user_data_dir`` is taken to be a primed profile, so only the
    unlock procedure runs; otherwise the full first-time setup runs.
    """
    launch_options = launch_options or LaunchOptions.from_env()
    wallet_options = wallet_options or WalletOptions()
    browser = await launch(launch_options)
    try:
        if launch_options.user_data_dir:
            metamask = await setup_bootstrapped_wallet(browser, wallet_options.password)
        else:
            metamask = await setup_wallet(browser, wallet_options)
    except Exception:
        logger.exception("Wallet bootstrap failed")
        await browser.close()
        raise
    return WalletSession(metamask=metamask, browser=browser, metamask_page=metamask.page)


async def connect(
    browser_ws_endpoint: str,
    wallet_url: Optional[str] = None,
    wallet_options: Optional[WalletOptions] = None,
    *,
    flask: bool = False,
) -> WalletSession:
    """Join a running browser over CDP and take over its wallet tab."""
    browser = await connect_browser(browser_ws_endpoint, flask=flask)
    try:
        metamask = await attach(browser, wallet_options, wallet_url)
    except Exception:
        logger.exception("Attaching to the wallet at %s failed", browser_ws_endpoint)
        await browser.close()
        raise
    return WalletSession(metamask=metamask, browser=browser, metamask_page=metamask.page)


async def init_snap_env(
    snap_id_or_location: str,
    launch_options: Optional[LaunchOptions] = None,
    wallet_options: Optional[WalletOptions] = None,
    **install_options: Any,
) -> SnapSession:
    """Launch the Flask build, set up the wallet and install one snap."""
    launch_options = replace(launch_options or LaunchOptions.from_env(), flask=True)
    browser = await launch(launch_options)
    try:
        metamask = await setup_wallet(browser, wallet_options or WalletOptions())
        snap_id = await metamask.snaps.install_snap(snap_id_or_location, **install_options)
    except Exception:
        logger.exception("Snap environment setup failed")
        await browser.close()
        raise
    return SnapSession(
        metamask=metamask,
        browser=browser,
        metamask_page=metamask.page,
        snap_id=snap_id,
    )


__all__ = ["SnapSession", "WalletSession", "bootstrap", "connect", "init_snap_env"]
