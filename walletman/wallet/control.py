"""High-level control object wrapping a ready wallet page."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..browser.options import DEFAULT_PASSWORD
from ..exceptions import WalletmanError
from .acquire import get_wallet_page
from .ui import (
    DEFAULT_TIMEOUT_MS,
    by_test_id,
    click_on_button,
    click_on_element,
    open_account_menu,
    type_on_input_field,
)

logger = logging.getLogger(__name__)

NOTIFICATION_PATTERN = r"chrome-extension://[a-z]+/notification\.html"
DEFAULT_SNAP_INSTALL_PAGE = "https://metamask.github.io/test-snaps/latest/"
SNAP_APPROVAL_BUTTONS: tuple[str, ...] = ("Connect", "Install", "OK")


def normalize_snap_id(snap_id_or_location: str) -> str:
    """Return a ``npm:``/``local:`` snap id for a package name, id or URL."""
    value = (snap_id_or_location or "").strip()
    if not value:
        raise ValueError("snap_id_or_location must be a non-empty string.")
    if value.startswith(("npm:", "local:")):
        return value
    if value.startswith(("http://", "https://")):
        return f"local:{value}"
    return f"npm:{value}"


class Snaps:
    """Install snaps into the wallet by requesting them from a dapp page."""

    def __init__(self, metamask: "MetaMask") -> None:
        self._metamask = metamask

    async def install_snap(
        self,
        snap_id_or_location: str,
        *,
        version: Optional[str] = None,
        install_page_url: str = DEFAULT_SNAP_INSTALL_PAGE,
        timeout: Optional[float] = 60.0,
    ) -> str:
        """Request ``snap_id_or_location`` and approve it; return the snap id."""
        browser = self._metamask.browser
        if browser is None:
            raise WalletmanError("Installing a snap needs the browser the wallet runs in.")
        snap_id = normalize_snap_id(snap_id_or_location)
        logger.info("Installing snap %s from %s", snap_id, install_page_url)

        install_page = await browser.new_page()
        try:
            await install_page.goto(install_page_url)
            params = {snap_id: {"version": version} if version else {}}
            # The request only settles once the wallet prompts are approved.
            await install_page.evaluate(
                """(params) => {
                    window.__walletmanSnapRequest = window.ethereum.request({
                        method: 'wallet_requestSnaps',
                        params,
                    });
                }""",
                params,
            )
            prompt = await get_wallet_page(browser, NOTIFICATION_PATTERN, timeout=timeout)
            for label in SNAP_APPROVAL_BUTTONS:
                await click_on_button(prompt, label)
            result = await install_page.evaluate("() => window.__walletmanSnapRequest")
        finally:
            await install_page.close()

        if not isinstance(result, dict) or snap_id not in result:
            raise WalletmanError(f"Snap {snap_id} was not installed: {result!r}")
        return snap_id


class MetaMask:
    """Control surface over the wallet's home page.

    ``browser`` is only needed for operations that open other tabs, such as
    snap installation.
    """

    def __init__(self, page: Any, browser: Any = None) -> None:
        self.page = page
        self.browser = browser
        self.snaps = Snaps(self)

    async def unlock(self, password: str = DEFAULT_PASSWORD) -> None:
        await type_on_input_field(self.page, by_test_id("unlock-password"), password)
        await click_on_button(self.page, "unlock-submit")
        await self.page.wait_for_selector(
            by_test_id("account-menu-icon"), state="visible", timeout=DEFAULT_TIMEOUT_MS
        )
        logger.info("Wallet unlocked")

    async def lock(self) -> None:
        await open_account_menu(self.page)
        await click_on_element(self.page, by_test_id("global-menu-lock"))
        await self.page.wait_for_selector(
            by_test_id("unlock-password"), state="visible", timeout=DEFAULT_TIMEOUT_MS
        )
        logger.info("Wallet locked")


def get_metamask(page: Any, browser: Any = None) -> MetaMask:
    return MetaMask(page, browser)


__all__ = ["MetaMask", "Snaps", "get_metamask", "normalize_snap_id"]
