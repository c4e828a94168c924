"""Bring the wallet extension from whatever screen it shows to an unlocked state.

:func:`attach` is the state machine used when joining an existing browser:
it makes sure exactly one wallet tab is open, classifies that tab and then
either runs first-time setup, unlocks, or only clears leftover popups.
:func:`setup_wallet` and :func:`setup_bootstrapped_wallet` are the two
branches, also used directly by freshly launched browsers.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional, Sequence

from ..browser.options import WalletOptions
from ..exceptions import ExtensionNotFoundError, WalletNotFoundError
from .acquire import ensure_single_wallet_page, get_wallet_page
from .control import MetaMask, get_metamask
from .executor import Step, default_steps, run_steps
from .extension import get_extension_home_url
from .guard import click_if_present, dismiss_repeatedly, retry, wait_for_overlay
from .probe import (
    UIState,
    is_lock_screen,
    is_restore_vault,
    is_setup_screen,
    is_unlocked,
)

logger = logging.getLogger(__name__)

VIEWPORT = {"width": 1920, "height": 1080}
UNLOCK_ATTEMPTS = 3
WHATS_NEW_CLOSE = (
    'xpath=//section[contains(@class, "whats-new-popup")]'
    '//button[@data-testid="popover-close"]'
)
GOT_IT_BUTTON = 'xpath=//button[text()="Got it"]'


async def setup_wallet(
    browser: Any,
    options: Optional[Any] = None,
    steps: Optional[Sequence[Step[Any]]] = None,
) -> MetaMask:
    """Run first-time setup on the wallet page and return its control object."""
    page = await get_wallet_page(browser)
    options = WalletOptions() if options is None else options
    steps = default_steps(browser) if steps is None else steps

    await page.set_viewport_size(VIEWPORT)
    await run_steps(page, options, steps)
    return get_metamask(page, browser)


async def setup_bootstrapped_wallet(
    browser: Any,
    password: str,
    skip_login: bool = False,
) -> MetaMask:
    """Unlock an already onboarded wallet and clear the popups it shows.

    With ``skip_login`` the password is not entered; only leftover popups
    are dismissed.
    """
    page = await get_wallet_page(browser)
    metamask = get_metamask(page, browser)

    await metamask.page.evaluate("() => { window.signedIn = false; }")

    if not skip_login:
        await page.wait_for_timeout(100)
        await wait_for_overlay(page)
        if browser.is_flask():
            # Flask paints a second loading layer after the first one.
            await wait_for_overlay(page)
        await retry(lambda: metamask.unlock(password), UNLOCK_ATTEMPTS)

    await dismiss_repeatedly(page, WHATS_NEW_CLOSE, attempts=10, timeout_ms=1000)
    await click_if_present(page, GOT_IT_BUTTON, timeout_ms=500)

    await wait_for_overlay(page)
    return metamask


def resolve_state(page: Any) -> UIState:
    """Classify ``page`` with lock screen > unlocked > setup screen precedence."""
    if is_lock_screen(page):
        return UIState.LOCK_SCREEN
    if is_unlocked(page):
        return UIState.UNLOCKED
    if is_setup_screen(page):
        return UIState.SETUP_SCREEN
    return UIState.UNKNOWN


async def attach(
    browser: Any,
    options: Optional[WalletOptions] = None,
    wallet_url: Optional[str] = None,
) -> MetaMask:
    """Take over the wallet in an already running browser."""
    options = WalletOptions() if options is None else options
    if not wallet_url:
        wallet_url = await get_extension_home_url("MetaMask", browser)
        if wallet_url is None:
            raise ExtensionNotFoundError("Could not determine the MetaMask extension URL.")

    await ensure_single_wallet_page(browser, wallet_url)
    page = await get_wallet_page(browser, re.escape(wallet_url))

    # The first paint after navigation sometimes shows a stale screen.
    await page.reload()

    if is_restore_vault(page):
        logger.info("Wallet shows restore-vault; switching to the unlock screen")
        await page.goto(page.url.replace("restore-vault", "unlock"))

    state = resolve_state(page)
    logger.info("Wallet state detected: %s (%s)", state.value, page.url)

    if state is UIState.SETUP_SCREEN:
        return await setup_wallet(browser, options)
    if state is UIState.LOCK_SCREEN:
        return await setup_bootstrapped_wallet(browser, options.password)
    if state is UIState.UNLOCKED:
        return await setup_bootstrapped_wallet(browser, options.password, skip_login=True)
    raise WalletNotFoundError()


__all__ = [
    "attach",
    "resolve_state",
    "setup_bootstrapped_wallet",
    "setup_wallet",
]
