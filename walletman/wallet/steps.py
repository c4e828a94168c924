"""First-time setup actions for the wallet extension.

Each step is an async callable ``(page, options) -> None``.  A step waits for
the controls it needs, interacts, and leaves the page ready for the next
step; steps are only meaningful in the order the sequences in
:mod:`walletman.wallet.executor` run them.
"""

from __future__ import annotations

import logging
from typing import Any

from ..browser.options import WalletOptions
from .guard import click_if_present, wait_for_overlay
from .ui import (
    by_test_id,
    click_on_button,
    click_on_element,
    click_on_logo,
    open_advanced_settings,
    set_toggle,
    type_on_input_field,
)

logger = logging.getLogger(__name__)

POPOVER_CLOSE = by_test_id("popover-close")
PORTFOLIO_TOOLTIP_CLOSE = "div.home__subheader-link--tooltip-content-header > button"
ETH_SIGN_CONFIRMATION = "I only sign what I understand"


async def accept_the_risks(page: Any, options: WalletOptions) -> None:
    """Acknowledge the warning screen shown first by the Flask build."""
    await click_on_element(page, ".checkbox-label")
    await click_on_button(page, "I accept the risks")


async def import_account(page: Any, options: WalletOptions) -> None:
    """Run the onboarding import flow with ``options.seed`` and ``options.password``."""
    words = options.seed_words()

    await click_on_element(page, by_test_id("onboarding-terms-checkbox"))
    await click_on_button(page, "onboarding-import-wallet")
    await click_on_button(page, "metametrics-no-thanks")

    if len(words) != 12:
        await page.locator(".import-srp__number-of-words-dropdown select").first.select_option(
            str(len(words))
        )
    for index, word in enumerate(words):
        await type_on_input_field(page, by_test_id(f"import-srp__srp-word-{index}"), word)
    await click_on_button(page, "import-srp-confirm")

    await type_on_input_field(page, by_test_id("create-password-new"), options.password)
    await type_on_input_field(page, by_test_id("create-password-confirm"), options.password)
    await click_on_element(page, by_test_id("create-password-terms"))
    await click_on_button(page, "create-password-import")
    await wait_for_overlay(page)

    await click_on_button(page, "onboarding-complete-done")
    await click_on_button(page, "pin-extension-next")
    await click_on_button(page, "pin-extension-done")
    logger.info("Imported account from a %s-word seed", len(words))


async def close_new_modal(page: Any, options: WalletOptions) -> None:
    await click_if_present(page, POPOVER_CLOSE, timeout_ms=2000)


async def show_test_nets(page: Any, options: WalletOptions) -> None:
    if not options.show_test_nets:
        return
    await open_advanced_settings(page)
    await set_toggle(page, "Show test networks")
    await click_on_logo(page)


async def enable_eth_sign(page: Any, options: WalletOptions) -> None:
    """Opt in to ``eth_sign`` requests, confirming the warning dialog if it appears."""
    await open_advanced_settings(page)
    if await set_toggle(page, "Eth_sign requests"):
        if await click_if_present(page, by_test_id("eth-sign__checkbox"), timeout_ms=2000):
            await click_on_button(page, "Continue")
            await type_on_input_field(
                page, by_test_id("eth-sign__text-field"), ETH_SIGN_CONFIRMATION
            )
            await click_on_button(page, "Enable")
    await click_on_logo(page)


async def close_whats_new_modal(page: Any, options: WalletOptions) -> None:
    # The popover is only rendered on the home screen after a fresh load.
    await page.reload()
    await click_on_logo(page)
    await click_if_present(page, POPOVER_CLOSE, timeout_ms=2000)


async def close_portfolio_tooltip(page: Any, options: WalletOptions) -> None:
    await click_if_present(page, PORTFOLIO_TOOLTIP_CLOSE, timeout_ms=20000)


__all__ = [
    "accept_the_risks",
    "close_new_modal",
    "close_portfolio_tooltip",
    "close_whats_new_modal",
    "enable_eth_sign",
    "import_account",
    "show_test_nets",
]
