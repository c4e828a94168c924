"""Small UI primitives shared by the setup steps and the wallet control object.

All interaction goes through Playwright locators so each call waits for its
target to become actionable instead of sleeping.
"""

from __future__ import annotations

from typing import Any

DEFAULT_TIMEOUT_MS = 10000


def by_test_id(test_id: str) -> str:
    return f'[data-testid="{test_id}"]'


async def click_on_element(page: Any, selector: str, *, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
    await page.locator(selector).first.click(timeout=timeout_ms)


async def click_on_button(page: Any, label: str, *, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
    """Click a button identified either by ``data-testid`` or by its exact text."""
    selector = f'{by_test_id(label)}, button:text-is("{label}")'
    await click_on_element(page, selector, timeout_ms=timeout_ms)


async def type_on_input_field(
    page: Any,
    selector: str,
    text: str,
    *,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> None:
    await page.locator(selector).first.fill(text, timeout=timeout_ms)


async def click_on_logo(page: Any) -> None:
    await click_on_element(page, ".app-header__logo-container")


async def open_account_menu(page: Any) -> None:
    await click_on_element(page, by_test_id("account-options-menu-button"))


async def open_settings(page: Any) -> None:
    await open_account_menu(page)
    await click_on_element(page, by_test_id("global-menu-settings"))


async def open_advanced_settings(page: Any) -> None:
    await open_settings(page)
    await click_on_element(page, '.tab-bar__tab:has-text("Advanced")')


async def set_toggle(
    page: Any,
    row_text: str,
    enabled: bool = True,
    *,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> bool:
    """Flip the settings toggle in the row labelled ``row_text`` to ``enabled``.

    Returns ``True`` when the toggle was clicked, ``False`` when it already
    had the requested value.
    """
    row = page.locator(f'.settings-page__content-row:has-text("{row_text}")').first
    checkbox = row.locator('input[type="checkbox"]').first
    if await checkbox.is_checked(timeout=timeout_ms) == enabled:
        return False
    await row.locator(".toggle-button").first.click(timeout=timeout_ms)
    return True


__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "by_test_id",
    "click_on_button",
    "click_on_element",
    "click_on_logo",
    "open_account_menu",
    "open_advanced_settings",
    "open_settings",
    "set_toggle",
    "type_on_input_field",
]
