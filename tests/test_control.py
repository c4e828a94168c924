from __future__ import annotations

import pytest

from conftest import EXTENSION_ID, WALLET_URL, FakeBrowser, FakePage
from walletman.exceptions import WalletmanError
from walletman.wallet.control import (
    SNAP_APPROVAL_BUTTONS,
    get_metamask,
    normalize_snap_id,
)

NOTIFICATION_URL = f"chrome-extension://{EXTENSION_ID}/notification.html"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("npm:@metamask/bip32-example-snap", "npm:@metamask/bip32-example-snap"),
        ("local:http://localhost:8080", "local:http://localhost:8080"),
        ("http://localhost:8080", "local:http://localhost:8080"),
        ("@metamask/bip32-example-snap", "npm:@metamask/bip32-example-snap"),
    ],
)
def test_normalize_snap_id(value: str, expected: str) -> None:
    assert normalize_snap_id(value) == expected


def test_normalize_snap_id_rejects_blank() -> None:
    with pytest.raises(ValueError):
        normalize_snap_id("  ")


@pytest.mark.asyncio
async def test_unlock_fills_password_and_submits() -> None:
    page = FakePage(f"{WALLET_URL}#unlock")

    await get_metamask(page).unlock("hunter22")

    assert page.fills() == [('[data-testid="unlock-password"]', "hunter22")]
    assert any("unlock-submit" in selector for selector in page.clicks())
    assert ('[data-testid="account-menu-icon"]', "visible") in page.waits


@pytest.mark.asyncio
async def test_lock_uses_account_menu() -> None:
    page = FakePage(WALLET_URL)

    await get_metamask(page).lock()

    assert page.clicks() == [
        '[data-testid="account-options-menu-button"]',
        '[data-testid="global-menu-lock"]',
    ]


@pytest.mark.asyncio
async def test_install_snap_approves_prompts_and_returns_id() -> None:
    wallet = FakePage(WALLET_URL)
    prompt = FakePage(NOTIFICATION_URL)
    install_page = FakePage()
    install_page.evaluate_results = [None, {"npm:example-snap": {"version": "1.0.0"}}]
    browser = FakeBrowser([wallet, prompt])
    browser.queued_pages.append(install_page)

    snap_id = await get_metamask(wallet, browser).snaps.install_snap(
        "example-snap", install_page_url="http://localhost:8080"
    )

    assert snap_id == "npm:example-snap"
    assert install_page.evaluated[0][1] == {"npm:example-snap": {}}
    assert ("goto", "http://localhost:8080") in install_page.actions
    assert len(prompt.clicks()) == len(SNAP_APPROVAL_BUTTONS)
    assert install_page.closed


@pytest.mark.asyncio
async def test_install_snap_reports_rejected_request() -> None:
    install_page = FakePage()
    install_page.evaluate_results = [None, {}]
    browser = FakeBrowser([FakePage(WALLET_URL), FakePage(NOTIFICATION_URL)])
    browser.queued_pages.append(install_page)

    with pytest.raises(WalletmanError):
        await get_metamask(browser.pages()[0], browser).snaps.install_snap("npm:example-snap")
    assert install_page.closed


@pytest.mark.asyncio
async def test_install_snap_needs_browser() -> None:
    with pytest.raises(WalletmanError):
        await get_metamask(FakePage(WALLET_URL)).snaps.install_snap("npm:example-snap")
