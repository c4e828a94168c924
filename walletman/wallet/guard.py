"""Retry and overlay helpers shared by every wallet action.

The wallet UI paints loading layers and "what's new" popovers at
unpredictable moments.  These helpers are the only place where a timed-out
wait or a popup vanishing mid-click is tolerated; everything else lets
Playwright errors propagate.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Sequence, TypeVar

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

T = TypeVar("T")

OVERLAY_SELECTORS: tuple[str, ...] = (".loading-overlay", ".app-loading-spinner")
OVERLAY_TIMEOUT_MS = 20000

logger = logging.getLogger(__name__)


async def retry(operation: Callable[[], Awaitable[T]], max_attempts: int) -> T:
    """Await ``operation`` up to ``max_attempts`` times, re-raising the last error."""
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1.")
    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except Exception as exc:
            if attempt == max_attempts:
                logger.error("Giving up after %s attempts: %s", attempt, exc)
                raise
            logger.info("Attempt %s/%s failed: %s", attempt, max_attempts, exc)
    raise AssertionError("unreachable")


async def wait_for_overlay(
    page: Any,
    *,
    selectors: Sequence[str] = OVERLAY_SELECTORS,
    timeout_ms: int = OVERLAY_TIMEOUT_MS,
) -> None:
    """Block until none of the overlay ``selectors`` is visible on ``page``."""
    for selector in selectors:
        await page.wait_for_selector(selector, state="hidden", timeout=timeout_ms)


async def click_if_present(page: Any, selector: str, *, timeout_ms: int) -> bool:
    """Click ``selector`` if it shows up within ``timeout_ms``.

    A timeout, or the element detaching before the click lands, means the
    control is already gone and returns ``False``.
    """
    try:
        element = await page.wait_for_selector(selector, state="visible", timeout=timeout_ms)
    except PlaywrightTimeoutError:
        logger.debug("%s not present after %sms", selector, timeout_ms)
        return False
    if element is None:
        return False
    try:
        await element.click()
    except PlaywrightError as exc:
        logger.debug("%s went away before the click: %s", selector, exc)
        return False
    return True


async def dismiss_repeatedly(
    page: Any,
    selector: str,
    *,
    attempts: int = 10,
    timeout_ms: int = 1000,
) -> int:
    """Keep closing a popup that may reappear; return how many clicks landed."""
    clicks = 0
    for _ in range(attempts):
        if not await click_if_present(page, selector, timeout_ms=timeout_ms):
            break
        clicks += 1
    if clicks:
        logger.info("Dismissed %s %s time(s)", selector, clicks)
    return clicks


__all__ = [
    "OVERLAY_SELECTORS",
    "OVERLAY_TIMEOUT_MS",
    "click_if_present",
    "dismiss_repeatedly",
    "retry",
    "wait_for_overlay",
]
