"""Locate the wallet extension's home page among the browser's tabs."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, List, Optional, Pattern, Union

logger = logging.getLogger(__name__)

HOME_PATTERN = r"chrome-extension://[a-z]+/home\.html"


def _compile(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    return re.compile(pattern) if isinstance(pattern, str) else pattern


def find_page(pages: List[Any], pattern: Union[str, Pattern[str]] = HOME_PATTERN) -> Optional[Any]:
    """Return the first page whose URL matches ``pattern``."""
    regex = _compile(pattern)
    for page in pages:
        if regex.search(page.url or ""):
            return page
    return None


async def get_wallet_page(
    browser: Any,
    pattern: Union[str, Pattern[str]] = HOME_PATTERN,
    *,
    timeout: Optional[float] = None,
) -> Any:
    """Return the wallet page, waiting for one to be created if necessary.

    Existing pages are scanned first.  Otherwise the browser's ``"page"``
    event is watched and every notification triggers a full re-scan, since
    the matching tab may already exist by the time the event arrives, or may
    only navigate to the extension URL after it was created.  ``timeout`` is
    in seconds; ``None`` waits forever.
    """
    regex = _compile(pattern)
    page = find_page(browser.pages(), regex)
    if page is not None:
        return page

    loop = asyncio.get_running_loop()
    found: asyncio.Future[Any] = loop.create_future()

    def rescan(*_: Any) -> None:
        if found.done():
            return
        try:
            match = find_page(browser.pages(), regex)
        except Exception as exc:
            found.set_exception(exc)
            return
        if match is not None:
            found.set_result(match)

    def on_page(new_page: Any) -> None:
        rescan()
        if not found.done():
            new_page.once("domcontentloaded", rescan)

    browser.on("page", on_page)
    try:
        # The page may have appeared between the first scan and subscribing.
        rescan()
        logger.debug("Waiting for a page matching %s", regex.pattern)
        if timeout is None:
            return await found
        return await asyncio.wait_for(found, timeout)
    finally:
        browser.remove_listener("page", on_page)


async def ensure_single_wallet_page(browser: Any, wallet_url: str) -> Any:
    """Keep exactly one page open at ``wallet_url``; return it.

    Extra matches are closed, first seen wins.  With no match, a new page is
    opened at ``wallet_url``.
    """
    matches = [page for page in browser.pages() if (page.url or "").startswith(wallet_url)]
    for extra in matches[1:]:
        logger.info("Closing duplicate wallet page %s", extra.url)
        await extra.close()
    if matches:
        return matches[0]
    logger.info("No wallet page open; opening %s", wallet_url)
    page = await browser.new_page()
    await page.goto(wallet_url)
    return page


__all__ = ["HOME_PATTERN", "ensure_single_wallet_page", "find_page", "get_wallet_page"]
