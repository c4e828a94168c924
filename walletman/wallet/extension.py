"""Discover the installed wallet extension's id and home URL.

The id is read from ``chrome://extensions``.  Playwright's CSS engine pierces
open shadow roots, so the extension cards can be queried directly.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional, Pattern, Union

logger = logging.getLogger(__name__)

EXTENSIONS_PAGE = "chrome://extensions"

# Extension name prefix -> page that hosts the wallet UI.
HOME_PAGES: tuple[tuple[Pattern[str], str], ...] = (
    (re.compile(r"^metamask", re.IGNORECASE), "home.html"),
    (re.compile(r"^braavos", re.IGNORECASE), "index.html"),
)


async def get_extension_id(
    browser: Any,
    extension_name: Union[str, Pattern[str]] = "MetaMask",
) -> Optional[str]:
    """Return the id of the first installed extension matching ``extension_name``."""
    page = await browser.new_page()
    try:
        await page.goto(EXTENSIONS_PAGE)

        # Ids are only rendered in developer mode.
        dev_mode = page.locator("#devMode").first
        if not await dev_mode.evaluate("element => element.checked"):
            await dev_mode.click()

        names = await page.locator("#name-and-version div").all_text_contents()
        id_strings = await page.locator("#extension-id").all_text_contents()
        if len(names) != len(id_strings):
            logger.error("Length mismatch on extensions page. Is developer mode enabled?")
            return None

        for name, id_string in zip(names, id_strings):
            if not re.search(extension_name, name):
                continue
            # Rendered as "ID: <id>".
            parts = id_string.split()
            return parts[1] if len(parts) > 1 else None
        logger.info("No installed extension matches %r", extension_name)
        return None
    finally:
        await page.close()


async def get_extension_home_url(extension_name: str, browser: Any) -> Optional[str]:
    extension_id = await get_extension_id(browser, extension_name)
    if extension_id is None:
        return None
    for pattern, home_page in HOME_PAGES:
        if pattern.search(extension_name):
            return f"chrome-extension://{extension_id}/{home_page}"
    return None


__all__ = ["get_extension_home_url", "get_extension_id"]
