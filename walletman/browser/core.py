"""Browser session wrapper used by the wallet orchestration.

The wallet flows only need a handful of capabilities from a browser: list
the open pages, open a new one, subscribe to page creation, and know whether
the "Flask" build of the extension is loaded.  :class:`WalletBrowser` wraps a
Playwright persistent context (from :func:`launch`) or a CDP-connected
browser (from :func:`connect_browser`) behind exactly that surface, which
keeps the orchestration testable with plain fake objects.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import Any, Callable, List, Optional

from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    async_playwright,
)

from ..exceptions import ExtensionNotFoundError
from .options import LaunchOptions

logger = logging.getLogger(__name__)


class WalletBrowser(AbstractAsyncContextManager["WalletBrowser"]):
    """Thin wrapper around a Playwright context hosting the wallet extension.

    Exactly one of ``context`` or ``browser`` is expected.  A launched
    persistent context owns its Playwright driver and, when no profile
    directory was supplied, a temporary profile that is removed on close.
    """

    def __init__(
        self,
        *,
        context: Optional[BrowserContext] = None,
        browser: Optional[Browser] = None,
        playwright: Optional[Playwright] = None,
        flask: bool = False,
        profile_dir: Optional[Path] = None,
        owns_profile: bool = False,
    ) -> None:
        if context is None and browser is None:
            raise ValueError("WalletBrowser needs a browser context or a browser.")
        self._context = context
        self._browser = browser
        self._playwright = playwright
        self._flask = flask
        self._profile_dir = profile_dir
        self._owns_profile = owns_profile

    # ------------------------------------------------------------------ #
    # Lifecycle helpers
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> "WalletBrowser":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the browser and release Playwright resources."""
        if self._context is not None and self._browser is None:
            await self._context.close()
            self._context = None
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        if self._owns_profile and self._profile_dir is not None:
            shutil.rmtree(self._profile_dir, ignore_errors=True)
            self._profile_dir = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    @property
    def profile_dir(self) -> Optional[Path]:
        return self._profile_dir

    def is_flask(self) -> bool:
        """Return True when the advanced ("Flask") wallet build is loaded."""
        return self._flask

    def pages(self) -> List[Page]:
        """Return every open page across the wrapped contexts."""
        return [page for context in self._contexts() for page in context.pages]

    async def new_page(self) -> Page:
        contexts = self._contexts()
        if not contexts:
            raise RuntimeError("Browser has no context to open a page in.")
        return await contexts[0].new_page()

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        """Subscribe ``handler`` to ``event`` (e.g. ``"page"``) on every context."""
        for context in self._contexts():
            context.on(event, handler)

    def remove_listener(self, event: str, handler: Callable[..., Any]) -> None:
        for context in self._contexts():
            context.remove_listener(event, handler)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _contexts(self) -> List[BrowserContext]:
        if self._context is not None:
            return [self._context]
        if self._browser is not None:
            return list(self._browser.contexts)
        return []


async def launch(options: Optional[LaunchOptions] = None) -> WalletBrowser:
    """Start Chromium with the unpacked wallet extension preloaded."""

    options = options or LaunchOptions.from_env()
    extension = options.extension_path
    if extension is None or not Path(extension).is_dir():
        raise ExtensionNotFoundError(
            f"Wallet extension directory not found: {extension!s}. "
            "Set LaunchOptions.extension_path or WALLETMAN_EXTENSION_PATH."
        )

    owns_profile = options.user_data_dir is None
    profile_dir = (
        Path(tempfile.mkdtemp(prefix="walletman-profile-"))
        if owns_profile
        else Path(options.user_data_dir)
    )
    launch_kwargs: dict[str, Any] = dict(options.context_options)
    if options.slow_mo is not None:
        launch_kwargs["slow_mo"] = options.slow_mo

    logger.info(
        "Launching Chromium with extension %s (profile=%s, flask=%s)",
        extension,
        profile_dir,
        options.flask,
    )
    playwright = await async_playwright().start()
    try:
        context = await playwright.chromium.launch_persistent_context(
            str(profile_dir),
            headless=options.headless,
            args=options.chromium_args(),
            **launch_kwargs,
        )
    except Exception as exc:
        logger.error("Playwright failed to start: %s", exc)
        await playwright.stop()
        if owns_profile:
            shutil.rmtree(profile_dir, ignore_errors=True)
        if "executable doesn't exist" in str(exc).lower():
            raise RuntimeError(
                "Playwright browsers not installed. Run 'playwright install chromium' and retry."
            ) from exc
        raise

    return WalletBrowser(
        context=context,
        playwright=playwright,
        flask=options.flask,
        profile_dir=profile_dir,
        owns_profile=owns_profile,
    )


async def connect_browser(endpoint: str, *, flask: bool = False) -> WalletBrowser:
    """Attach to an already running Chromium over the DevTools protocol."""

    if not endpoint:
        raise ValueError("endpoint must be a non-empty string.")
    logger.info("Connecting to browser at %s", endpoint)
    playwright = await async_playwright().start()
    try:
        browser = await playwright.chromium.connect_over_cdp(endpoint)
    except Exception:
        await playwright.stop()
        raise
    return WalletBrowser(browser=browser, playwright=playwright, flask=flask)


__all__ = ["WalletBrowser", "launch", "connect_browser"]
