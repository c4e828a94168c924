from __future__ import annotations

from pathlib import Path

import pytest

import walletman.browser.core as core
from walletman.browser.core import WalletBrowser, launch
from walletman.browser.options import LaunchOptions
from walletman.exceptions import ExtensionNotFoundError


class FakeContext:
    def __init__(self, pages=None):
        self.pages = list(pages or [])
        self.handlers = {}
        self.closed = False

    def on(self, event, handler):
        self.handlers.setdefault(event, []).append(handler)

    def remove_listener(self, event, handler):
        self.handlers[event].remove(handler)

    async def new_page(self):
        page = object()
        self.pages.append(page)
        return page

    async def close(self):
        self.closed = True


class FakeCDPBrowser:
    def __init__(self, contexts):
        self.contexts = contexts
        self.closed = False

    async def close(self):
        self.closed = True


class FakePlaywright:
    def __init__(self):
        self.stopped = False
        self.chromium = FakeChromium()

    async def stop(self):
        self.stopped = True


class FakeChromium:
    def __init__(self):
        self.calls = []
        self.context = FakeContext()

    async def launch_persistent_context(self, user_data_dir, **kwargs):
        self.calls.append((user_data_dir, kwargs))
        return self.context


class FakeManager:
    def __init__(self):
        self.play = FakePlaywright()

    async def start(self):
        return self.play


def test_requires_a_context_or_browser() -> None:
    with pytest.raises(ValueError):
        WalletBrowser()


@pytest.mark.asyncio
async def test_pages_and_listeners_span_every_context() -> None:
    first, second = FakeContext(["a"]), FakeContext(["b", "c"])
    browser = WalletBrowser(browser=FakeCDPBrowser([first, second]), flask=True)

    def handler(page):
        return None

    browser.on("page", handler)
    assert browser.pages() == ["a", "b", "c"]
    assert first.handlers["page"] == [handler] and second.handlers["page"] == [handler]
    browser.remove_listener("page", handler)
    assert first.handlers["page"] == [] and second.handlers["page"] == []

    page = await browser.new_page()
    assert first.pages[-1] is page
    assert browser.is_flask()


@pytest.mark.asyncio
async def test_close_removes_owned_profile(tmp_path: Path) -> None:
    profile = tmp_path / "profile"
    profile.mkdir()
    context = FakeContext()
    playwright = FakePlaywright()

    async with WalletBrowser(
        context=context, playwright=playwright, profile_dir=profile, owns_profile=True
    ):
        pass

    assert context.closed
    assert playwright.stopped
    assert not profile.exists()


@pytest.mark.asyncio
async def test_close_keeps_supplied_profile(tmp_path: Path) -> None:
    browser = WalletBrowser(context=FakeContext(), profile_dir=tmp_path)

    await browser.close()

    assert tmp_path.exists()


@pytest.mark.asyncio
async def test_launch_requires_extension_directory(tmp_path: Path) -> None:
    with pytest.raises(ExtensionNotFoundError):
        await launch(LaunchOptions(extension_path=tmp_path / "missing"))


@pytest.mark.asyncio
async def test_launch_loads_extension_into_persistent_context(tmp_path, monkeypatch) -> None:
    extension = tmp_path / "metamask"
    extension.mkdir()
    profile = tmp_path / "profile"
    manager = FakeManager()
    monkeypatch.setattr(core, "async_playwright", lambda: manager)

    browser = await launch(
        LaunchOptions(extension_path=extension, user_data_dir=profile, flask=True, slow_mo=50)
    )

    user_data_dir, kwargs = manager.play.chromium.calls[0]
    assert user_data_dir == str(profile)
    assert f"--load-extension={extension.resolve()}" in kwargs["args"]
    assert kwargs["slow_mo"] == 50
    assert browser.is_flask()
    assert browser.profile_dir == profile
