from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

EXTENSION_ID = "nkbihfbeogaeaoehlefnkodbefgpgknn"
WALLET_URL = f"chrome-extension://{EXTENSION_ID}/home.html"


class FakeElement:
    def __init__(self, page: "FakePage", selector: str) -> None:
        self.page = page
        self.selector = selector

    async def click(self, timeout: Optional[float] = None) -> None:
        if self.selector in self.page.detached:
            raise PlaywrightError("Element is not attached to the DOM")
        self.page.record("click", self.selector)


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str) -> None:
        self.page = page
        self.selector = selector

    @property
    def first(self) -> "FakeLocator":
        return self

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(self.page, f"{self.selector} >> {selector}")

    async def click(self, timeout: Optional[float] = None) -> None:
        self.page.record("click", self.selector)

    async def fill(self, text: str, timeout: Optional[float] = None) -> None:
        self.page.record("fill", self.selector, text)

    async def select_option(self, value: Any, timeout: Optional[float] = None) -> List[str]:
        self.page.record("select", self.selector, value)
        return [value]

    async def is_checked(self, timeout: Optional[float] = None) -> bool:
        return any(key in self.selector for key in self.page.checked)

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        return self.page.locator_values.get(self.selector)

    async def all_text_contents(self) -> List[str]:
        return list(self.page.texts.get(self.selector, []))


class FakePage:
    """Stand-in for a Playwright page.

    Every selector is present unless listed in ``absent``; ``appearances``
    limits how many times a selector is found before it disappears.
    ``on_click`` callbacks run when a clicked selector contains their key.
    Elements for selectors in ``detached`` vanish as they are clicked.
    """

    def __init__(self, url: str = "about:blank") -> None:
        self.url = url
        self.actions: List[tuple] = []
        self.waits: List[tuple] = []
        self.evaluated: List[tuple] = []
        self.evaluate_results: List[Any] = []
        self.absent: set[str] = set()
        self.detached: set[str] = set()
        self.appearances: Dict[str, int] = {}
        self.on_click: Dict[str, Callable[["FakePage"], None]] = {}
        self.checked: set[str] = set()
        self.locator_values: Dict[str, Any] = {}
        self.texts: Dict[str, List[str]] = {}
        self.listeners: Dict[str, List[Callable[..., Any]]] = {}
        self.closed = False
        self.reloads = 0
        self.viewport: Optional[dict] = None

    def record(self, action: str, selector: str, *args: Any) -> None:
        self.actions.append((action, selector, *args))
        if action == "click":
            for key, callback in list(self.on_click.items()):
                if key in selector:
                    callback(self)

    def clicks(self) -> List[str]:
        return [action[1] for action in self.actions if action[0] == "click"]

    def fills(self) -> List[tuple]:
        return [(action[1], action[2]) for action in self.actions if action[0] == "fill"]

    async def goto(self, url: str) -> None:
        self.actions.append(("goto", url))
        self.url = url

    async def reload(self) -> None:
        self.reloads += 1

    async def set_viewport_size(self, size: dict) -> None:
        self.viewport = size

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        self.evaluated.append((script, arg))
        if self.evaluate_results:
            return self.evaluate_results.pop(0)
        return None

    async def wait_for_timeout(self, timeout: float) -> None:
        self.actions.append(("sleep", timeout))

    async def wait_for_selector(
        self,
        selector: str,
        *,
        state: str = "visible",
        timeout: Optional[float] = None,
    ) -> Optional[FakeElement]:
        self.waits.append((selector, state))
        if state in ("hidden", "detached"):
            return None
        if selector in self.absent:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")
        if selector in self.appearances:
            if self.appearances[selector] <= 0:
                raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")
            self.appearances[selector] -= 1
        return FakeElement(self, selector)

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def once(self, event: str, handler: Callable[..., Any]) -> None:
        self.listeners.setdefault(event, []).append(handler)

    def emit(self, event: str) -> None:
        for handler in self.listeners.pop(event, []):
            handler(self)

    async def close(self) -> None:
        self.closed = True


class FakeBrowser:
    def __init__(self, pages: Optional[List[FakePage]] = None, *, flask: bool = False) -> None:
        self._pages: List[FakePage] = list(pages or [])
        self.flask = flask
        self.listeners: Dict[str, List[Callable[..., Any]]] = {}
        self.queued_pages: List[FakePage] = []
        self.closed = False

    def pages(self) -> List[FakePage]:
        return [page for page in self._pages if not page.closed]

    def add_page(self, page: FakePage) -> FakePage:
        self._pages.append(page)
        for handler in list(self.listeners.get("page", [])):
            handler(page)
        return page

    async def new_page(self) -> FakePage:
        page = self.queued_pages.pop(0) if self.queued_pages else FakePage()
        return self.add_page(page)

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        self.listeners.setdefault(event, []).append(handler)

    def remove_listener(self, event: str, handler: Callable[..., Any]) -> None:
        self.listeners[event].remove(handler)

    def is_flask(self) -> bool:
        return self.flask

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def wallet_url() -> str:
    return WALLET_URL


@pytest.fixture
def make_page() -> Callable[..., FakePage]:
    def factory(url: str = WALLET_URL) -> FakePage:
        return FakePage(url)

    return factory
