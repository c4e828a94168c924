"""Classify the wallet's current screen from the extension page URL.

The wallet routes every screen through the hash fragment of ``home.html``,
so the address alone is enough to tell a locked wallet from one that needs
onboarding.  Nothing here touches the page beyond reading ``page.url``.
"""

from __future__ import annotations

import enum
import re
from typing import Any, Pattern, Tuple


class UIState(str, enum.Enum):
    UNLOCKED = "unlocked"
    LOCK_SCREEN = "lock_screen"
    SETUP_SCREEN = "setup_screen"
    RESTORE_VAULT = "restore_vault"
    UNKNOWN = "unknown"


_RESTORE_VAULT = re.compile(r"#restore-vault#*$")
# home.html#unlock
_LOCK_SCREEN = re.compile(r"#unlock#*$")
_SETUP_SCREEN = re.compile(r"welcome#*$")
_UNLOCKED = re.compile(r"home\.html#*$")

# Checked in order; the first match wins.
STATE_PATTERNS: Tuple[Tuple[UIState, Pattern[str]], ...] = (
    (UIState.RESTORE_VAULT, _RESTORE_VAULT),
    (UIState.LOCK_SCREEN, _LOCK_SCREEN),
    (UIState.SETUP_SCREEN, _SETUP_SCREEN),
    (UIState.UNLOCKED, _UNLOCKED),
)


def classify_url(url: str) -> UIState:
    """Return the :class:`UIState` for ``url``, or ``UNKNOWN``."""
    for state, pattern in STATE_PATTERNS:
        if pattern.search(url or ""):
            return state
    return UIState.UNKNOWN


def probe_page(page: Any) -> UIState:
    return classify_url(page.url)


def is_unlocked(page: Any) -> bool:
    return _UNLOCKED.search(page.url or "") is not None


def is_restore_vault(page: Any) -> bool:
    return _RESTORE_VAULT.search(page.url or "") is not None


def is_lock_screen(page: Any) -> bool:
    return _LOCK_SCREEN.search(page.url or "") is not None


def is_setup_screen(page: Any) -> bool:
    return _SETUP_SCREEN.search(page.url or "") is not None


__all__ = [
    "STATE_PATTERNS",
    "UIState",
    "classify_url",
    "is_lock_screen",
    "is_restore_vault",
    "is_setup_screen",
    "is_unlocked",
    "probe_page",
]
