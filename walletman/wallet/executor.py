"""Run setup steps in order against a wallet page."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar

from ..browser.options import WalletOptions
from .steps import (
    accept_the_risks,
    close_new_modal,
    close_portfolio_tooltip,
    close_whats_new_modal,
    enable_eth_sign,
    import_account,
    show_test_nets,
)

OptionsT = TypeVar("OptionsT")

Step = Callable[[Any, OptionsT], Awaitable[None]]

logger = logging.getLogger(__name__)

# The what's-new popover can come back after the first dismissal.
DEFAULT_STEPS: List[Step[WalletOptions]] = [
    import_account,
    close_new_modal,
    show_test_nets,
    enable_eth_sign,
    close_whats_new_modal,
    close_whats_new_modal,
]

FLASK_STEPS: List[Step[WalletOptions]] = [
    accept_the_risks,
    import_account,
    show_test_nets,
    enable_eth_sign,
    close_portfolio_tooltip,
    close_whats_new_modal,
    close_whats_new_modal,
]


def default_steps(browser: Any) -> List[Step[WalletOptions]]:
    """Pick the canonical sequence for the extension build ``browser`` runs."""
    if browser.is_flask():
        return FLASK_STEPS
    return DEFAULT_STEPS


def _step_name(step: Callable[..., Any]) -> str:
    return getattr(step, "__name__", repr(step))


async def run_steps(
    page: Any,
    options: Optional[OptionsT],
    steps: Sequence[Step[OptionsT]],
) -> None:
    """Await each step in turn.

    The first failure propagates unchanged and the remaining steps are
    skipped; the page is left as the failing step left it.
    """
    total = len(steps)
    for index, step in enumerate(steps, start=1):
        name = _step_name(step)
        logger.info("Setup step %s/%s: %s", index, total, name)
        try:
            await step(page, options)
        except Exception:
            logger.error("Setup step %s failed; aborting remaining steps", name)
            raise


__all__ = ["DEFAULT_STEPS", "FLASK_STEPS", "Step", "default_steps", "run_steps"]
