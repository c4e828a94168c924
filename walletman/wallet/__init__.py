"""Wallet state detection, setup steps and orchestration."""

from .acquire import HOME_PATTERN, ensure_single_wallet_page, get_wallet_page
from .control import MetaMask, Snaps, get_metamask
from .executor import DEFAULT_STEPS, FLASK_STEPS, default_steps, run_steps
from .extension import get_extension_home_url, get_extension_id
from .guard import click_if_present, dismiss_repeatedly, retry, wait_for_overlay
from .probe import UIState, classify_url, probe_page
from .setup import attach, resolve_state, setup_bootstrapped_wallet, setup_wallet

__all__ = [
    "DEFAULT_STEPS",
    "FLASK_STEPS",
    "HOME_PATTERN",
    "MetaMask",
    "Snaps",
    "UIState",
    "attach",
    "classify_url",
    "click_if_present",
    "default_steps",
    "dismiss_repeatedly",
    "ensure_single_wallet_page",
    "get_extension_home_url",
    "get_extension_id",
    "get_metamask",
    "get_wallet_page",
    "probe_page",
    "resolve_state",
    "retry",
    "run_steps",
    "setup_bootstrapped_wallet",
    "setup_wallet",
    "wait_for_overlay",
]
