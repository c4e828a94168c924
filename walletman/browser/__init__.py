"""Browser session and launch configuration for walletman."""

from .core import WalletBrowser, connect_browser, launch
from .options import LaunchOptions, WalletOptions

__all__ = [
    "LaunchOptions",
    "WalletBrowser",
    "WalletOptions",
    "connect_browser",
    "launch",
]
