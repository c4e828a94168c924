"""walletman: drive a browser-extension wallet to a ready state for end-to-end tests."""

from .browser import LaunchOptions, WalletBrowser, WalletOptions, connect_browser, launch
from .entry import SnapSession, WalletSession, bootstrap, connect, init_snap_env
from .exceptions import ExtensionNotFoundError, WalletmanError, WalletNotFoundError
from .wallet import MetaMask, UIState, attach, setup_bootstrapped_wallet, setup_wallet

__all__ = [
    "ExtensionNotFoundError",
    "LaunchOptions",
    "MetaMask",
    "SnapSession",
    "UIState",
    "WalletBrowser",
    "WalletNotFoundError",
    "WalletOptions",
    "WalletSession",
    "WalletmanError",
    "attach",
    "bootstrap",
    "connect",
    "connect_browser",
    "init_snap_env",
    "launch",
    "setup_bootstrapped_wallet",
    "setup_wallet",
]
