"""Exceptions raised by walletman when the wallet cannot be brought to a ready state."""

from __future__ import annotations


class WalletmanError(RuntimeError):
    """Base class for walletman failures."""


class WalletNotFoundError(WalletmanError):
    """No known wallet screen matched the extension page."""

    def __init__(self, message: str = "MetaMask not found in opened tabs") -> None:
        super().__init__(message)


class ExtensionNotFoundError(WalletmanError):
    """The wallet extension could not be located on disk or in the browser."""


__all__ = ["WalletmanError", "WalletNotFoundError", "ExtensionNotFoundError"]
