"""Configuration values for launching a wallet browser and setting up the wallet.

Two small frozen dataclasses describe a run: :class:`WalletOptions` is the
account material threaded through every setup step, and
:class:`LaunchOptions` describes how Chromium should be started with the
unpacked wallet extension loaded.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

# Well-known development mnemonic; never holds real funds.
DEFAULT_SEED = "already turtle birth enroll since owner keep patch skirt drift any dinner"
DEFAULT_PASSWORD = "password1234"

VALID_SEED_LENGTHS = (12, 15, 18, 21, 24)

# Chromium flags that keep extension pages rendering predictably under automation.
DEFAULT_LAUNCH_ARGS: tuple[str, ...] = (
    "--disable-blink-features=AutomationControlled",
    "--disable-dev-shm-usage",
    "--disable-background-networking",
    "--disable-renderer-backgrounding",
    "--no-first-run",
    "--no-default-browser-check",
)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class WalletOptions:
    """Account source and feature flags for one setup run."""

    seed: str = DEFAULT_SEED
    password: str = DEFAULT_PASSWORD
    show_test_nets: bool = False

    def seed_words(self) -> list[str]:
        """Return the mnemonic split into words, validating its length."""
        words = self.seed.split()
        if len(words) not in VALID_SEED_LENGTHS:
            allowed = ", ".join(str(n) for n in VALID_SEED_LENGTHS)
            raise ValueError(f"seed must have one of {{{allowed}}} words, got {len(words)}.")
        return words


@dataclass(frozen=True)
class LaunchOptions:
    """Describe how to start Chromium with the wallet extension loaded."""

    extension_path: Optional[Path] = None
    user_data_dir: Optional[Path] = None
    headless: bool = False
    flask: bool = False
    args: tuple[str, ...] = DEFAULT_LAUNCH_ARGS
    slow_mo: Optional[float] = None
    context_options: Mapping[str, object] = field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LaunchOptions":
        """Build options from ``WALLETMAN_*`` environment variables."""

        env = os.environ if environ is None else environ
        extension = env.get("WALLETMAN_EXTENSION_PATH")
        user_data_dir = env.get("WALLETMAN_USER_DATA_DIR")
        return cls(
            extension_path=Path(extension).expanduser() if extension else None,
            user_data_dir=Path(user_data_dir).expanduser() if user_data_dir else None,
            headless=env.get("WALLETMAN_HEADLESS", "").strip().lower() in _TRUTHY,
            flask=env.get("WALLETMAN_FLASK", "").strip().lower() in _TRUTHY,
        )

    def chromium_args(self) -> list[str]:
        """Return the launch flags, including the extension loading flags."""
        args = list(self.args)
        if self.extension_path is not None:
            path = str(Path(self.extension_path).resolve())
            args.extend(
                [
                    f"--disable-extensions-except={path}",
                    f"--load-extension={path}",
                ]
            )
        return args


__all__ = [
    "DEFAULT_LAUNCH_ARGS",
    "DEFAULT_PASSWORD",
    "DEFAULT_SEED",
    "LaunchOptions",
    "WalletOptions",
]
