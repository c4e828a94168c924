"""CLI helper to prime a persistent wallet profile for later bootstrap runs."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from walletman.browser.options import DEFAULT_PASSWORD, DEFAULT_SEED, LaunchOptions, WalletOptions
from walletman.browser.core import launch
from walletman.wallet.setup import setup_wallet


async def _prime(launch_options: LaunchOptions, wallet_options: WalletOptions) -> None:
    async with await launch(launch_options) as browser:
        await setup_wallet(browser, wallet_options)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Launch a browser with the wallet extension and run first-time setup into a profile.",
    )
    parser.add_argument("extension", type=Path, help="Path to the unpacked wallet extension")
    parser.add_argument(
        "--user-data-dir",
        type=Path,
        required=True,
        help="Profile directory to keep the onboarded wallet in.",
    )
    parser.add_argument("--seed", default=DEFAULT_SEED, help="Mnemonic to import.")
    parser.add_argument("--password", default=DEFAULT_PASSWORD, help="Wallet password.")
    parser.add_argument(
        "--show-test-nets",
        action="store_true",
        help="Enable test networks in the network list.",
    )
    parser.add_argument(
        "--flask",
        action="store_true",
        help="The extension is the Flask build.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every setup step.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    launch_options = LaunchOptions(
        extension_path=args.extension,
        user_data_dir=args.user_data_dir,
        flask=args.flask,
    )
    wallet_options = WalletOptions(
        seed=args.seed,
        password=args.password,
        show_test_nets=args.show_test_nets,
    )
    asyncio.run(_prime(launch_options, wallet_options))
    print(
        "Primed wallet profile at {path}; pass it as LaunchOptions.user_data_dir to bootstrap.".format(
            path=args.user_data_dir
        )
    )


if __name__ == "__main__":
    main()
