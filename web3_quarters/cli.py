"""Command-line entry point for web3-quarters."""

import argparse
import asyncio
import getpass
import sys
from pathlib import Path

from loguru import logger

from web3_quarters.exceptions import WalletError
from web3_quarters.log import setup_logging
from web3_quarters.wallet import WalletManager


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="web3-quarters",
        description="Generate, encrypt and sign with Ethereum HD wallets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Generate a wallet and print its keystore")
    generate.add_argument("--out", type=Path, help="Write the keystore to this file")

    address = sub.add_parser("address", help="Show the address of a keystore")
    address.add_argument("keystore", type=Path)

    sign = sub.add_parser("sign", help="Sign a message with a keystore")
    sign.add_argument("keystore", type=Path)
    sign.add_argument("message")

    verify = sub.add_parser("verify", help="Recover or check a message signer")
    verify.add_argument("message")
    verify.add_argument("signature")
    verify.add_argument("--signer", help="Print true/false instead of the recovered address")

    sub.add_parser("network", help="Show the configured provider's network")

    return parser.parse_args(argv)


def _read_passphrase(prompt: str = "Passphrase: ") -> str:
    return getpass.getpass(prompt)


async def run(args: argparse.Namespace, manager: WalletManager) -> None:
    """Dispatch a parsed command."""
    if args.command == "generate":
        wallet = await manager.generate_wallet()
        keystore = await manager.encrypt_wallet(wallet, _read_passphrase())
        if args.out:
            args.out.parent.mkdir(parents=True, exist_ok=True)
            args.out.write_text(keystore)
            logger.info("Keystore written to {}", args.out)
        else:
            print(keystore)
        print(wallet.address)

    elif args.command == "address":
        wallet = await manager.decrypt_wallet(args.keystore.read_text(), _read_passphrase())
        print(wallet.address)
        print(wallet.public_key)

    elif args.command == "sign":
        wallet = await manager.decrypt_wallet(args.keystore.read_text(), _read_passphrase())
        print(await manager.sign_message(wallet, args.message))

    elif args.command == "verify":
        if args.signer is not None:
            result = await manager.is_message_signer(args.message, args.signature, args.signer)
            print("true" if result else "false")
        else:
            print(await manager.get_message_signer(args.message, args.signature))

    elif args.command == "network":
        network = await manager.get_network()
        print(f"{network.chain_id} {network.name}")


def main(argv: list[str] | None = None, manager: WalletManager | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = parse_args(argv)
    setup_logging()

    try:
        asyncio.run(run(args, manager or WalletManager()))
    except WalletError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
