#!/usr/bin/env python3
"""Verify the configured provider and the local signing stack.

Tests:
1. Provider reachability and chain id
2. Wallet generation
3. Keystore encrypt/decrypt round trip
4. Message sign/recover round trip

Usage:
    python scripts/verify_connection.py
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger

from web3_quarters.config import KeystoreConfig, get_settings
from web3_quarters.exceptions import WalletError
from web3_quarters.wallet import Wallet, WalletManager

# Throwaway passphrase for the round trip; satisfies the default policy
CHECK_PASSPHRASE = "Verify-Connection-Check-2024"
CHECK_MESSAGE = "web3-quarters connectivity check"


async def check_network(manager: WalletManager) -> tuple[bool, str]:
    """Ask the provider for its chain id.

    Returns:
        Tuple of (success, message)
    """
    try:
        network = await manager.get_network()
    except WalletError as e:
        return False, f"{e} ({type(e.__cause__).__name__})"

    return True, f"Connected to {network.name} (chain id {network.chain_id})"


async def check_keystore(manager: WalletManager, wallet: Wallet) -> tuple[bool, str]:
    """Encrypt and decrypt the wallet.

    Returns:
        Tuple of (success, message)
    """
    try:
        encrypted = await manager.encrypt_wallet(wallet, CHECK_PASSPHRASE)
        restored = await manager.decrypt_wallet(encrypted, CHECK_PASSPHRASE)
    except WalletError as e:
        return False, str(e)

    if restored != wallet:
        return False, "Decrypted wallet differs from the original"
    return True, f"Keystore round trip OK ({len(encrypted)} bytes)"


async def check_signing(manager: WalletManager, wallet: Wallet) -> tuple[bool, str]:
    """Sign a message and recover its signer.

    Returns:
        Tuple of (success, message)
    """
    try:
        signature = await manager.sign_message(wallet, CHECK_MESSAGE)
        ok = await manager.is_message_signer(CHECK_MESSAGE, signature, wallet.address)
    except WalletError as e:
        return False, str(e)

    if not ok:
        return False, "Recovered signer does not match"
    return True, "Signature recovered to the signing address"


async def main() -> int:
    """Run all verification checks."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="WARNING",
    )

    settings = get_settings()
    # Cheap KDF: this keystore is discarded
    manager = WalletManager(keystore_config=KeystoreConfig(iterations=1024))

    print("\n" + "=" * 60)
    print("  WEB3-QUARTERS VERIFICATION")
    print("=" * 60)
    print(f"\n  RPC URL: {settings.provider.rpc_url}")
    print()

    all_passed = True

    print("  [1/4] Querying provider network...")
    success, msg = await check_network(manager)
    print(f"        {'PASS' if success else 'FAIL'}: {msg}")
    all_passed = all_passed and success

    print("\n  [2/4] Generating wallet...")
    wallet = await manager.generate_wallet()
    print(f"        PASS: {wallet.address}")

    print("\n  [3/4] Checking keystore round trip...")
    success, msg = await check_keystore(manager, wallet)
    print(f"        {'PASS' if success else 'FAIL'}: {msg}")
    all_passed = all_passed and success

    print("\n  [4/4] Checking message signing...")
    success, msg = await check_signing(manager, wallet)
    print(f"        {'PASS' if success else 'FAIL'}: {msg}")
    all_passed = all_passed and success

    print("\n" + "=" * 60)
    if all_passed:
        print("  ALL CHECKS PASSED")
    else:
        print("  SOME CHECKS FAILED - Check PROVIDER_RPC_URL in .env and try again")
    print("=" * 60 + "\n")

    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
