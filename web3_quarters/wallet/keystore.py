"""Keystore serialization for HD wallets.

The keystore is the Web3 Secret Storage (v3) JSON produced by eth-account,
the same format MetaMask and Geth read. Keystores only protect the private
key, so wallets that carry a mnemonic get an extra section holding the
phrase sealed with AES-256-GCM. The sealing key is derived with HKDF from
the private key, which means the phrase can only be opened once the
passphrase has unlocked the keystore itself.
"""

import json
import secrets
from typing import Any

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from eth_account import Account
from loguru import logger

from web3_quarters.models import Mnemonic
from web3_quarters.wallet.local import Wallet

MNEMONIC_SECTION = "x-web3-quarters"
MNEMONIC_SECTION_VERSION = 1

AES_KEY_SIZE = 32
AES_NONCE_SIZE = 12  # 96 bits (recommended for GCM)
HKDF_INFO = b"web3-quarters/mnemonic"


def _mnemonic_key(private_key: bytes) -> bytes:
    return HKDF(
        algorithm=hashes.SHA256(),
        length=AES_KEY_SIZE,
        salt=None,
        info=HKDF_INFO,
    ).derive(private_key)


def seal_mnemonic(mnemonic: Mnemonic, private_key: bytes, address: str) -> dict[str, Any]:
    """Encrypt a mnemonic into the keystore's extension section.

    Args:
        mnemonic: Mnemonic to protect.
        private_key: Raw private key the sealing key is derived from.
        address: Wallet address, bound to the ciphertext as associated data.

    Returns:
        JSON-serializable section dict.
    """
    nonce = secrets.token_bytes(AES_NONCE_SIZE)
    ciphertext = AESGCM(_mnemonic_key(private_key)).encrypt(
        nonce, mnemonic.phrase.encode("utf-8"), address.lower().encode("ascii")
    )
    return {
        "mnemonicCiphertext": ciphertext.hex(),
        "mnemonicNonce": nonce.hex(),
        "path": mnemonic.path,
        "locale": mnemonic.locale,
        "version": MNEMONIC_SECTION_VERSION,
    }


def open_mnemonic(section: dict[str, Any], private_key: bytes, address: str) -> Mnemonic:
    """Decrypt the extension section back into a Mnemonic.

    Raises:
        KeyError: If a section field is missing.
        ValueError: If the section version is unsupported or a field is not hex.
        cryptography.exceptions.InvalidTag: If the ciphertext was tampered with.
    """
    if section["version"] != MNEMONIC_SECTION_VERSION:
        raise ValueError(f"Unsupported mnemonic section version: {section['version']}")

    phrase = AESGCM(_mnemonic_key(private_key)).decrypt(
        bytes.fromhex(section["mnemonicNonce"]),
        bytes.fromhex(section["mnemonicCiphertext"]),
        address.lower().encode("ascii"),
    )
    return Mnemonic(phrase=phrase.decode("utf-8"), path=section["path"], locale=section["locale"])


def encrypt_keystore(
    wallet: Wallet,
    passphrase: str,
    kdf: str = "scrypt",
    iterations: int | None = None,
) -> str:
    """Serialize a wallet into an encrypted keystore string.

    Args:
        wallet: Wallet to encrypt.
        passphrase: Passphrase protecting the keystore.
        kdf: Key derivation function, "scrypt" or "pbkdf2".
        iterations: KDF work factor; eth-account's default when None.

    Returns:
        The keystore JSON document.
    """
    account = wallet.account
    keystore: dict[str, Any] = Account.encrypt(
        account.key, passphrase, kdf=kdf, iterations=iterations
    )

    if wallet.mnemonic is not None:
        keystore[MNEMONIC_SECTION] = seal_mnemonic(
            wallet.mnemonic, bytes(account.key), account.address
        )

    logger.debug("Encrypted keystore for {} (kdf={})", wallet.short_address, kdf)
    return json.dumps(keystore)


def decrypt_keystore(encrypted_wallet: str, passphrase: str) -> Wallet:
    """Restore a wallet from an encrypted keystore string.

    Args:
        encrypted_wallet: Keystore JSON as produced by encrypt_keystore().
        passphrase: Passphrase used at encryption time.

    Returns:
        The unlocked Wallet, including its mnemonic when one was stored.

    Raises:
        ValueError: On malformed JSON, a wrong passphrase, or a mnemonic that
            does not derive the keystore's address.
        KeyError: If a required keystore field is missing.
    """
    keystore: dict[str, Any] = json.loads(encrypted_wallet)
    private_key = bytes(Account.decrypt(keystore, passphrase))
    account = Account.from_key(private_key)

    mnemonic = None
    section = keystore.get(MNEMONIC_SECTION)
    if section is not None:
        mnemonic = open_mnemonic(section, private_key, account.address)
        derived = Account.from_mnemonic(mnemonic.phrase, account_path=mnemonic.path)
        if derived.address != account.address:
            raise ValueError("Mnemonic does not derive the keystore address")

    wallet = Wallet.from_account(account, mnemonic)
    logger.debug("Decrypted keystore for {}", wallet.short_address)
    return wallet
