"""Wallet facade over eth-account and web3.

Every operation validates its arguments, delegates to the library and
re-raises any library failure as the single matching WalletError.
"""

import asyncio
from collections.abc import Mapping
from typing import Any

from aiohttp import ClientTimeout
from eth_account import Account
from eth_account.messages import encode_defunct
from loguru import logger
from web3 import AsyncWeb3
from web3.providers import AsyncHTTPProvider

from web3_quarters.config import KeystoreConfig, ProviderConfig, get_settings
from web3_quarters.exceptions import ErrorKind, InvalidInputError, OperationError
from web3_quarters.interfaces.signer import BaseSigner
from web3_quarters.models import DEFAULT_DERIVATION_PATH, Mnemonic, Network, TransactionRequest
from web3_quarters.networks import resolve_network
from web3_quarters.wallet.keystore import decrypt_keystore, encrypt_keystore
from web3_quarters.wallet.local import Wallet
from web3_quarters.wallet.passphrase import PassphrasePolicy


class WalletManager:
    """Generates, encrypts, decrypts and signs with Ethereum wallets.

    The manager holds no per-call state: the only thing shared between calls
    is the provider handle built at construction time, so one instance can be
    used concurrently.

    Usage:
        manager = WalletManager()

        # Create and protect a wallet
        wallet = await manager.generate_wallet()
        keystore = await manager.encrypt_wallet(wallet, "Correct-Horse-Battery-9")

        # Restore it later
        wallet = await manager.decrypt_wallet(keystore, "Correct-Horse-Battery-9")

        # Sign and verify
        signature = await manager.sign_message(wallet, "Hello World")
        assert await manager.is_message_signer("Hello World", signature, wallet.address)
    """

    DEFAULT_MNEMONIC_WORDS = 12

    def __init__(
        self,
        w3: AsyncWeb3 | None = None,
        provider_config: ProviderConfig | None = None,
        keystore_config: KeystoreConfig | None = None,
        passphrase_policy: PassphrasePolicy | None = None,
    ) -> None:
        """Initialize the wallet manager.

        Args:
            w3: Provider to expose. Built from provider_config when omitted.
            provider_config: JSON-RPC settings. Defaults to global settings.
            keystore_config: Keystore KDF settings. Defaults to global settings.
            passphrase_policy: Policy for encrypt_wallet(). Defaults to the
                               policy built from global settings.
        """
        settings = get_settings()
        self._provider_config = provider_config or settings.provider
        self._keystore_config = keystore_config or settings.keystore
        self._passphrase_policy = passphrase_policy or PassphrasePolicy.from_config(
            settings.passphrase
        )
        timeout = ClientTimeout(total=self._provider_config.request_timeout)
        self._w3 = w3 if w3 is not None else AsyncWeb3(
            AsyncHTTPProvider(self._provider_config.rpc_url, request_kwargs={"timeout": timeout})
        )

    @property
    def passphrase_policy(self) -> PassphrasePolicy:
        return self._passphrase_policy

    # =========================================================================
    # Wallet lifecycle
    # =========================================================================

    async def generate_wallet(self, num_words: int = DEFAULT_MNEMONIC_WORDS) -> Wallet:
        """Generate a new random HD wallet.

        Args:
            num_words: Mnemonic length (12, 15, 18, 21 or 24).

        Returns:
            The new Wallet, carrying its mnemonic.
        """
        account, phrase = await asyncio.to_thread(
            Account.create_with_mnemonic,
            num_words=num_words,
            account_path=DEFAULT_DERIVATION_PATH,
        )
        wallet = Wallet.from_account(
            account, Mnemonic(phrase=phrase, path=DEFAULT_DERIVATION_PATH)
        )

        logger.info("Generated new wallet: {}", wallet.address)
        return wallet

    async def wallet_from_mnemonic(
        self, phrase: str, path: str = DEFAULT_DERIVATION_PATH
    ) -> Wallet:
        """Restore an HD wallet from its mnemonic phrase.

        Raises:
            InvalidInputError: If the phrase is empty or not a valid BIP-39 mnemonic.
        """
        if not phrase:
            raise InvalidInputError(ErrorKind.EMPTY_MNEMONIC)

        phrase = " ".join(phrase.split())
        try:
            account = await asyncio.to_thread(
                Account.from_mnemonic, phrase, account_path=path
            )
        except Exception as e:
            logger.warning("Mnemonic rejected: {}", type(e).__name__)
            raise InvalidInputError(ErrorKind.INVALID_MNEMONIC) from e

        wallet = Wallet.from_account(account, Mnemonic(phrase=phrase, path=path))
        logger.info("Restored wallet from mnemonic: {}", wallet.address)
        return wallet

    async def wallet_from_private_key(self, private_key: str) -> Wallet:
        """Wrap a raw private key (with or without 0x prefix) in a Wallet.

        Raises:
            InvalidInputError: If the key is not a valid secp256k1 private key.
        """
        try:
            account = Account.from_key(private_key)
        except Exception as e:
            raise InvalidInputError(ErrorKind.INVALID_PRIVATE_KEY) from e

        return Wallet.from_account(account)

    async def encrypt_wallet(self, wallet: Wallet, passphrase: str) -> str:
        """Encrypt a wallet into a keystore string.

        Args:
            wallet: The wallet to protect.
            passphrase: Passphrase satisfying the passphrase policy.

        Returns:
            Keystore JSON string.

        Raises:
            InvalidInputError: If the passphrase breaks the policy.
            OperationError: If the library fails to encrypt.
        """
        violations = self._passphrase_policy.violations(passphrase)
        if violations:
            logger.warning("Passphrase rejected, failed rules: {}", ", ".join(violations))
            raise InvalidInputError(ErrorKind.INVALID_PASSPHRASE)

        try:
            encrypted = await asyncio.to_thread(
                encrypt_keystore,
                wallet,
                passphrase,
                kdf=self._keystore_config.kdf,
                iterations=self._keystore_config.iterations,
            )
        except Exception as e:
            logger.warning("Wallet encryption failed: {}", type(e).__name__)
            raise OperationError(ErrorKind.FAILED_TO_ENCRYPT) from e

        logger.info("Encrypted wallet: {}", wallet.short_address)
        return encrypted

    async def decrypt_wallet(self, encrypted_wallet: str, passphrase: str) -> Wallet:
        """Decrypt a keystore string back into a wallet.

        Corrupted input, a tampered mnemonic section and a wrong passphrase
        are not told apart: all raise FAILED_TO_DECRYPT.

        Raises:
            InvalidInputError: If either argument is empty.
            OperationError: If the keystore cannot be decrypted.
        """
        if not encrypted_wallet:
            raise InvalidInputError(ErrorKind.EMPTY_ENCRYPTED_WALLET)
        if not passphrase:
            raise InvalidInputError(ErrorKind.EMPTY_PASSPHRASE)

        try:
            wallet = await asyncio.to_thread(decrypt_keystore, encrypted_wallet, passphrase)
        except Exception as e:
            logger.warning("Wallet decryption failed: {}", type(e).__name__)
            raise OperationError(ErrorKind.FAILED_TO_DECRYPT) from e

        logger.info("Decrypted wallet: {}", wallet.short_address)
        return wallet

    # =========================================================================
    # Messages
    # =========================================================================

    async def sign_message(self, wallet: BaseSigner, message: str) -> str:
        """Sign a text message with the wallet.

        Raises:
            InvalidInputError: If the message is empty.
            OperationError: If the wallet cannot sign.
        """
        if len(message) == 0:
            raise InvalidInputError(ErrorKind.EMPTY_MESSAGE_TO_SIGN)

        try:
            signature = await wallet.sign_message(message)
        except Exception as e:
            logger.warning("Message signing failed: {}", type(e).__name__)
            raise OperationError(ErrorKind.FAILED_TO_SIGN_MESSAGE) from e

        return signature

    async def get_message_signer(self, message: str, signature: str) -> str:
        """Recover the address that signed a message.

        Returns:
            Checksummed signer address.

        Raises:
            InvalidInputError: If the message or signature is empty.
            OperationError: If the signature cannot be decoded.
        """
        if len(message) == 0:
            raise InvalidInputError(ErrorKind.EMPTY_MESSAGE_IN_GET_MESSAGE_SIGNER)
        if len(signature) == 0:
            raise InvalidInputError(ErrorKind.EMPTY_SIGNATURE_IN_GET_MESSAGE_SIGNER)

        try:
            signer = Account.recover_message(encode_defunct(text=message), signature=signature)
        except Exception as e:
            logger.warning("Signer recovery failed: {}", type(e).__name__)
            raise OperationError(ErrorKind.FAILED_TO_RECOVER_SIGNER) from e

        logger.debug("Recovered message signer: {}", signer)
        return signer

    async def is_message_signer(self, message: str, signature: str, signer: str) -> bool:
        """Check whether ``signer`` produced ``signature`` over ``message``.

        Addresses are compared case-insensitively, so a lower-case or
        checksummed candidate both match.

        Raises:
            InvalidInputError: If any argument is empty.
            OperationError: If the signature cannot be decoded.
        """
        if len(message) == 0:
            raise InvalidInputError(ErrorKind.EMPTY_MESSAGE_IN_GET_MESSAGE_SIGNER)
        if len(signature) == 0:
            raise InvalidInputError(ErrorKind.EMPTY_SIGNATURE_IN_GET_MESSAGE_SIGNER)
        if len(signer) == 0:
            raise InvalidInputError(ErrorKind.EMPTY_SIGNER_IN_IS_MESSAGE_SIGNER)

        recovered = await self.get_message_signer(message, signature)
        return recovered.lower() == signer.lower()

    # =========================================================================
    # Transactions
    # =========================================================================

    async def sign_transaction(
        self,
        wallet: BaseSigner,
        transaction: TransactionRequest | Mapping[str, Any],
    ) -> str:
        """Sign a transaction request.

        The request is passed to the wallet as-is; nothing is filled in.

        Args:
            wallet: Signing wallet.
            transaction: A TransactionRequest or an eth-account style dict.

        Returns:
            Raw signed transaction, 0x-prefixed.

        Raises:
            OperationError: If the request is not a mapping or the library
                            rejects it.
        """
        try:
            if isinstance(transaction, TransactionRequest):
                tx = transaction.to_transaction_dict()
            else:
                tx = dict(transaction)
            raw = await wallet.sign_transaction(tx)
        except Exception as e:
            logger.warning("Transaction signing failed: {}", type(e).__name__)
            raise OperationError(ErrorKind.FAILED_TO_SIGN_TRANSACTION) from e

        logger.info("Signed transaction | to={} nonce={}", tx.get("to"), tx.get("nonce"))
        return raw

    # =========================================================================
    # Provider
    # =========================================================================

    def get_provider(self) -> AsyncWeb3:
        """Get the JSON-RPC provider this manager was built with."""
        return self._w3

    async def get_network(self) -> Network:
        """Resolve the provider's network.

        Answers from ProviderConfig.chain_id when it is set, otherwise asks
        the node for its chain id.

        Raises:
            OperationError: If the node cannot be reached or reports an
                            invalid chain id.
        """
        if self._provider_config.chain_id is not None:
            return resolve_network(self._provider_config.chain_id)

        try:
            chain_id = await self._w3.eth.chain_id
            network = resolve_network(chain_id)
        except Exception as e:
            logger.warning(
                "Network lookup failed for {}: {}",
                self._provider_config.rpc_url,
                type(e).__name__,
            )
            raise OperationError(ErrorKind.FAILED_TO_FETCH_NETWORK) from e

        logger.debug("Provider network: {} ({})", network.name, network.chain_id)
        return network
