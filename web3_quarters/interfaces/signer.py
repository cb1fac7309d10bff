"""Abstract base class defining the signer interface."""

from abc import ABC, abstractmethod
from typing import Any


class BaseSigner(ABC):
    """Capability-bearing wallet as seen by the facade.

    The local HD wallet implements this; hardware wallets or remote signers
    can be dropped in by implementing the same members.

    Attributes:
        address: EIP-55 checksummed address (``0x`` + 40 hex chars).
        public_key: Compressed secp256k1 public key (``0x`` + 66 hex chars).
    """

    address: str
    public_key: str

    @abstractmethod
    async def sign_message(self, message: str) -> str:
        """Sign a text message with EIP-191 personal-sign.

        Args:
            message: Plain text to sign.

        Returns:
            ``0x``-prefixed 65-byte signature.
        """
        raise NotImplementedError

    @abstractmethod
    async def sign_transaction(self, transaction: dict[str, Any]) -> str:
        """Sign a transaction dict as accepted by eth-account.

        Args:
            transaction: camelCase transaction fields.

        Returns:
            ``0x``-prefixed raw signed transaction.
        """
        raise NotImplementedError
