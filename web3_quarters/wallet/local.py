"""Local HD wallet backed by eth-account."""

from dataclasses import dataclass, field
from typing import Any

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from eth_keys import keys

from web3_quarters.interfaces.signer import BaseSigner
from web3_quarters.models import Mnemonic


def to_hex(value: bytes) -> str:
    """Hex-encode bytes with a 0x prefix (HexBytes.hex() drops it on newer releases)."""
    return f"0x{bytes(value).hex()}"


@dataclass(frozen=True)
class Wallet(BaseSigner):
    """Represents an unlocked wallet ready for use."""

    address: str
    public_key: str  # Compressed, 0x + 66 hex chars
    private_key: str = field(repr=False)  # Hex string with 0x prefix
    mnemonic: Mnemonic | None = None

    @classmethod
    def from_account(cls, account: LocalAccount, mnemonic: Mnemonic | None = None) -> "Wallet":
        """Build a wallet from an eth-account LocalAccount.

        Args:
            account: The unlocked account.
            mnemonic: Mnemonic the account was derived from, if any.

        Returns:
            The Wallet value.
        """
        public_key = keys.PrivateKey(bytes(account.key)).public_key
        return cls(
            address=account.address,
            public_key=to_hex(public_key.to_compressed_bytes()),
            private_key=to_hex(account.key),
            mnemonic=mnemonic,
        )

    @property
    def short_address(self) -> str:
        """Return shortened address for display (0x1234...5678)."""
        return f"{self.address[:6]}...{self.address[-4:]}"

    @property
    def account(self) -> LocalAccount:
        return Account.from_key(self.private_key)

    async def sign_message(self, message: str) -> str:
        signed = Account.sign_message(encode_defunct(text=message), private_key=self.private_key)
        return to_hex(signed.signature)

    async def sign_transaction(self, transaction: dict[str, Any]) -> str:
        signed = Account.sign_transaction(transaction, self.private_key)
        return to_hex(signed.raw_transaction)
