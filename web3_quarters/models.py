"""Value objects passed across the wallet facade."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_DERIVATION_PATH = "m/44'/60'/0'/0/0"


class Mnemonic(BaseModel):
    """BIP-39 mnemonic backing an HD wallet.

    Immutable; equality is by value so decrypted wallets compare equal to
    the originals.
    """

    model_config = {"frozen": True}

    phrase: str = Field(..., min_length=1, description="Space-separated BIP-39 words")
    path: str = Field(default=DEFAULT_DERIVATION_PATH, description="Derivation path")
    locale: str = Field(default="en", description="Wordlist language")

    @property
    def words(self) -> list[str]:
        return self.phrase.split(" ")


class Network(BaseModel):
    """Chain identity reported by a provider."""

    model_config = {"frozen": True}

    chain_id: int = Field(..., ge=1, description="EIP-155 chain id")
    name: str = Field(..., description="Well-known network name or 'unknown'")


# Fields whose values eth-account expects as integers
_INT_FIELDS = (
    "value",
    "gas_limit",
    "gas_price",
    "max_fee_per_gas",
    "max_priority_fee_per_gas",
    "nonce",
    "chain_id",
    "type",
)

# snake_case field -> eth-account transaction dict key
_TX_KEYS = {
    "to": "to",
    "value": "value",
    "gas_limit": "gas",
    "gas_price": "gasPrice",
    "max_fee_per_gas": "maxFeePerGas",
    "max_priority_fee_per_gas": "maxPriorityFeePerGas",
    "nonce": "nonce",
    "chain_id": "chainId",
    "type": "type",
    "data": "data",
    "access_list": "accessList",
}


class TransactionRequest(BaseModel):
    """Transaction fields supplied by the caller for signing.

    Integer fields accept ints, decimal strings or ``0x`` hex strings.
    Immutable; the facade never fills in missing fields.
    """

    model_config = {"frozen": True}

    to: str | None = Field(default=None, description="Recipient address")
    value: int = Field(default=0, ge=0, description="Amount in wei")
    gas_limit: int | None = Field(default=None, ge=0)
    gas_price: int | None = Field(default=None, ge=0, description="Legacy gas price in wei")
    max_fee_per_gas: int | None = Field(default=None, ge=0)
    max_priority_fee_per_gas: int | None = Field(default=None, ge=0)
    nonce: int | None = Field(default=None, ge=0)
    chain_id: int | None = Field(default=None, ge=1)
    type: int | None = Field(default=None, ge=0)
    data: str = Field(default="0x", description="Hex-encoded calldata")
    access_list: list[dict[str, Any]] | None = None

    @field_validator(*_INT_FIELDS, mode="before")
    @classmethod
    def _parse_int(cls, value: Any) -> Any:
        if isinstance(value, str):
            text = value.strip()
            return int(text, 16) if text.lower().startswith("0x") else int(text)
        return value

    def to_transaction_dict(self) -> dict[str, Any]:
        """Build the camelCase dict eth-account signs, omitting unset fields."""
        tx: dict[str, Any] = {}
        for field_name, key in _TX_KEYS.items():
            value = getattr(self, field_name)
            if value is not None:
                tx[key] = value

        # Typed transactions (EIP-2930 / EIP-1559) carry an access list
        if self.type in (1, 2) and "accessList" not in tx:
            tx["accessList"] = []

        return tx
