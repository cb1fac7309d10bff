"""Convenience wrapper around eth-account and web3 for HD wallets."""

from web3_quarters.exceptions import ErrorKind, InvalidInputError, OperationError, WalletError
from web3_quarters.models import Mnemonic, Network, TransactionRequest
from web3_quarters.wallet import PassphrasePolicy, Wallet, WalletManager

__all__ = [
    "ErrorKind",
    "InvalidInputError",
    "Mnemonic",
    "Network",
    "OperationError",
    "PassphrasePolicy",
    "TransactionRequest",
    "Wallet",
    "WalletError",
    "WalletManager",
]
