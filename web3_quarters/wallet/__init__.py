"""Wallet management module.

Provides wallet generation, keystore encryption and message/transaction signing.
"""

from eth_account import Account

# Required for from_mnemonic / create_with_mnemonic
Account.enable_unaudited_hdwallet_features()

from web3_quarters.wallet.local import Wallet  # noqa: E402
from web3_quarters.wallet.manager import WalletManager  # noqa: E402
from web3_quarters.wallet.passphrase import PassphrasePolicy  # noqa: E402

__all__ = ["PassphrasePolicy", "Wallet", "WalletManager"]
