"""Custom exceptions for the web3-quarters wallet wrapper."""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds.

    The value of each member is the human-readable message surfaced to callers.
    """

    # Validation
    INVALID_PASSPHRASE = (
        "Passphrase is too weak: it needs the minimum length plus at least one "
        "uppercase letter, one lowercase letter and one special character"
    )
    EMPTY_ENCRYPTED_WALLET = "Encrypted wallet is empty"
    EMPTY_PASSPHRASE = "Passphrase is empty"
    EMPTY_MESSAGE_TO_SIGN = "Message to sign is empty"
    EMPTY_MESSAGE_IN_GET_MESSAGE_SIGNER = "Message to recover the signer from is empty"
    EMPTY_SIGNATURE_IN_GET_MESSAGE_SIGNER = "Signature to recover the signer from is empty"
    EMPTY_SIGNER_IN_IS_MESSAGE_SIGNER = "Signer address to compare against is empty"
    EMPTY_MNEMONIC = "Mnemonic phrase is empty"
    INVALID_MNEMONIC = "Mnemonic phrase is invalid"
    INVALID_PRIVATE_KEY = "Private key is invalid"

    # Delegated calls
    FAILED_TO_ENCRYPT = "Failed to encrypt wallet"
    FAILED_TO_DECRYPT = "Failed to decrypt wallet"
    FAILED_TO_SIGN_MESSAGE = "Failed to sign message"
    FAILED_TO_RECOVER_SIGNER = "Failed to recover message signer"
    FAILED_TO_SIGN_TRANSACTION = "Failed to sign transaction"
    FAILED_TO_FETCH_NETWORK = "Failed to fetch network from provider"

    @property
    def message(self) -> str:
        return self.value


class WalletError(Exception):
    """Base exception for wallet operations.

    Attributes:
        kind: The ErrorKind describing the failure.
    """

    def __init__(self, kind: ErrorKind) -> None:
        super().__init__(kind.message)
        self.kind = kind


# =============================================================================
# Validation Exceptions
# =============================================================================


class InvalidInputError(WalletError):
    """Raised when an argument is rejected before any library call is made."""

    pass


# =============================================================================
# Delegated Call Exceptions
# =============================================================================


class OperationError(WalletError):
    """Raised when the underlying library fails.

    The library exception is chained as ``__cause__``; its text is not part
    of the message.
    """

    pass
