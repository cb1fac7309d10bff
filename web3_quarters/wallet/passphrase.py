"""Passphrase policy enforced before a wallet is encrypted."""

from dataclasses import dataclass

from web3_quarters.config import PassphraseConfig


@dataclass(frozen=True)
class PassphrasePolicy:
    """Strength rules a passphrase must satisfy.

    A passphrase passes when it is at least ``min_length`` characters long
    and contains an uppercase letter, a lowercase letter and a character
    that is neither a letter nor a digit.
    """

    min_length: int = 15

    @classmethod
    def from_config(cls, config: PassphraseConfig) -> "PassphrasePolicy":
        return cls(min_length=config.min_length)

    def violations(self, passphrase: str) -> list[str]:
        """List the rules a passphrase breaks.

        Args:
            passphrase: Candidate passphrase.

        Returns:
            Short rule names; empty when the passphrase is acceptable.
        """
        broken = []
        if len(passphrase) < self.min_length:
            broken.append("length")
        if not any(c.isupper() for c in passphrase):
            broken.append("uppercase")
        if not any(c.islower() for c in passphrase):
            broken.append("lowercase")
        if all(c.isalnum() for c in passphrase):
            broken.append("special")
        return broken

    def is_valid(self, passphrase: str) -> bool:
        return not self.violations(passphrase)
