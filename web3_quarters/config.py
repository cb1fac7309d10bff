"""Configuration architecture using pydantic-settings for typed environment loading."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderConfig(BaseSettings):
    """JSON-RPC provider configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PROVIDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    rpc_url: str = "http://localhost:8545"
    # When set, get_network() answers from config without an RPC round trip
    chain_id: int | None = None
    request_timeout: float = 10.0


class KeystoreConfig(BaseSettings):
    """Keystore encryption configuration.

    ``iterations`` is the scrypt ``n`` or the pbkdf2 round count. Left unset,
    eth-account picks its own defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="KEYSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    kdf: Literal["scrypt", "pbkdf2"] = "scrypt"
    iterations: int | None = Field(default=None, gt=1)


class PassphraseConfig(BaseSettings):
    """Passphrase policy configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PASSPHRASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    min_length: int = Field(default=15, ge=1)


class LogConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    file: Path | None = None
    rotation: str = "100 MB"
    retention: str = "7 days"


class Settings:
    """Root settings aggregating all configuration sections."""

    def __init__(self) -> None:
        self.provider = ProviderConfig()
        self.keystore = KeystoreConfig()
        self.passphrase = PassphraseConfig()
        self.log = LogConfig()


# Global settings instance - lazily loaded
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
