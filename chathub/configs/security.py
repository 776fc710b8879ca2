"""
Security configuration settings.

Holds the key used to encrypt connector credentials at rest.

Dependencies: pydantic, pydantic_settings
System role: Credential encryption configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from chathub.configs.base import BaseSettings


class SecuritySettings(BaseSettings):
    """Encryption key configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHATHUB_",
        case_sensitive=False,
        extra="ignore",
    )

    encryption_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CHATHUB_ENCRYPTION_KEY", "ENCRYPTION_KEY"),
        description="Base64-encoded 32-byte key for AES-256-GCM (generate with `openssl rand -base64 32`)",
    )
