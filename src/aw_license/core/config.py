# AW License - Domain-Locked License Keys
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Configuration management using Pydantic Settings.

All values come from the environment with the ``A11Y_`` prefix. The signing
key is only ever needed by the issuer; verifiers never read it.
"""

from beartype import beartype
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Issuer and logging settings with immutable configuration."""

    model_config = SettingsConfigDict(
        env_prefix="A11Y_",
        env_file=None,
        env_file_encoding="utf-8",
        frozen=True,
        validate_default=True,
        extra="ignore",
    )

    # Signing
    private_key: SecretStr | None = Field(
        default=None,
        description="ECDSA P-256 private key as a JWK JSON string",
    )

    # Issuer defaults
    license_months: int = Field(
        default=12,
        ge=1,
        description="Default license duration in calendar months",
    )
    license_tier: str = Field(
        default="pro",
        min_length=1,
        description="Default tier label written into new licenses",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Root log level",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls: type["Settings"], v: str) -> str:
        """Normalize and check the log level name."""
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @property
    @beartype
    def has_private_key(self) -> bool:
        """Check whether a signing key was provided."""
        return self.private_key is not None and bool(
            self.private_key.get_secret_value().strip()
        )


_settings: Settings | None = None


@beartype
def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


@beartype
def clear_settings_cache() -> None:
    """Clear settings cache (for testing)."""
    global _settings
    _settings = None
