"""
Application configuration using pydantic-settings.

Loads configuration from environment variables with sensible defaults.
"""
from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from NIGHT_AUDIT_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NIGHT_AUDIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Parser defaults
    minimum_amount: Decimal = Decimal("0.01")
    include_zero_amounts: bool = False
    combine_payment_methods: bool = True

    # Credit card deposits
    credit_card_deposit_account: str = "1010"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
