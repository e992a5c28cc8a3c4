"""Configuration loading for givenfixture.

This module provides centralized configuration management:
- Load settings from GIVENFIXTURE_* environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to the defaults used by the fixture factories
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Fixture defaults loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_prefix="GIVENFIXTURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Double behaviour
    strict: bool = Field(
        default=True,
        description="Unexpected calls on doubles raise instead of returning None",
    )
    verify_all_expectations: bool = Field(
        default=False,
        description="Verify every registered expectation, not only verifiable ones",
    )

    # Random instance generation
    collection_size: int = Field(
        default=3,
        description="Number of instances built by create_many() and having_models()",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level for the givenfixture logger",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("collection_size")
    @classmethod
    def validate_collection_size(cls, v: int) -> int:
        """Ensure collection size is positive."""
        if v <= 0:
            raise ValueError("collection_size must be positive")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load fixture settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
