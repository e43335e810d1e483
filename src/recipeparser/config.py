"""Parser configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from RECIPEPARSER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RECIPEPARSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"
    log_level: str = "INFO"
    # "" picks json in production when stderr is not a terminal, text otherwise
    log_format: Literal["", "json", "text"] = ""


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
