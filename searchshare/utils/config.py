"""
Configuration Management

Uses Pydantic Settings for environment-based configuration.
Loads from .env file automatically.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",         # Ignore extra fields in .env file
        case_sensitive=False,   # Allow both UPPERCASE and lowercase
    )

    # Application Settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Detector thresholds
    QUICK_WIN_MIN_VOLUME: int = 100
    HIDDEN_GEM_MIN_VOLUME: int = 200
    HIDDEN_GEM_MAX_DIFFICULTY: float = 40

    # Request limits (HTTP layer only)
    MAX_RANKED_KEYWORDS: int = 1000
    MAX_BRAND_KEYWORDS: int = 500


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()
