"""
Configuration Management

Uses Pydantic Settings for environment-based configuration.
Loads from .env file automatically.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings loaded from environment."""

    # Application Settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Findings
    EVIDENCE_MAX_LENGTH: int = 100

    # Inputs longer than this are truncated before regex scanning
    MAX_INPUT_LENGTH: int = 200_000

    # Mobile masking for anonymous viewers
    MASK_CHAR: str = "*"
    MASK_PREFIX_LENGTH: int = 2

    # Auto-clean logs every attempted step, not only the ones that changed content
    LOG_UNCHANGED_CLEAN_STEPS: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields in .env file
        case_sensitive = False  # Allow both UPPERCASE and lowercase


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()
