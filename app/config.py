# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.DB_PATH)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Every setting has a default, so the service starts with no configuration
# at all: it listens on 127.0.0.1:8080 and keeps its data in ./db.json.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="127.0.0.1",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    DB_PATH: str = Field(
        default="db.json",
        min_length=1,
        description="JSON file holding the persisted store"
    )

    LOCK_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        description="Max wait for the store lock before answering 503"
    )

    # Off: a failed save is logged and reported with X-Persisted: false.
    # On: a failed save turns the request into a 500.
    STRICT_PERSISTENCE: bool = Field(
        default=False,
        description="Fail mutating requests when the db file cannot be written"
    )

    # -------------------------------------------------------------------------
    # CORS
    # -------------------------------------------------------------------------

    CORS_ORIGIN_REGEX: str = Field(
        default=r"http://localhost.*|null",
        description="Origins allowed by CORS (full-match regex)"
    )

    CORS_ALLOWED_METHODS: str = Field(
        default="GET,POST,PUT,DELETE",
        description="Allowed CORS methods (comma-separated)"
    )

    CORS_ALLOWED_HEADERS: str = Field(
        default="Authorization,Accept,Content-Type",
        description="Allowed CORS request headers (comma-separated)"
    )

    CORS_MAX_AGE: int = Field(
        default=3600,
        ge=0,
        description="Seconds browsers may cache a preflight response"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_methods_list(self) -> list[str]:
        """
        Parse CORS_ALLOWED_METHODS into a list.

        Example: "get, post" -> ["GET", "POST"]
        """
        return [m.strip().upper() for m in self.CORS_ALLOWED_METHODS.split(",") if m.strip()]

    @property
    def cors_headers_list(self) -> list[str]:
        return [h.strip() for h in self.CORS_ALLOWED_HEADERS.split(",") if h.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
