"""
Configuration management for the QA corpus tool.

This module centralizes environment-driven configuration using Pydantic's
`BaseSettings`. The API, the CLI and the HTTP client all consume the shared
`settings` instance so they agree on ports, database names and limits.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration sourced from environment variables."""

    # General application settings
    API_TITLE: str = "QA Pairs Corpus Tool"
    API_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = Field("development", pattern=r"^(development|staging|production)$")
    LOG_LEVEL: str = "INFO"

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    # Comma separated; kept as a string so plain env values parse without JSON.
    ALLOWED_ORIGINS: str = "*"
    MAX_BODY_BYTES: PositiveInt = 10 * 1024 * 1024

    # Document store
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "corpora"
    MONGODB_COLLECTION: str = "qa-pairs"

    # Listing endpoints
    DEFAULT_LIST_LIMIT: PositiveInt = 10
    MAX_LIST_LIMIT: PositiveInt = 100

    # Client side
    CORPUS_API_URL: str = "http://localhost:3001"
    CLIENT_TIMEOUT_SECONDS: float = 30.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @field_validator("LOG_LEVEL")
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()


# Singleton-style settings instance for modules that prefer direct access.
settings = get_settings()
