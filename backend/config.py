"""
Inspector configuration: all environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings from environment variables."""

    # Database (empty -> in-memory component store)
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "")

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # Base for url/shareUrl in save responses; empty -> taken from the request
    PUBLIC_URL: str = os.environ.get("PUBLIC_URL", "").rstrip("/")

    @property
    def CORS_ORIGINS(self) -> list[str]:
        raw = os.environ.get("CORS_ORIGINS")
        if raw:
            return [origin.strip() for origin in raw.split(",") if origin.strip()]
        if self.ENVIRONMENT == "production":
            return []
        return ["http://localhost:5174", "http://localhost:3000"]

    # Components
    MAX_CODE_LENGTH: int = int(os.environ.get("MAX_CODE_LENGTH", "50000"))
    MAX_TITLE_LENGTH: int = 100
    MAX_DESCRIPTION_LENGTH: int = 500

    # Patching: degraded first-tag match when a path no longer resolves
    FALLBACK_TARGETING: bool = _env_bool("FALLBACK_TARGETING", True)

    # Rate Limits
    API_RATE_LIMIT_PER_WINDOW: int = int(os.environ.get("API_RATE_LIMIT_PER_WINDOW", "100"))  # per IP
    API_RATE_LIMIT_WINDOW_MINUTES: int = int(os.environ.get("API_RATE_LIMIT_WINDOW_MINUTES", "15"))


# Singleton instance
settings = Settings()
