"""
Configuration module - centralized settings for the entire application.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    Missing credentials never stop the server from starting. Each feature
    that needs one checks for it at call time and fails with a
    ConfigurationError instead.

    To override in production, set environment variables:
        export GEMINI_API_KEY=...
        export NETLIFY_ACCESS_TOKEN=...
        export FIREBASE_SERVICE_ACCOUNT_JSON='{"type": "service_account", ...}'
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",        # Load from .env file in project root
        env_file_encoding="utf-8",  # File encoding
        extra="ignore",         # Ignore extra env vars not defined here
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    APP_NAME: str = "Pabrik Landing API"
    DEBUG: bool = False

    # PORT: Used when running `python -m app.main`
    PORT: int = 10000

    # ---------------------------------------------------------------------------
    # CORS SETTINGS
    # ---------------------------------------------------------------------------
    # ALLOWED_ORIGINS: Browser origins allowed to call the API.
    # Set as JSON in the environment: ALLOWED_ORIGINS='["https://a.app"]'
    # Requests without an Origin header (curl, server-to-server) are always served.
    ALLOWED_ORIGINS: List[str] = [
        "https://pabriklanding.web.app",
        "http://localhost:5500",
        "http://127.0.0.1:5500",
    ]

    # FIREBASE_HOSTING_URL: The frontend's own hosting URL, added to the allow-list
    FIREBASE_HOSTING_URL: str = ""

    # ---------------------------------------------------------------------------
    # GEMINI SETTINGS
    # ---------------------------------------------------------------------------
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TEMPERATURE: float = 0.7

    # A full landing page is long; the default output cap would truncate it
    GEMINI_MAX_OUTPUT_TOKENS: int = 65536

    # AI request deadline in seconds
    AI_REQUEST_TIMEOUT: float = 180.0

    # COPY_LANGUAGE: Language of the visible text on generated pages
    COPY_LANGUAGE: str = "Indonesian"

    # ---------------------------------------------------------------------------
    # NETLIFY SETTINGS
    # ---------------------------------------------------------------------------
    # NETLIFY_ACCESS_TOKEN: Personal access token (User settings > Applications)
    NETLIFY_ACCESS_TOKEN: str = ""

    # NETLIFY_ACCOUNT_SLUG: Team that owns the created sites (empty = token owner's default)
    NETLIFY_ACCOUNT_SLUG: str = "pabrik-landing"

    # ---------------------------------------------------------------------------
    # FIREBASE HOSTING SETTINGS
    # ---------------------------------------------------------------------------
    # FIREBASE_SERVICE_ACCOUNT_JSON: The whole service account key file, as JSON text
    FIREBASE_SERVICE_ACCOUNT_JSON: str = ""

    # FIREBASE_PROJECT_ID: Empty = use the service account's project_id
    FIREBASE_PROJECT_ID: str = ""

    # Per-call deadline for hosting provider requests, in seconds
    PUBLISH_REQUEST_TIMEOUT: float = 60.0

    def cors_origins(self) -> List[str]:
        """Full CORS allow-list, including the frontend hosting URL when set."""
        origins = list(self.ALLOWED_ORIGINS)
        if self.FIREBASE_HOSTING_URL and self.FIREBASE_HOSTING_URL not in origins:
            origins.insert(0, self.FIREBASE_HOSTING_URL)
        return origins


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from app.core.config import settings
settings = Settings()
