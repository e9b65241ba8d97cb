"""
Application configuration using Pydantic Settings.

Automatically loads environment variables from .env files.
"""

from functools import lru_cache
from pathlib import Path

from fastapi import Request
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_UPLOAD_BYTES = 25 * 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MongoDB (database name defaults to the one in the URI)
    mongodb_uri: str = "mongodb://localhost:27017/invoice-manager"
    mongodb_db: str | None = None

    # HTTP server
    port: int = 3001
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8501",  # Streamlit web client
        "http://127.0.0.1:8501",
    ]
    max_upload_bytes: int = MAX_UPLOAD_BYTES

    # AI providers
    gemini_api_key: str | None = None
    groq_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash"
    groq_model: str = "llama-3.3-70b-versatile"

    # "development" switches every extraction provider to canned data
    environment: str = Field(
        default="production",
        validation_alias=AliasChoices("NODE_ENV", "APP_ENV", "ENVIRONMENT"),
    )

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration loaded from environment.
    """
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """Dependency returning the settings the application was created with."""
    return request.app.state.settings
