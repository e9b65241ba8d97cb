"""
Web client configuration using Pydantic Settings.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_UPLOAD_BYTES = 25 * 1024 * 1024


class ClientSettings(BaseSettings):
    """Settings for the Streamlit web client."""

    # Address the web client uses to call the API
    api_url: str = Field(
        default="http://localhost:3001",
        validation_alias=AliasChoices("NEXT_PUBLIC_API_URL", "API_URL"),
    )
    # Address the browser uses for the PDF preview; defaults to api_url
    public_api_url: str | None = None

    max_upload_bytes: int = MAX_UPLOAD_BYTES
    page_size: int = 10

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()
