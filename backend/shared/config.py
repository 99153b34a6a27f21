"""
Centralized configuration for the admin console.

All settings are loaded from environment variables prefixed with
BLOODBANK_ (e.g. BLOODBANK_API_BASE_URL), or from a .env file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BLOODBANK_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Blood Bank Admin"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Donation backend
    api_base_url: str = "http://localhost:5173/api/v1"
    request_timeout: float = 30.0  # seconds

    # Session credential
    credential_path: Path = Path.home() / ".bloodbank" / "authToken"
    jwt_secret: str = ""  # empty: claims are read without signature verification
    jwt_algorithms: list[str] = ["HS256"]

    # Moderation policy
    allow_rejected_reaccept: bool = False

    # Reference backend server
    host: str = "127.0.0.1"
    port: int = 5173
    reload: bool = False
    reference_seed_path: Optional[Path] = None


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
