"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "FX Signal Board"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS
    allowed_origins: list[str] = ["http://localhost:3000"]

    # CurrencyLayer API
    currencylayer_api_key: Optional[str] = None
    currencylayer_base_url: str = "https://apilayer.net/api"
    currencylayer_timeout: float = 15.0  # seconds

    # Analysis
    historical_days: int = 7

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
