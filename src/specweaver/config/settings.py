"""Import engine settings"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Import engine settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Remote persistence API
    persistence_base_url: str = "http://localhost:3000"
    persistence_api_token: str = ""

    # Application Configuration
    environment: Literal["development", "staging", "production", "test"] = "development"
    log_level: str = "INFO"

    # HTTP Configuration
    request_timeout: int = 30000  # milliseconds
    max_retries: int = 3

    # Import Configuration
    import_max_concurrency: int = 4  # folders / uncategorized list in flight
    preferred_content_types: list[str] = ["application/json"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """
    Install a basic logging handler for applications embedding the engine.

    Args:
        level: Log level name (default from settings)
    """
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug(f"Logging configured at {level_name}")
