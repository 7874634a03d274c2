"""Application configuration using pydantic-settings."""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .engine.rules import DuelRules

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Rule overrides use the nested delimiter, e.g. ``SYNAPSE_DUEL_RULES__INFLAMED_DAMAGE=15``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SYNAPSE_DUEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = False
    log_level: str = "INFO"

    # Card catalog JSON export (optional; callers may build cards directly)
    catalog_path: str | None = None

    rules: DuelRules = DuelRules()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format=LOG_FORMAT,
    )
