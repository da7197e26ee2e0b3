"""Package configuration from environment variables."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "info"

    # Text metrics for the default pipeline and its approximate measurer
    default_text_height: float = 16.0
    char_width_ratio: float = 0.6
    line_height_ratio: float = 1.2
    baseline_ratio: float = 0.8

    model_config = SettingsConfigDict(
        env_prefix="COLLAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


def configure_logging(config: Settings | None = None) -> None:
    """Install a root handler at the configured level."""
    config = config or settings
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
