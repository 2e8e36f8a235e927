"""Environment overrides for the file-based configuration."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .config import CONFIG_FILE, AppConfig, load_config

ENV_PREFIX = "SVGREADY_"


class Settings(BaseSettings):
    """Application runtime settings sourced from environment variables."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_file=".env", extra="ignore")

    config_path: Path = CONFIG_FILE
    enable_local_api: bool | None = None
    log_svg_content: bool | None = None
    debug: bool | None = None


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


def apply_settings(config: AppConfig, settings: Settings) -> AppConfig:
    if settings.enable_local_api is not None:
        config.runtime.enable_local_api = settings.enable_local_api
    if settings.log_svg_content is not None:
        config.runtime.log_svg_content = settings.log_svg_content
    if settings.debug is not None:
        config.runtime.debug = settings.debug
    return config


def load_settings_config(settings: Settings | None = None) -> AppConfig:
    settings = settings or get_settings()
    return apply_settings(load_config(settings.config_path), settings)


__all__ = ["ENV_PREFIX", "Settings", "apply_settings", "get_settings", "load_settings_config"]
