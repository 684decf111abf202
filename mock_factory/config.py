"""
Configuration settings for mock-factory.

Uses Pydantic Settings to load environment variables for logging and the
defaults used by the record runner and CLI.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Generation defaults
    default_count: int = Field(10, alias="MOCK_DEFAULT_COUNT", ge=0)
    start_id: int = Field(1, alias="MOCK_START_ID", ge=1)
    output_indent: int = Field(2, alias="MOCK_OUTPUT_INDENT", ge=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
