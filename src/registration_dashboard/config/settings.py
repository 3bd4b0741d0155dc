"""
Configuration settings for the registration dashboard.

This module handles environment variable loading and configuration management
using Pydantic for validation and type safety.
"""

from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Registration dashboard configuration settings.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Registration backend
    form_data_api_url: str = Field(
        default="https://invente.blitzdnd.com/api/getFormData",
        description="Endpoint returning completed and incomplete sessions"
    )
    form_data_api_token: Optional[str] = Field(
        default=None,
        description="Bearer token sent in the Authorization header"
    )
    form_data_api_timeout: int = Field(
        default=30,
        description="Timeout in seconds for the form data request"
    )
    proof_base_url: str = Field(
        default="https://invente.blitzdnd.com/",
        description="Base URL that payment proof paths are appended to"
    )

    # Presentation / export
    display_timezone: str = Field(
        default="UTC",
        description="IANA timezone used when formatting registration times"
    )
    export_dir: str = Field(
        default=".",
        description="Directory the CLI writes exported workbooks to"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="text",
        description="Logging format (json or text)"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    @field_validator("display_timezone")
    @classmethod
    def check_display_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Configured settings instance
    """
    return Settings()
