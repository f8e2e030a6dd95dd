"""Configuration loading for the endpoints store.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Remote API configuration
    endpoints_root_url: str = Field(
        default="http://localhost:8080/_ah/api",
        description="Root URL of the Cloud Endpoints API",
    )
    endpoints_api_name: str = Field(
        default="",
        description="Name of the Endpoints API",
    )
    endpoints_api_version: str = Field(
        default="v1",
        description="Version of the Endpoints API",
    )
    endpoints_resource: str = Field(
        default="",
        description="Resource collection the store methods live on",
    )
    endpoints_auth_token: str = Field(
        default="",
        description="OAuth bearer token sent with every call",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        description="HTTP timeout for remote calls in seconds",
    )

    # Store configuration
    id_property: str = Field(
        default="id",
        description="Identity field of every record",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    # Development
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging",
    )

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_request_timeout(cls, v: float) -> float:
        """Ensure request timeout is positive."""
        if v <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        return v

    @field_validator("id_property")
    @classmethod
    def validate_id_property(cls, v: str) -> str:
        """Ensure the identity field name is not blank."""
        if not v.strip():
            raise ValueError("id_property must be a non-empty string")
        return v

    @field_validator("endpoints_root_url")
    @classmethod
    def validate_root_url(cls, v: str) -> str:
        """Ensure the root URL is an http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("endpoints_root_url must start with http:// or https://")
        return v.rstrip("/")


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
