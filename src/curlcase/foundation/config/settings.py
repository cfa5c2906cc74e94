"""Environment-based configuration using pydantic-settings.

Example:
    >>> from curlcase.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.server.name
    'curl-api'

    # Or with environment variables:
    # CURLCASE_LOG_LEVEL=DEBUG
    # CURLCASE_HTTP_FOLLOW_REDIRECTS=false
    # CURLCASE_SERVER_TRANSPORT=sse
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, PositiveInt, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CURLCASE_LOG_", extra="ignore")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class HttpSettings(BaseSettings):
    """Transport behaviour shared by every outbound request."""

    model_config = SettingsConfigDict(env_prefix="CURLCASE_HTTP_", extra="ignore")

    follow_redirects: bool = True
    max_redirects: Annotated[int, Field(ge=0, le=50)] = 20
    verify_ssl: bool = True


class ServerSettings(BaseSettings):
    """Identity and transport of the MCP / HTTP server."""

    model_config = SettingsConfigDict(env_prefix="CURLCASE_SERVER_", extra="ignore")

    name: str = "curl-api"
    version: str = "1.0.0"
    transport: Literal["stdio", "sse", "streamable-http"] = "stdio"
    host: str = "127.0.0.1"
    port: PositiveInt = 8080


class CurlcaseSettings(BaseSettings):
    """Root settings. Loads CURLCASE_* variables and an optional .env file.

    Example environment variables:
        CURLCASE_DEBUG=true
        CURLCASE_LOG_FORMAT=json
        CURLCASE_HTTP_VERIFY_SSL=false
        CURLCASE_SERVER_PORT=9000
    """

    model_config = SettingsConfigDict(
        env_prefix="CURLCASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = False

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @computed_field
    @property
    def log_level(self) -> str:
        """Effective log level (debug mode forces DEBUG)."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> CurlcaseSettings:
    """Get the process-wide settings instance (cached)."""
    return CurlcaseSettings()


def clear_settings_cache() -> None:
    """Drop the cached settings so the next get_settings() rereads the environment."""
    get_settings.cache_clear()
