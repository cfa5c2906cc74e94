"""Environment-driven configuration."""

from .settings import (
    CurlcaseSettings,
    HttpSettings,
    LoggingSettings,
    ServerSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "CurlcaseSettings", "HttpSettings", "LoggingSettings", "ServerSettings",
    "get_settings", "clear_settings_cache",
]
