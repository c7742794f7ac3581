"""
Configuration schema and loading.
"""

from .loader import ConfigError, ConfigLoader
from .schema import ApiConfig, AuthConfig, Config, LoggingConfig, WebConfig

__all__ = [
    "Config",
    "AuthConfig",
    "ApiConfig",
    "WebConfig",
    "LoggingConfig",
    "ConfigLoader",
    "ConfigError",
]
