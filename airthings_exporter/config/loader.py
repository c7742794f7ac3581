"""
Configuration loader with environment fallbacks and validation.
"""

import argparse
import os
from collections.abc import Mapping
from urllib.parse import urlparse

from .schema import Config, parse_listen_address


ENV_CLIENT_ID = "AIRTHINGS_CLIENT_ID"
ENV_CLIENT_SECRET = "AIRTHINGS_CLIENT_SECRET"

LOG_LEVELS = ("debug", "info", "warning", "warn", "error", "critical")
LOG_STYLES = ("plain", "json")


class ConfigError(Exception):
    """Exception raised for configuration errors."""

    pass


class ConfigLoader:
    """
    Builds and checks configuration from parsed command-line arguments.

    Usage:
        loader = ConfigLoader()
        config = loader.load_args(parser.parse_args())
        for warning in loader.validate(config):
            ...
    """

    def __init__(self, environ: Mapping[str, str] | None = None):
        self.environ = os.environ if environ is None else environ

    def load_args(self, args: argparse.Namespace) -> Config:
        """
        Create configuration from command-line arguments.

        Credentials not given on the command line are read from
        AIRTHINGS_CLIENT_ID / AIRTHINGS_CLIENT_SECRET.

        Raises:
            ConfigError: If a setting is missing or malformed
        """
        config = Config.from_args(args)

        if not config.auth.client_id:
            config.auth.client_id = self.environ.get(ENV_CLIENT_ID, "")
        if not config.auth.client_secret:
            config.auth.client_secret = self.environ.get(ENV_CLIENT_SECRET, "")

        self._check(config)
        return config

    def _check(self, config: Config) -> None:
        """Raise ConfigError on the first fatal problem."""
        if not config.auth.client_id:
            raise ConfigError(f"Client ID is required (--airthings.cloud.auth.client.id or {ENV_CLIENT_ID})")
        if not config.auth.client_secret:
            raise ConfigError(
                f"Client secret is required (--airthings.cloud.auth.client.secret or {ENV_CLIENT_SECRET})"
            )
        if not config.auth.scopes:
            raise ConfigError("At least one auth scope is required")

        for name, url in (("token URL", config.auth.token_url), ("API URL", config.api.base_url)):
            parsed = urlparse(url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ConfigError(f"Invalid {name}: {url!r}")

        if config.api.timeout <= 0:
            raise ConfigError(f"API timeout must be positive, got {config.api.timeout}")

        try:
            parse_listen_address(config.web.listen_address)
        except ValueError as e:
            raise ConfigError(str(e)) from e

        if config.logging.level.lower() not in LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {config.logging.level!r}")
        if config.logging.style not in LOG_STYLES:
            raise ConfigError(f"Unknown log format: {config.logging.style!r}")

    def validate(self, config: Config) -> list[str]:
        """
        Check configuration for non-fatal issues.

        Returns:
            List of warning messages
        """
        warnings = []

        if urlparse(config.auth.token_url).scheme == "http":
            warnings.append(f"Token URL {config.auth.token_url} is not HTTPS; credentials are sent in clear text")

        if urlparse(config.api.base_url).scheme == "http":
            warnings.append(f"API URL {config.api.base_url} is not HTTPS")

        if config.api.timeout > 60:
            warnings.append(f"API timeout of {config.api.timeout}s may exceed the Prometheus scrape timeout")

        return warnings
