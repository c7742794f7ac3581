"""
Configuration schema with dataclasses for type safety.

Each section is built from the parsed command line; see loader.py for
environment fallbacks and validation.
"""

import argparse
from dataclasses import dataclass, field

from ..const import (
    DEFAULT_API_URL,
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SCOPES,
    DEFAULT_TOKEN_URL,
)


def split_scopes(value: str | None) -> list[str]:
    """Split a comma-separated scope list, dropping blanks."""
    if not value:
        return []
    return [scope.strip() for scope in value.split(",") if scope.strip()]


def parse_listen_address(address: str) -> tuple[str | None, int]:
    """
    Parse a ``[host]:port`` listen address.

    An empty host means all interfaces; IPv6 hosts are written in
    brackets (``[::1]:9101``).

    Raises:
        ValueError: If the address is malformed
    """
    host, sep, port_str = address.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in listen address {address!r}")

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        raise ValueError(f"IPv6 host must be bracketed in listen address {address!r}")

    try:
        port = int(port_str)
    except ValueError:
        raise ValueError(f"invalid port in listen address {address!r}") from None

    if not 0 < port < 65536:
        raise ValueError(f"port out of range in listen address {address!r}")

    return host or None, port


@dataclass
class AuthConfig:
    """OAuth2 client-credentials settings."""
    client_id: str = ""
    client_secret: str = ""
    scopes: list[str] = field(default_factory=lambda: split_scopes(DEFAULT_SCOPES))
    token_url: str = DEFAULT_TOKEN_URL

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "AuthConfig":
        return cls(
            client_id=args.client_id or "",
            client_secret=args.client_secret or "",
            scopes=split_scopes(args.auth_scopes),
            token_url=args.token_url,
        )


@dataclass
class ApiConfig:
    """Airthings API endpoint settings."""
    base_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "ApiConfig":
        return cls(base_url=args.api_url, timeout=float(args.api_timeout))


@dataclass
class WebConfig:
    """HTTP listener settings."""
    listen_address: str = DEFAULT_LISTEN_ADDRESS

    @property
    def host(self) -> str | None:
        return parse_listen_address(self.listen_address)[0]

    @property
    def port(self) -> int:
        return parse_listen_address(self.listen_address)[1]

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "WebConfig":
        return cls(listen_address=args.listen_address)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "info"  # debug, info, warning, error
    style: str = "plain"  # plain, json
    file: str | None = None  # Log file path
    file_level: str = "debug"  # File log level
    file_max_size: int = 10  # Max file size in MB
    file_keep: int = 5  # Number of backup files to keep
    colors: bool = True  # Colored console output

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "LoggingConfig":
        return cls(
            level=args.log_level,
            style=args.log_format,
            file=args.log_file,
            colors=not args.no_color,
        )


@dataclass
class Config:
    """Root configuration."""
    auth: AuthConfig = field(default_factory=AuthConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    web: WebConfig = field(default_factory=WebConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Config":
        return cls(
            auth=AuthConfig.from_args(args),
            api=ApiConfig.from_args(args),
            web=WebConfig.from_args(args),
            logging=LoggingConfig.from_args(args),
        )
