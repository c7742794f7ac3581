"""
Entry point for Airthings Exporter.

Usage:
    python -m airthings_exporter --airthings.cloud.auth.client.id ID --airthings.cloud.auth.client.secret SECRET
    python -m airthings_exporter --help
"""

import argparse
import asyncio
import sys

from . import __version__
from .app import run_app
from .config.loader import ConfigError, ConfigLoader
from .config.schema import Config
from .const import DEFAULT_API_URL, DEFAULT_LISTEN_ADDRESS, DEFAULT_REQUEST_TIMEOUT, DEFAULT_SCOPES, DEFAULT_TOKEN_URL
from .logging import LogConfig, get_logger, setup_logging


logger = get_logger("main")


def build_parser() -> argparse.ArgumentParser:
    """Command-line parser; flag names follow the Go exporter's."""
    parser = argparse.ArgumentParser(
        prog="airthings-exporter",
        description="Prometheus exporter for Airthings devices via the Airthings cloud API",
    )

    parser.add_argument(
        "--airthings.cloud.auth.client.id",
        dest="client_id",
        metavar="ID",
        help="Airthings Cloud API Client ID (env: AIRTHINGS_CLIENT_ID)",
    )

    parser.add_argument(
        "--airthings.cloud.auth.client.secret",
        dest="client_secret",
        metavar="SECRET",
        help="Airthings Cloud API Client Secret (env: AIRTHINGS_CLIENT_SECRET)",
    )

    parser.add_argument(
        "--airthings.cloud.auth.scopes",
        dest="auth_scopes",
        metavar="SCOPES",
        default=DEFAULT_SCOPES,
        help=f"Airthings Cloud API Scopes, comma-separated (default: {DEFAULT_SCOPES})",
    )

    parser.add_argument(
        "--airthings.cloud.auth.url",
        dest="token_url",
        metavar="URL",
        default=DEFAULT_TOKEN_URL,
        help=f"Airthings Cloud API Token URL (default: {DEFAULT_TOKEN_URL})",
    )

    parser.add_argument(
        "--airthings.cloud.api.url",
        dest="api_url",
        metavar="URL",
        default=DEFAULT_API_URL,
        help=f"Airthings Cloud API base URL (default: {DEFAULT_API_URL})",
    )

    parser.add_argument(
        "--airthings.cloud.api.timeout",
        dest="api_timeout",
        metavar="SECONDS",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT,
        help=f"Timeout for each API request (default: {DEFAULT_REQUEST_TIMEOUT:g})",
    )

    parser.add_argument(
        "--web.listen-address",
        dest="listen_address",
        metavar="ADDRESS",
        default=DEFAULT_LISTEN_ADDRESS,
        help=f"Address to listen on for web interface and telemetry (default: {DEFAULT_LISTEN_ADDRESS})",
    )

    parser.add_argument(
        "--log.level",
        dest="log_level",
        metavar="LEVEL",
        default="info",
        help="Only log messages with the given severity or above: debug, info, warning, error",
    )

    parser.add_argument(
        "--log.format",
        dest="log_format",
        metavar="FORMAT",
        default="plain",
        help="Output format of log messages: plain, json",
    )

    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Also write logs to a rotating file",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def log_config_from(config: Config) -> LogConfig:
    """Translate the logging section into a LogConfig."""
    return LogConfig(
        console_level=config.logging.level,
        console_colors=config.logging.colors,
        style=config.logging.style,
        file_enabled=config.logging.file is not None,
        file_path=config.logging.file or LogConfig.file_path,
        file_level=config.logging.file_level,
        file_max_bytes=config.logging.file_max_size * 1024 * 1024,
        file_backup_count=config.logging.file_keep,
    )


def print_summary(config: Config, warnings: list[str]) -> None:
    """Print configuration summary for --validate."""
    if warnings:
        print(f"Configuration warnings ({len(warnings)}):")
        for warning in warnings:
            print(f"  - {warning}")

    print("\nConfiguration summary:")
    print(f"  Client ID: {config.auth.client_id}")
    print(f"  Scopes: {', '.join(config.auth.scopes)}")
    print(f"  Token URL: {config.auth.token_url}")
    print(f"  API URL: {config.api.base_url} (timeout {config.api.timeout:g}s)")
    print(f"  Listen address: {config.web.listen_address}")
    print(f"  Logging level: {config.logging.level}")
    if config.logging.file:
        print(f"  Log file: {config.logging.file}")

    print("\nConfiguration is valid!")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    loader = ConfigLoader()
    try:
        config = loader.load_args(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    warnings = loader.validate(config)

    if args.validate:
        print_summary(config, warnings)
        return 0

    setup_logging(log_config_from(config))
    for warning in warnings:
        logger.warning(f"Config warning: {warning}")

    try:
        asyncio.run(run_app(config))
        return 0
    except OSError as e:
        logger.error(f"Error starting HTTP server: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
