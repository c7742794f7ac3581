"""
Tests for configuration loading and validation.
"""

import pytest

from airthings_exporter.__main__ import build_parser, log_config_from
from airthings_exporter.config.loader import ConfigError, ConfigLoader
from airthings_exporter.config.schema import parse_listen_address, split_scopes
from airthings_exporter.const import DEFAULT_API_URL, DEFAULT_TOKEN_URL


CREDENTIALS = [
    "--airthings.cloud.auth.client.id", "client",
    "--airthings.cloud.auth.client.secret", "secret",
]


def load(argv: list[str], environ: dict[str, str] | None = None):
    return ConfigLoader(environ=environ or {}).load_args(build_parser().parse_args(argv))


def test_defaults() -> None:
    config = load(CREDENTIALS)

    assert config.auth.client_id == "client"
    assert config.auth.client_secret == "secret"
    assert config.auth.scopes == ["read:device:current_values"]
    assert config.auth.token_url == DEFAULT_TOKEN_URL
    assert config.api.base_url == DEFAULT_API_URL
    assert config.api.timeout == 30.0
    assert config.web.host is None
    assert config.web.port == 9101
    assert config.logging.level == "info"
    assert config.logging.style == "plain"


def test_scopes_are_comma_separated() -> None:
    config = load(CREDENTIALS + ["--airthings.cloud.auth.scopes", "read:device:current_values, profile"])

    assert config.auth.scopes == ["read:device:current_values", "profile"]


def test_credentials_from_environment() -> None:
    config = load([], environ={"AIRTHINGS_CLIENT_ID": "env-id", "AIRTHINGS_CLIENT_SECRET": "env-secret"})

    assert config.auth.client_id == "env-id"
    assert config.auth.client_secret == "env-secret"


def test_flags_take_precedence_over_environment() -> None:
    config = load(CREDENTIALS, environ={"AIRTHINGS_CLIENT_ID": "env-id"})

    assert config.auth.client_id == "client"


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["--airthings.cloud.auth.client.id", "client"],
        CREDENTIALS + ["--airthings.cloud.auth.scopes", " , "],
        CREDENTIALS + ["--airthings.cloud.auth.url", "accounts-api.airthings.com/v1/token"],
        CREDENTIALS + ["--airthings.cloud.api.url", "ftp://example.com"],
        CREDENTIALS + ["--airthings.cloud.api.timeout", "0"],
        CREDENTIALS + ["--web.listen-address", "9101"],
        CREDENTIALS + ["--log.level", "verbose"],
        CREDENTIALS + ["--log.format", "logfmt"],
    ],
)
def test_fatal_problems_raise_config_error(argv: list[str]) -> None:
    with pytest.raises(ConfigError):
        load(argv)


def test_validate_warns_about_plain_http() -> None:
    loader = ConfigLoader(environ={})
    config = loader.load_args(build_parser().parse_args(
        CREDENTIALS + ["--airthings.cloud.auth.url", "http://localhost:8080/token"]
    ))

    warnings = loader.validate(config)

    assert len(warnings) == 1
    assert "not HTTPS" in warnings[0]


def test_default_config_has_no_warnings() -> None:
    loader = ConfigLoader(environ={})

    assert loader.validate(loader.load_args(build_parser().parse_args(CREDENTIALS))) == []


@pytest.mark.parametrize(
    ("address", "expected"),
    [
        (":9101", (None, 9101)),
        ("127.0.0.1:8080", ("127.0.0.1", 8080)),
        ("[::1]:9101", ("::1", 9101)),
        ("localhost:1", ("localhost", 1)),
    ],
)
def test_parse_listen_address(address: str, expected: tuple) -> None:
    assert parse_listen_address(address) == expected


@pytest.mark.parametrize("address", ["9101", "host:", "host:http", ":70000", "::1:9101"])
def test_parse_listen_address_rejects_malformed(address: str) -> None:
    with pytest.raises(ValueError):
        parse_listen_address(address)


def test_split_scopes() -> None:
    assert split_scopes("a,b , ,c") == ["a", "b", "c"]
    assert split_scopes("") == []
    assert split_scopes(None) == []


def test_log_config_from_args() -> None:
    config = load(CREDENTIALS + ["--log.level", "debug", "--log.format", "json", "--log-file", "/tmp/x.log", "--no-color"])

    log_config = log_config_from(config)

    assert log_config.console_level == "debug"
    assert log_config.style == "json"
    assert log_config.file_enabled is True
    assert log_config.file_path == "/tmp/x.log"
    assert log_config.console_colors is False
