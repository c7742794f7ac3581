"""
Tests for application startup and shutdown.
"""

import asyncio
import socket

import aiohttp
import pytest
from aiohttp import test_utils

from airthings_exporter import app as app_module
from airthings_exporter.app import Application
from airthings_exporter.collectors.airthings import AirthingsCollector
from airthings_exporter.config.schema import AuthConfig, Config, WebConfig


def make_config(port: int) -> Config:
    return Config(
        auth=AuthConfig(client_id="client", client_secret="secret"),
        web=WebConfig(listen_address=f"127.0.0.1:{port}"),
    )


@pytest.mark.asyncio
async def test_start_wires_collector_and_server() -> None:
    app = Application(make_config(test_utils.unused_port()))

    await app.start()
    try:
        assert isinstance(app.collector, AirthingsCollector)
        assert app.collector.token_source.client_id == "client"
        assert app.server is not None and app.server.running
    finally:
        await app.stop()

    assert app.session is None
    assert not app.server.running


@pytest.mark.asyncio
async def test_run_returns_on_shutdown_request() -> None:
    app = Application(make_config(test_utils.unused_port()))

    task = asyncio.create_task(app.run())

    async def serving() -> None:
        while app.server is None or not app.server.running:
            if task.done():
                task.result()
                pytest.fail("run() returned before the server started")
            await asyncio.sleep(0.01)

    await asyncio.wait_for(serving(), timeout=5)
    app.request_shutdown()
    await asyncio.wait_for(task, timeout=5)

    assert app.session is None


@pytest.mark.asyncio
async def test_start_fails_on_busy_port() -> None:
    with socket.socket() as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen()
        port = busy.getsockname()[1]

        app = Application(make_config(port))
        with pytest.raises(OSError):
            await app.start()

    assert app.session is None


@pytest.mark.asyncio
async def test_start_closes_session_on_wiring_failure(monkeypatch) -> None:
    def broken_exposition(collector):
        raise RuntimeError("exposition unavailable")

    monkeypatch.setattr(app_module, "MetricsExposition", broken_exposition)
    app = Application(make_config(test_utils.unused_port()))

    with pytest.raises(RuntimeError, match="exposition unavailable"):
        await app.start()

    assert app.session is None
    assert app.server is None


@pytest.mark.asyncio
async def test_started_app_serves_metrics() -> None:
    app = Application(make_config(test_utils.unused_port()))

    await app.start()
    try:
        async with aiohttp.ClientSession() as session:
            url = f"http://127.0.0.1:{app.config.web.port}/"
            async with session.get(url) as response:
                assert response.status == 200
                assert "/metrics" in await response.text()
    finally:
        await app.stop()
