"""
Tests for the HTTP surface.
"""

import pytest
from aiohttp import test_utils

from airthings_exporter.metrics.exposition import MetricsExposition
from airthings_exporter.web.server import MetricsServer, create_web_app

from fakes import FakeClient, device_json


@pytest.fixture
def exposition(make_collector) -> MetricsExposition:
    client = FakeClient(devices=[device_json("d1")], samples={"d1": {"humidity": 38.0}})
    return MetricsExposition(make_collector(client), runtime_metrics=False)


@pytest.mark.asyncio
async def test_landing_page_links_metrics(exposition) -> None:
    async with test_utils.TestClient(test_utils.TestServer(create_web_app(exposition))) as client:
        response = await client.get("/")
        text = await response.text()

    assert response.status == 200
    assert response.content_type == "text/html"
    assert "<title>Airthings Exporter</title>" in text
    assert 'href="/metrics"' in text


@pytest.mark.asyncio
async def test_metrics_endpoint_serves_scrape(exposition) -> None:
    async with test_utils.TestClient(test_utils.TestServer(create_web_app(exposition))) as client:
        response = await client.get("/metrics")
        text = await response.text()

    assert response.status == 200
    assert response.headers["Content-Type"].startswith("text/plain")
    assert 'airthings_cloud_humidity{device="d1",location="HQ",segment="Office"} 38.0' in text


@pytest.mark.asyncio
async def test_other_paths_are_not_found(exposition) -> None:
    async with test_utils.TestClient(test_utils.TestServer(create_web_app(exposition))) as client:
        response = await client.get("/healthz")

    assert response.status == 404


@pytest.mark.asyncio
async def test_server_start_and_stop(exposition) -> None:
    server = MetricsServer(create_web_app(exposition), "127.0.0.1", test_utils.unused_port())

    await server.start()
    assert server.running
    await server.stop()
    assert not server.running
