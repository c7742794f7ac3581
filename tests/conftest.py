"""
Pytest configuration and fixtures.
"""

import pytest

from airthings_exporter.api.auth import TokenSource
from airthings_exporter.collectors.airthings import AirthingsCollector
from airthings_exporter.collectors.inventory import DeviceInventory

from fakes import FakeClient, FakeClock, FakeTokenSource


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token_source() -> FakeTokenSource:
    return FakeTokenSource()


@pytest.fixture
def make_collector(clock: FakeClock):
    """Factory building a collector around fakes."""

    def _make(
        client: FakeClient,
        token_source: TokenSource | None = None,
        inventory: DeviceInventory | None = None,
    ) -> AirthingsCollector:
        return AirthingsCollector(
            client,  # type: ignore[arg-type]
            token_source or FakeTokenSource(),
            inventory=inventory,
            clock=clock,
        )

    return _make
