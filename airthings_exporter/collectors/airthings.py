"""
Airthings cloud collector.

One scrape:
1. obtain an access token (failure aborts the scrape)
2. refresh the device inventory if it is stale
3. fetch the latest samples of every known device
4. map numeric readings through the metric registry

Scrapes are serialized: the whole sequence runs under one lock, so the
inventory is never replaced while it is being read and at most one burst
of API calls is in flight.
"""

import asyncio
import time
from collections.abc import Callable
from functools import partial

from ..api.auth import TokenSource
from ..api.client import AirthingsClient
from ..api.exceptions import ApiError, AuthError
from ..logging import get_logger
from ..metrics.registry import DEFAULT_REGISTRY, MetricRegistry
from ..models.device import Device
from ..models.metric import MetricDescriptor, MetricRecord
from .base import Collector, ScrapeResult
from .inventory import DeviceInventory


logger = get_logger("collectors.airthings")


class AirthingsCollector(Collector):
    """Collects the latest readings of all Airthings devices on an account."""

    def __init__(
        self,
        client: AirthingsClient,
        token_source: TokenSource,
        registry: MetricRegistry = DEFAULT_REGISTRY,
        inventory: DeviceInventory | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize collector.

        Args:
            client: API client for inventory and sample requests
            token_source: Supplies bearer tokens
            registry: Reading key to metric descriptor table
            inventory: Device cache (a fresh, empty one if not given)
            clock: Wall-clock time source in seconds
        """
        super().__init__("airthings")
        self.client = client
        self.token_source = token_source
        self.registry = registry
        self.inventory = inventory if inventory is not None else DeviceInventory()
        self._clock = clock
        self._lock = asyncio.Lock()

    def describe(self) -> list[MetricDescriptor]:
        return self.registry.descriptors

    async def scrape(self) -> ScrapeResult:
        async with self._lock:
            started = time.perf_counter()
            result = ScrapeResult()
            try:
                await self._scrape(result)
            finally:
                result.duration = time.perf_counter() - started
                result.device_count = len(self.inventory)
                result.last_refresh = self.inventory.last_refresh
                result.last_refresh_ok = self.inventory.last_refresh_ok
                self._last_result = result
            return result

    async def _scrape(self, result: ScrapeResult) -> None:
        token = await self._get_token(result)
        if token is None:
            return

        now = self._clock()
        if self.inventory.is_stale(now):
            await self.inventory.refresh(partial(self.client.fetch_inventory, token), now)

        # The inventory refresh may have outlived the token
        token = await self._get_token(result)
        if token is None:
            return

        for device in self.inventory.devices:
            try:
                samples = await self.client.fetch_latest_samples(token, device.id)
            except ApiError as e:
                logger.error(
                    "Failed to get metrics for device",
                    extra={"op": "latest-samples", "device": device.id, "err": e},
                )
                result.device_errors += 1
                continue

            logger.debug("Airthings metrics received", extra={"device": device.id})

            for record in self._records(device, samples):
                result.add(record)

    async def _get_token(self, result: ScrapeResult) -> str | None:
        try:
            return await self.token_source.get_token()
        except AuthError as e:
            logger.error(
                "Failed to get access token, will try again later",
                extra={"op": "token", "err": e},
            )
            result.set_error(str(e))
            return None

    def _records(self, device: Device, samples: dict) -> list[MetricRecord]:
        records = []
        for reading in self.registry.decode(samples):
            descriptor = self.registry.lookup(reading.kind.value)
            if descriptor is None:
                continue
            records.append(MetricRecord(descriptor=descriptor, value=reading.value, labels=device.labels))
        return records
