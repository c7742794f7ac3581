"""
Base collector interface for scrape-driven metric collection.

A collector describes the metrics it can produce and runs one scrape
per call. Scrapes are triggered from outside (an HTTP request), not
on a timer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime

from ..models.metric import MetricDescriptor, MetricRecord


@dataclass
class ScrapeResult:
    """Outcome of one scrape."""

    # Metric samples produced by the scrape
    records: list[MetricRecord] = field(default_factory=list)

    # False when the scrape was aborted before fetching any data
    up: bool = True

    # Error message if the scrape was aborted
    error: str | None = None

    # Wall time spent in the scrape, seconds
    duration: float = 0.0

    # Inventory state when the scrape finished
    device_count: int = 0
    device_errors: int = 0
    last_refresh: float | None = None
    last_refresh_ok: bool | None = None

    timestamp: datetime = field(default_factory=datetime.now)

    def add(self, record: MetricRecord) -> None:
        """Append one metric sample."""
        self.records.append(record)

    def set_error(self, error: str) -> None:
        """Mark the scrape as aborted, discarding any samples."""
        self.up = False
        self.error = error
        self.records = []

    def __repr__(self) -> str:
        status = "OK" if self.up else f"ERROR: {self.error}"
        return f"ScrapeResult({len(self.records)} records, {self.device_count} devices, {status})"


class Collector(ABC):
    """
    Abstract base class for scrape-driven collectors.

    Subclasses implement describe() and scrape(); collect() is the
    record-only view of scrape().
    """

    def __init__(self, name: str):
        self.name = name
        self._last_result: ScrapeResult | None = None

    @abstractmethod
    def describe(self) -> list[MetricDescriptor]:
        """
        List every metric this collector may emit.

        Must not perform I/O.
        """
        pass

    @abstractmethod
    async def scrape(self) -> ScrapeResult:
        """Run one scrape and return samples with scrape status."""
        pass

    async def collect(self) -> list[MetricRecord]:
        """Run one scrape and return only its metric samples."""
        result = await self.scrape()
        return result.records

    @property
    def last_result(self) -> ScrapeResult | None:
        """Result of the most recent completed scrape."""
        return self._last_result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"
