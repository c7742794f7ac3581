"""
Prometheus exposition of scrape results.

Each HTTP scrape runs one collector scrape and encodes its samples,
together with the exporter's own status gauges and runtime collectors,
through a throw-away prometheus_client registry.
"""

import platform
from collections.abc import Iterable, Iterator

from prometheus_client import CollectorRegistry, GCCollector, Info, PlatformCollector, ProcessCollector
from prometheus_client.core import GaugeMetricFamily, Metric
from prometheus_client.exposition import choose_encoder

from .. import __version__
from ..collectors.base import Collector, ScrapeResult
from ..const import NAMESPACE, SUBSYSTEM
from ..models.metric import MetricDescriptor
from .registry import build_fq_name


def _status_name(name: str) -> str:
    return build_fq_name(NAMESPACE, SUBSYSTEM, name)


# name -> help
STATUS_METRICS = {
    "up": "Whether the last scrape could authenticate against the Airthings API",
    "scrape_duration_seconds": "Time spent scraping the Airthings API",
    "devices": "Number of devices in the cached inventory",
    "device_errors": "Devices whose latest samples could not be fetched in the last scrape",
    "inventory_last_refresh_timestamp_seconds": "Time of the last inventory refresh attempt",
    "inventory_last_refresh_success": "Whether the last inventory refresh attempt succeeded",
}


def describe_families(descriptors: Iterable[MetricDescriptor]) -> list[GaugeMetricFamily]:
    """Sample-less metric families for the describe pass."""
    return [
        GaugeMetricFamily(d.exported_name, d.help_text, labels=list(d.label_names))
        for d in descriptors
    ]


def status_families(result: ScrapeResult) -> list[GaugeMetricFamily]:
    """Exporter status gauges for one scrape."""
    values = {
        "up": 1.0 if result.up else 0.0,
        "scrape_duration_seconds": result.duration,
        "devices": float(result.device_count),
        "device_errors": float(result.device_errors),
        "inventory_last_refresh_timestamp_seconds": result.last_refresh or 0.0,
        "inventory_last_refresh_success": 1.0 if result.last_refresh_ok else 0.0,
    }
    return [
        GaugeMetricFamily(_status_name(name), help_text, value=values[name])
        for name, help_text in STATUS_METRICS.items()
    ]


class ScrapeSnapshot:
    """prometheus_client collector serving one finished scrape."""

    def __init__(self, descriptors: list[MetricDescriptor], result: ScrapeResult):
        self.descriptors = descriptors
        self.result = result

    def describe(self) -> Iterator[Metric]:
        yield from describe_families(self.descriptors)
        for name, help_text in STATUS_METRICS.items():
            yield GaugeMetricFamily(_status_name(name), help_text)

    def collect(self) -> Iterator[Metric]:
        families = {
            d.exported_name: GaugeMetricFamily(d.exported_name, d.help_text, labels=list(d.label_names))
            for d in self.descriptors
        }
        for record in self.result.records:
            families[record.descriptor.exported_name].add_metric(list(record.labels), record.value)

        for family in families.values():
            if family.samples:
                yield family

        yield from status_families(self.result)


def build_info() -> Info:
    """Constant build information, like the version collector of Go exporters."""
    info = Info("airthings_exporter_build", "Airthings exporter build information", registry=None)
    info.info({"version": __version__, "pythonversion": platform.python_version()})
    return info


class MetricsExposition:
    """
    Renders the /metrics payload.

    Runtime collectors are created once and reused for every scrape.
    GCCollector always registers itself, so it is parked in a registry
    of its own.
    """

    def __init__(self, collector: Collector, runtime_metrics: bool = True):
        self.collector = collector
        self._static: list = [build_info()]
        if runtime_metrics:
            self._static.extend([
                ProcessCollector(registry=None),
                PlatformCollector(registry=None),
                GCCollector(registry=CollectorRegistry()),
            ])

    def registry_for(self, result: ScrapeResult) -> CollectorRegistry:
        """Registry holding one scrape result plus the static collectors."""
        registry = CollectorRegistry()
        registry.register(ScrapeSnapshot(self.collector.describe(), result))
        for static in self._static:
            registry.register(static)
        return registry

    async def render(self, accept: str | None = None) -> tuple[bytes, str]:
        """
        Scrape and encode.

        Args:
            accept: Request Accept header, selects text or OpenMetrics format

        Returns:
            Tuple of (body, content type)
        """
        result = await self.collector.scrape()
        encoder, content_type = choose_encoder(accept or "")
        return encoder(self.registry_for(result)), content_type
