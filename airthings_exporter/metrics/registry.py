"""
Static table mapping sensor reading keys to exported gauges.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from ..const import LABEL_NAMES, NAMESPACE, SUBSYSTEM
from ..models.metric import MetricDescriptor, MetricKind, SampleReading, ValueKind


def build_fq_name(namespace: str, subsystem: str, name: str) -> str:
    """Join non-empty name parts with underscores."""
    return "_".join(part for part in (namespace, subsystem, name) if part)


def new_metric(kind: MetricKind, name: str, help_text: str) -> MetricDescriptor:
    """Create a gauge descriptor in the exporter's namespace."""
    return MetricDescriptor(
        kind=kind,
        exported_name=build_fq_name(NAMESPACE, SUBSYSTEM, name),
        help_text=help_text,
        value_kind=ValueKind.GAUGE,
        label_names=LABEL_NAMES,
    )


def is_numeric(value: Any) -> bool:
    """JSON numbers only; booleans are not readings."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class MetricRegistry:
    """
    Lookup table of exported metric descriptors.

    Keys are the raw reading names used by the API (``co2``, ``temp``,
    ``radonShortTermAvg``...). Lookup is exact; keys not in the table
    are ignored.
    """

    def __init__(self, descriptors: Iterable[MetricDescriptor]):
        self._by_key: dict[str, MetricDescriptor] = {d.kind.value: d for d in descriptors}

    @property
    def descriptors(self) -> list[MetricDescriptor]:
        return list(self._by_key.values())

    def lookup(self, key: str) -> MetricDescriptor | None:
        return self._by_key.get(key)

    def decode(self, samples: Mapping[str, Any]) -> list[SampleReading]:
        """
        Decode a latest-samples ``data`` object into readings.

        Unknown keys and non-numeric values are dropped silently.
        """
        readings = []
        for key, value in samples.items():
            descriptor = self._by_key.get(key)
            if descriptor is None or not is_numeric(value):
                continue
            readings.append(SampleReading(kind=descriptor.kind, value=float(value)))
        return readings

    def __len__(self) -> int:
        return len(self._by_key)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key


DEFAULT_REGISTRY = MetricRegistry([
    new_metric(MetricKind.BATTERY, "battery", "Battery charge capacity"),
    new_metric(MetricKind.CO2, "co2", "CO2 levels"),
    new_metric(MetricKind.HUMIDITY, "humidity", "Humidity"),
    new_metric(MetricKind.PM1, "pm1", "Extremely fine particles, less than 1 microns"),
    new_metric(MetricKind.PM25, "pm25", "Fine particles, less than 2.5 microns"),
    new_metric(MetricKind.PRESSURE, "air_pressure", "Pressure"),
    new_metric(MetricKind.RADON, "radon", "Radon, short term average"),
    new_metric(MetricKind.TEMPERATURE, "temperature", "Temperature"),
    new_metric(MetricKind.VOC, "voc", "Volatile organic compounds"),
])
