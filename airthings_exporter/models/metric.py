"""
Metric models: descriptors, decoded readings and emitted records.
"""

from dataclasses import dataclass
from enum import Enum


class MetricKind(Enum):
    """Sensor reading keys understood by the exporter."""

    BATTERY = "battery"
    CO2 = "co2"
    HUMIDITY = "humidity"
    PM1 = "pm1"
    PM25 = "pm25"
    PRESSURE = "pressure"
    RADON = "radonShortTermAvg"
    TEMPERATURE = "temp"
    VOC = "voc"


class ValueKind(Enum):
    """Prometheus value type of an exported metric."""

    GAUGE = "gauge"


@dataclass(frozen=True)
class MetricDescriptor:
    """Static metadata of one exported metric."""

    kind: MetricKind
    exported_name: str
    help_text: str
    value_kind: ValueKind
    label_names: tuple[str, ...]


@dataclass(frozen=True)
class SampleReading:
    """One numeric reading decoded from a latest-samples response."""

    kind: MetricKind
    value: float


@dataclass(frozen=True)
class MetricRecord:
    """A metric sample ready for exposition."""

    descriptor: MetricDescriptor
    value: float
    labels: tuple[str, ...]
