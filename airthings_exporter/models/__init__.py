"""
Data models for devices and metrics.
"""

from .device import Device, DeviceRecord, LocationRecord, SegmentRecord
from .metric import MetricDescriptor, MetricKind, MetricRecord, SampleReading, ValueKind

__all__ = [
    "Device",
    "DeviceRecord",
    "SegmentRecord",
    "LocationRecord",
    "MetricKind",
    "MetricDescriptor",
    "MetricRecord",
    "SampleReading",
    "ValueKind",
]
