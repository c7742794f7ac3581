"""
Device models.

``DeviceRecord`` mirrors one entry of the ``/v1/devices`` response;
``Device`` is the reduced form kept in the inventory and used for labels.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SegmentRecord:
    """Segment a device is currently assigned to."""

    id: str = ""
    name: str = ""
    active: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> SegmentRecord:
        if not isinstance(data, dict):
            return cls()
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            active=bool(data.get("active", False)),
        )


@dataclass(frozen=True)
class LocationRecord:
    """Location a device is placed in."""

    id: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> LocationRecord:
        if not isinstance(data, dict):
            return cls()
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
        )


@dataclass(frozen=True)
class DeviceRecord:
    """Device entry as returned by the inventory endpoint."""

    id: str
    device_type: str = ""
    sensors: tuple[str, ...] = ()
    segment: SegmentRecord = field(default_factory=SegmentRecord)
    location: LocationRecord = field(default_factory=LocationRecord)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeviceRecord:
        """
        Build a record from one decoded JSON object.

        Missing nested objects fall back to empty values.
        """
        sensors = data.get("sensors") or []
        return cls(
            id=str(data.get("id") or ""),
            device_type=str(data.get("deviceType") or ""),
            sensors=tuple(str(s) for s in sensors) if isinstance(sensors, list) else (),
            segment=SegmentRecord.from_dict(data.get("segment")),
            location=LocationRecord.from_dict(data.get("location")),
        )

    def to_device(self) -> Device:
        """Reduce to the labels used for exported metrics."""
        return Device(id=self.id, segment=self.segment.name, location=self.location.name)


@dataclass(frozen=True)
class Device:
    """A known sensor device and its display labels."""

    id: str
    segment: str = ""
    location: str = ""

    @property
    def labels(self) -> tuple[str, str, str]:
        """Label values in (device, segment, location) order."""
        return (self.id, self.segment, self.location)
