"""
Device inventory cache.

The device list changes rarely and the API is rate limited, so it is
re-read at most once per TTL. The refresh timestamp advances after every
attempt, failed or not: a broken inventory endpoint is retried no sooner
than one TTL later, and the previous device list stays in use meanwhile.
"""

from collections.abc import Awaitable, Callable

from ..api.exceptions import ApiError
from ..const import INVENTORY_TTL
from ..logging import get_logger
from ..models.device import Device, DeviceRecord


logger = get_logger("collectors.inventory")


class DeviceInventory:
    """Last known device list plus the time it was last refreshed."""

    def __init__(self, ttl: float = INVENTORY_TTL):
        self.ttl = ttl
        self._devices: tuple[Device, ...] = ()
        self._last_refresh: float | None = None
        self._last_refresh_ok: bool | None = None

    @property
    def devices(self) -> tuple[Device, ...]:
        return self._devices

    @property
    def last_refresh(self) -> float | None:
        """Time of the last refresh attempt, None before the first."""
        return self._last_refresh

    @property
    def last_refresh_ok(self) -> bool | None:
        """Outcome of the last refresh attempt, None before the first."""
        return self._last_refresh_ok

    def is_stale(self, now: float) -> bool:
        """Check if a refresh is due."""
        return self._last_refresh is None or now - self._last_refresh > self.ttl

    async def refresh(
        self,
        fetch: Callable[[], Awaitable[list[DeviceRecord]]],
        now: float,
    ) -> bool:
        """
        Replace the device list with a freshly fetched one.

        Args:
            fetch: Coroutine factory returning the current device records
            now: Time of this attempt

        Returns:
            True if the device list was replaced
        """
        try:
            records = await fetch()
        except ApiError as e:
            logger.error(
                "Failed to get devices, will try again later",
                extra={"op": "devices", "err": e},
            )
            self._last_refresh_ok = False
            return False
        finally:
            self._last_refresh = now

        devices = []
        for record in records:
            device = record.to_device()
            logger.info(
                "Updating device",
                extra={"device": device.id, "segment": device.segment, "location": device.location},
            )
            devices.append(device)

        self._devices = tuple(devices)
        self._last_refresh_ok = True
        return True

    def __len__(self) -> int:
        return len(self._devices)

    def __repr__(self) -> str:
        return f"DeviceInventory({len(self._devices)} devices, last_refresh={self._last_refresh})"
