"""
Scrape-driven metric collectors.
"""

from .airthings import AirthingsCollector
from .base import Collector, ScrapeResult
from .inventory import DeviceInventory

__all__ = [
    "Collector",
    "ScrapeResult",
    "DeviceInventory",
    "AirthingsCollector",
]
