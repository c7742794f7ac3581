"""
Tests for constants.
"""

from airthings_exporter import __version__
from airthings_exporter.const import APP_NAME, APP_VERSION, INVENTORY_TTL, LABEL_NAMES, METRICS_PATH


def test_constants():
    """Test that constants are defined."""
    assert APP_NAME == "Airthings Exporter"
    assert APP_VERSION == __version__
    assert INVENTORY_TTL == 1800.0
    assert LABEL_NAMES == ("device", "segment", "location")
    assert METRICS_PATH == "/metrics"
