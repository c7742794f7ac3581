"""
Airthings Exporter - Prometheus exporter for the Airthings cloud API.
"""

__version__ = "0.1.0"
