"""
HTTP surface: landing page and metrics endpoint.
"""

from .server import EXPOSITION_KEY, MetricsServer, create_web_app

__all__ = [
    "EXPOSITION_KEY",
    "MetricsServer",
    "create_web_app",
]
