"""
Metric registry and Prometheus exposition.
"""

from .registry import DEFAULT_REGISTRY, MetricRegistry, build_fq_name

__all__ = [
    "DEFAULT_REGISTRY",
    "MetricRegistry",
    "build_fq_name",
]
