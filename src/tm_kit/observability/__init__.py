from . import names
from .base import (
    InMemoryMetricsHook,
    Labels,
    MetricsHook,
    NoOpMetricsHook,
    syntax_labels,
)

__all__ = [
    "InMemoryMetricsHook",
    "Labels",
    "MetricsHook",
    "NoOpMetricsHook",
    "names",
    "syntax_labels",
]
