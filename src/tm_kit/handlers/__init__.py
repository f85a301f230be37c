from .base import DefaultMapHandler, MapHandler
from .delegating import DelegatingMapHandler
from .logging_handler import LoggingMapHandler
from .simple import SimpleMapHandler

__all__ = [
    "DefaultMapHandler",
    "DelegatingMapHandler",
    "LoggingMapHandler",
    "MapHandler",
    "SimpleMapHandler",
]
