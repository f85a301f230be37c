from .bom import BOMInputStream
from .source import Source

__all__ = [
    "BOMInputStream",
    "Source",
]
