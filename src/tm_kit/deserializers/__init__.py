from .base import (
    Deserializer,
    DeserializerFactory,
    IRIContext,
    ParseLifecycle,
    ParseState,
    PropertyBag,
)
from .factory import (
    create_default_registry,
    create_deserializer,
    deserializer_for_file_extension,
    deserializer_for_filename,
    deserializer_for_mime_type,
)
from .registry import DeserializerRegistry
from .syntax import Syntax, SyntaxCatalog

__all__ = [
    "Deserializer",
    "DeserializerFactory",
    "DeserializerRegistry",
    "IRIContext",
    "ParseLifecycle",
    "ParseState",
    "PropertyBag",
    "Syntax",
    "SyntaxCatalog",
    "create_default_registry",
    "create_deserializer",
    "deserializer_for_file_extension",
    "deserializer_for_filename",
    "deserializer_for_mime_type",
]
