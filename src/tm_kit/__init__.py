# Deserializers
from .deserializers import (
    Deserializer,
    DeserializerFactory,
    DeserializerRegistry,
    IRIContext,
    ParseLifecycle,
    ParseState,
    PropertyBag,
    Syntax,
    SyntaxCatalog,
    create_default_registry,
    create_deserializer,
    deserializer_for_file_extension,
    deserializer_for_filename,
    deserializer_for_mime_type,
)

# Errors
from .errors import (
    ArgumentError,
    ConfigurationError,
    InvalidQNameError,
    MalformedReferenceError,
    MapSyntaxError,
    TopicMapError,
    UnexpectedCharacterError,
    UnterminatedTokenError,
)

# Handlers
from .handlers import (
    DefaultMapHandler,
    DelegatingMapHandler,
    LoggingMapHandler,
    MapHandler,
    SimpleMapHandler,
)

# I/O
from .io import BOMInputStream, Source

# LTM
from .ltm import LTMDeserializer, LTMDeserializerFactory, LTMLexer, PrefixListener

# Observability
from .observability import InMemoryMetricsHook, MetricsHook, NoOpMetricsHook

# Values
from .values import Literal, Locator, QName, Ref, RefKind

# Vocabularies
from .voc import TMDM, XSD, XTM10, Property

__all__ = [
    # Deserializers
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
    # Errors
    "ArgumentError",
    "ConfigurationError",
    "InvalidQNameError",
    "MalformedReferenceError",
    "MapSyntaxError",
    "TopicMapError",
    "UnexpectedCharacterError",
    "UnterminatedTokenError",
    # Handlers
    "DefaultMapHandler",
    "DelegatingMapHandler",
    "LoggingMapHandler",
    "MapHandler",
    "SimpleMapHandler",
    # I/O
    "BOMInputStream",
    "Source",
    # LTM
    "LTMDeserializer",
    "LTMDeserializerFactory",
    "LTMLexer",
    "PrefixListener",
    # Observability
    "InMemoryMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Values
    "Literal",
    "Locator",
    "QName",
    "Ref",
    "RefKind",
    # Vocabularies
    "Property",
    "TMDM",
    "XSD",
    "XTM10",
]
