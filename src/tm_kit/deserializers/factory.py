# src/tm_kit/deserializers/factory.py

import logging

from tm_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import Deserializer
from .registry import DeserializerRegistry
from .syntax import Syntax, SyntaxCatalog

logger = logging.getLogger(__name__)


def create_default_registry(
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> DeserializerRegistry:
    """Returns a new registry with the built-in LTM deserializer."""
    from tm_kit.ltm.deserializer import LTMDeserializerFactory

    registry = DeserializerRegistry(metrics_hook=metrics_hook)
    registry.register(
        LTMDeserializerFactory(registry=registry, metrics_hook=metrics_hook)
    )
    return registry


def create_deserializer(
    syntax: Syntax | str,
    registry: DeserializerRegistry,
) -> Deserializer | None:
    deserializer = registry.create(syntax)
    if deserializer is None:
        logger.error("No deserializer available for syntax: %s", syntax)
    return deserializer


def deserializer_for_file_extension(
    ext: str,
    registry: DeserializerRegistry,
    catalog: SyntaxCatalog | None = None,
) -> Deserializer | None:
    syntax = (catalog or SyntaxCatalog.default()).for_file_extension(ext)
    if syntax is None:
        logger.debug("Unknown file extension: %s", ext)
        return None
    return registry.create(syntax)


def deserializer_for_filename(
    filename: str,
    registry: DeserializerRegistry,
    catalog: SyntaxCatalog | None = None,
) -> Deserializer | None:
    syntax = (catalog or SyntaxCatalog.default()).for_filename(filename)
    if syntax is None:
        logger.debug("No syntax for filename: %s", filename)
        return None
    return registry.create(syntax)


def deserializer_for_mime_type(
    mime_type: str,
    registry: DeserializerRegistry,
    catalog: SyntaxCatalog | None = None,
) -> Deserializer | None:
    syntax = (catalog or SyntaxCatalog.default()).for_mime_type(mime_type)
    if syntax is None:
        logger.debug("Unknown MIME type: %s", mime_type)
        return None
    return registry.create(syntax)
