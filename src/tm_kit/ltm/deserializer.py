# src/tm_kit/ltm/deserializer.py

import codecs
import io
import logging
import urllib.request
from typing import Any, BinaryIO, Callable, Iterable, TextIO

from tm_kit.deserializers.base import (
    IRIContext,
    ParseLifecycle,
    ParseState,
    PropertyBag,
)
from tm_kit.deserializers.registry import DeserializerRegistry
from tm_kit.deserializers.syntax import Syntax, SyntaxCatalog
from tm_kit.errors import ArgumentError, ConfigurationError, MapSyntaxError
from tm_kit.handlers.base import MapHandler
from tm_kit.io.bom import BOMInputStream, read_fully
from tm_kit.io.source import Source
from tm_kit.observability.base import MetricsHook, NoOpMetricsHook
from tm_kit.values import Locator
from tm_kit.voc import Property

from .parser import LTMParser, PrefixListener

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "iso-8859-1"

# An encoding declaration must fit into the first bytes
_SNIFF_SIZE = 25

Opener = Callable[[str], BinaryIO]


def open_iri(iri: str) -> BinaryIO:
    return urllib.request.urlopen(iri)


def _ltm_syntax() -> Syntax:
    syntax = SyntaxCatalog.default().get("LTM")
    if syntax is None:
        raise ConfigurationError("LTM is missing from the built-in syntaxes")
    return syntax


def _codec_name(encoding: str) -> str:
    try:
        return codecs.lookup(encoding).name
    except LookupError as exc:
        raise MapSyntaxError(f"Unknown encoding '{encoding}'") from exc


def _sniff_encoding(head: bytes, stream: BOMInputStream) -> str:
    """Returns the encoding of an LTM document.

    A BOM wins, then an ``@"encoding"`` declaration at the very start, then
    the default ISO-8859-1.
    """
    text = head.decode("latin-1")
    declared = None
    if text.startswith('@"'):
        end = text.find('"', 2)
        if end == -1:
            raise MapSyntaxError(
                "Invalid LTM document: The encoding directive is not closed"
            )
        declared = text[2:end]
        if stream.found_bom and _codec_name(declared) != _codec_name(stream.encoding):  # type: ignore[arg-type]
            raise MapSyntaxError(
                f"The BOM '{stream.encoding}' contradicts the encoding directive '{declared}'"
            )
    if stream.found_bom:
        return stream.encoding  # type: ignore[return-value]
    return _codec_name(declared or DEFAULT_ENCODING)


def _decode(
    stream: BinaryIO, encoding: str | None, owned: bool
) -> tuple[TextIO, Callable[[], Any]]:
    """Wraps ``stream`` into a reader.

    Returns the reader and the callable which releases it; a borrowed
    ``stream`` stays open.
    """
    try:
        if encoding is not None:
            reader = io.TextIOWrapper(
                stream, encoding=_codec_name(encoding), newline=""  # type: ignore[arg-type]
            )
            return reader, (reader.close if owned else reader.detach)
        bom = BOMInputStream(stream, DEFAULT_ENCODING, closefd=owned)
        head = read_fully(bom, _SNIFF_SIZE)  # type: ignore[arg-type]
        bom.unread(head)
        detected = _sniff_encoding(head, bom)
        logger.debug("Reading LTM as %s", detected)
        reader = io.TextIOWrapper(
            io.BufferedReader(bom), encoding=detected, newline=""
        )
        return reader, reader.close
    except Exception:
        if owned:
            stream.close()
        raise


class LTMDeserializer:
    """Deserializer for LTM 1.3.

    Options (see :class:`tm_kit.voc.Property`):
    - ``LTM_LEGACY``: XTM 1.0 compatible reification and sort names
    - ``IGNORE_INCLUDE``/``IGNORE_MERGEMAP``: skip those directives
    - ``LTM_PREFIX_LISTENER``: a :class:`PrefixListener`

    ``#MERGEMAP`` of other syntaxes needs a ``registry``. Sources which
    only carry an IRI are opened with ``opener``.
    """

    def __init__(
        self,
        *,
        registry: DeserializerRegistry | None = None,
        opener: Opener | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._syntax = _ltm_syntax()
        self._lifecycle = ParseLifecycle(self._syntax.name, metrics_hook)
        self._properties = PropertyBag()
        self._context: IRIContext | None = None
        self._included_by: tuple[Locator, ...] = ()
        self._prefix_listener: PrefixListener | None = None
        self._registry = registry
        self._opener = opener or open_iri
        self.metrics_hook = metrics_hook

    @property
    def state(self) -> ParseState:
        return self._lifecycle.state

    def get_syntax(self) -> Syntax:
        return self._syntax

    def set_map_handler(self, handler: MapHandler | None) -> None:
        self._lifecycle.set_handler(handler)

    def get_map_handler(self) -> MapHandler | None:
        return self._lifecycle.handler

    def set_subordinate(self, subordinate: bool) -> None:
        self._lifecycle.subordinate = subordinate

    def is_subordinate(self) -> bool:
        return self._lifecycle.subordinate

    def get_property(self, name: str) -> Any:
        return self._properties.get_property(name)

    def set_property(self, name: str, value: Any) -> None:
        self._properties.set_property(name, value)

    def get_iri_context(self) -> IRIContext:
        if self._context is None:
            self._context = IRIContext()
        return self._context

    def set_iri_context(self, context: IRIContext) -> None:
        self._context = context

    def set_included_by(self, locators: Iterable[Locator]) -> None:
        """Sets the documents which include the document to parse."""
        if self._included_by:
            raise ConfigurationError("The including documents are already set")
        self._included_by = tuple(locators)

    def set_prefix_listener(self, listener: PrefixListener | None) -> None:
        self._prefix_listener = listener

    def parse(self, source: Source) -> None:
        self._lifecycle.run(source, self._do_parse)

    def _do_parse(self, source: Source, handler: MapHandler) -> None:
        reader, release = self._open_reader(source)
        try:
            parser = LTMParser(
                handler,
                source.base_iri,  # type: ignore[arg-type]
                legacy=self._properties.is_enabled(Property.LTM_LEGACY),
                ignore_include=self._properties.is_enabled(Property.IGNORE_INCLUDE),
                ignore_mergemap=self._properties.is_enabled(Property.IGNORE_MERGEMAP),
                subordinate=self.is_subordinate(),
                context=self.get_iri_context(),
                included_by=self._included_by,
                prefix_listener=self.get_property(Property.LTM_PREFIX_LISTENER)
                or self._prefix_listener,
                loader=lambda iri, syntax, included_by: self._load(
                    handler, iri, syntax, included_by
                ),
            )
            parser.parse(reader)
        finally:
            release()

    def _open_reader(self, source: Source) -> tuple[TextIO, Callable[[], Any]]:
        if source.character_stream is not None:
            return source.character_stream, lambda: None
        if source.byte_stream is not None:
            return _decode(source.byte_stream, source.encoding, owned=False)
        if source.iri is None:
            raise ArgumentError("The source provides neither a stream nor an IRI")
        logger.debug("Opening %s", source.iri)
        return _decode(self._opener(source.iri), source.encoding, owned=True)

    def _load(
        self,
        handler: MapHandler,
        iri: str,
        syntax: str,
        included_by: tuple[Locator, ...],
    ) -> None:
        if syntax.lower() == self._syntax.name.lower():
            deserializer = LTMDeserializer(
                registry=self._registry,
                opener=self._opener,
                metrics_hook=self.metrics_hook,
            )
            deserializer._properties = self._properties.copy()
            deserializer.set_included_by(included_by)
            deserializer.set_prefix_listener(self._prefix_listener)
        else:
            deserializer = (
                self._registry.create(syntax) if self._registry is not None else None
            )
            if deserializer is None:
                logger.error("No deserializer available for syntax: %s", syntax)
                raise MapSyntaxError(f"Unknown syntax '{syntax}'")
        deserializer.set_map_handler(handler)
        deserializer.set_subordinate(True)
        deserializer.set_iri_context(self.get_iri_context())
        deserializer.parse(Source.from_iri(iri))


class LTMDeserializerFactory:
    def __init__(
        self,
        *,
        registry: DeserializerRegistry | None = None,
        opener: Opener | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.syntax = _ltm_syntax()
        self._registry = registry
        self._opener = opener
        self._metrics_hook = metrics_hook

    def create_deserializer(self) -> LTMDeserializer:
        return LTMDeserializer(
            registry=self._registry,
            opener=self._opener,
            metrics_hook=self._metrics_hook,
        )

    def __repr__(self) -> str:
        return f"LTMDeserializerFactory(syntax={self.syntax.name!r})"
