# src/tm_kit/deserializers/base.py

import logging
import threading
from enum import Enum
from time import monotonic
from typing import Any, Callable, Iterator, Protocol

from tm_kit.errors import ArgumentError, ConfigurationError
from tm_kit.handlers.base import MapHandler
from tm_kit.io.source import Source
from tm_kit.observability import names
from tm_kit.observability.base import (
    Labels,
    MetricsHook,
    NoOpMetricsHook,
    syntax_labels,
)

from .syntax import Syntax

logger = logging.getLogger(__name__)


class IRIContext:
    """Set of document IRIs which have already been loaded.

    Shared between a deserializer and the subordinate deserializers it
    spawns, so that a document is read at most once per parse.
    """

    def __init__(self) -> None:
        self._iris: set[str] = set()
        self._lock = threading.Lock()

    def add(self, iri: str) -> bool:
        """Adds ``iri``. Returns False if it was already present."""
        with self._lock:
            if iri in self._iris:
                return False
            self._iris.add(iri)
            return True

    def __contains__(self, iri: object) -> bool:
        with self._lock:
            return iri in self._iris

    def __len__(self) -> int:
        with self._lock:
            return len(self._iris)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(sorted(self._iris))


class PropertyBag:
    """String-keyed deserializer options. Unset keys read as None."""

    def __init__(self) -> None:
        self._properties: dict[str, Any] = {}

    def get_property(self, name: str) -> Any:
        return self._properties.get(name)

    def set_property(self, name: str, value: Any) -> None:
        if value is None:
            self._properties.pop(name, None)
        else:
            self._properties[name] = value

    def is_enabled(self, name: str) -> bool:
        return self._properties.get(name) is True

    def copy(self) -> "PropertyBag":
        bag = PropertyBag()
        bag._properties = dict(self._properties)
        return bag


class Deserializer(Protocol):
    """Reads a source and reports its content to a MapHandler.

    Instances are single-use per parse and not thread-safe.
    """

    def get_syntax(self) -> Syntax: ...

    def set_map_handler(self, handler: MapHandler | None) -> None: ...

    def get_map_handler(self) -> MapHandler | None: ...

    def set_subordinate(self, subordinate: bool) -> None:
        """A subordinate deserializer neither reports the map boundaries nor
        closes the source; its parent does both."""
        ...

    def is_subordinate(self) -> bool: ...

    def get_property(self, name: str) -> Any: ...

    def set_property(self, name: str, value: Any) -> None: ...

    def get_iri_context(self) -> IRIContext: ...

    def set_iri_context(self, context: IRIContext) -> None: ...

    def parse(self, source: Source) -> None: ...


class DeserializerFactory(Protocol):
    """Stateless producer of fresh deserializers for one syntax."""

    syntax: Syntax

    def create_deserializer(self) -> Deserializer: ...


class ParseState(str, Enum):
    IDLE = "idle"
    PARSING = "parsing"
    DONE = "done"
    FAILED = "failed"


class ParseLifecycle:
    """Parse discipline shared by all deserializers.

    Checks the preconditions, reports ``start_topic_map`` and
    ``end_topic_map`` (unless subordinate), closes the source stream and
    releases the handler on every exit path. The syntax specific work is
    the ``do_parse`` callable passed to :meth:`run`.
    """

    def __init__(
        self,
        syntax_name: str,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._syntax_name = syntax_name
        self.metrics_hook = metrics_hook
        self.handler: MapHandler | None = None
        self.subordinate = False
        self.state = ParseState.IDLE

    def set_handler(self, handler: MapHandler | None) -> None:
        if self.state is ParseState.PARSING:
            raise ConfigurationError("The handler cannot be changed while parsing")
        self.handler = handler
        self.state = ParseState.IDLE

    def run(self, source: Source, do_parse: Callable[[Source, MapHandler], None]) -> None:
        if self.state is ParseState.PARSING:
            raise ConfigurationError("A parse is already in progress")
        handler = self.handler
        if handler is None:
            raise ConfigurationError("The map handler must be set before parsing")
        if source is None:
            raise ArgumentError("The source must not be None")
        if not source.base_iri:
            if not self.subordinate:
                source.close()
            raise ArgumentError("The base IRI of the source must be provided")

        labels = syntax_labels(self._syntax_name)
        self.metrics_hook.increment(names.PARSE_REQUESTS_TOTAL, labels=labels)
        self.state = ParseState.PARSING
        logger.debug(
            "Starting %s parse: base=%s, subordinate=%s",
            self._syntax_name,
            source.base_iri,
            self.subordinate,
        )
        start = monotonic()
        try:
            if not self.subordinate:
                handler.start_topic_map()
            do_parse(source, handler)
            self.state = ParseState.DONE
        except Exception:
            self.state = ParseState.FAILED
            self.metrics_hook.increment(names.PARSE_ERRORS_TOTAL, labels=labels)
            raise
        finally:
            try:
                # Reported after a failure too
                if not self.subordinate:
                    self._end_topic_map(handler, source, labels)
            finally:
                if not self.subordinate:
                    source.close()
                self.handler = None
                elapsed_ms = 1000 * (monotonic() - start)
                self.metrics_hook.record_latency(
                    names.PARSE_DURATION, elapsed_ms, labels=labels
                )
                logger.debug(
                    "Finished %s parse: base=%s, state=%s, latency=%.0fms",
                    self._syntax_name,
                    source.base_iri,
                    self.state.value,
                    elapsed_ms,
                )

    def _end_topic_map(
        self, handler: MapHandler, source: Source, labels: Labels
    ) -> None:
        try:
            handler.end_topic_map()
        except Exception as exc:
            if self.state is not ParseState.FAILED:
                self.state = ParseState.FAILED
                self.metrics_hook.increment(names.PARSE_ERRORS_TOTAL, labels=labels)
                raise
            # The parse error in flight wins
            logger.error(
                "end_topic_map failed after a %s parse error: base=%s, error=%r",
                self._syntax_name,
                source.base_iri,
                exc,
            )
