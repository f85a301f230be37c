import logging
import threading

from tm_kit.errors import ArgumentError
from tm_kit.observability import names
from tm_kit.observability.base import MetricsHook, NoOpMetricsHook, syntax_labels

from .base import Deserializer, DeserializerFactory
from .syntax import Syntax

logger = logging.getLogger(__name__)


def _key(syntax: Syntax | str) -> str:
    if syntax is None:
        raise ArgumentError("The syntax must not be None")
    name = syntax.name if isinstance(syntax, Syntax) else syntax
    return name.lower()


class DeserializerRegistry:
    """Maps syntaxes to deserializer factories.

    Safe for concurrent use. The last factory registered for a syntax wins.
    """

    def __init__(self, metrics_hook: MetricsHook = NoOpMetricsHook()) -> None:
        self._factories: dict[str, DeserializerFactory] = {}
        self._lock = threading.Lock()
        self.metrics_hook = metrics_hook

    def register(self, factory: DeserializerFactory) -> None:
        if factory is None:
            raise ArgumentError("The factory must not be None")
        key = _key(factory.syntax)
        with self._lock:
            previous = self._factories.get(key)
            self._factories[key] = factory
            count = len(self._factories)

        if previous is not None and previous is not factory:
            logger.info(
                "Replaced deserializer factory for %s: %r -> %r",
                factory.syntax,
                previous,
                factory,
            )
        else:
            logger.debug("Registered deserializer factory for %s", factory.syntax)
        self.metrics_hook.record_gauge(names.REGISTRY_FACTORIES, count)

    def unregister(self, factory: DeserializerFactory | None) -> None:
        """Removes ``factory`` if it is the one registered for its syntax."""
        if factory is None:
            return
        key = _key(factory.syntax)
        with self._lock:
            if self._factories.get(key) is not factory:
                return
            del self._factories[key]
            count = len(self._factories)

        logger.debug("Unregistered deserializer factory for %s", factory.syntax)
        self.metrics_hook.record_gauge(names.REGISTRY_FACTORIES, count)

    def get_factory(self, syntax: Syntax | str) -> DeserializerFactory | None:
        key = _key(syntax)
        with self._lock:
            return self._factories.get(key)

    def create(self, syntax: Syntax | str) -> Deserializer | None:
        """Returns a new deserializer for ``syntax`` or None if no factory
        is registered for it."""
        key = _key(syntax)
        labels = syntax_labels(key)
        self.metrics_hook.increment(names.REGISTRY_LOOKUPS_TOTAL, labels=labels)
        with self._lock:
            factory = self._factories.get(key)

        if factory is None:
            self.metrics_hook.increment(names.REGISTRY_MISSES_TOTAL, labels=labels)
            logger.debug("No deserializer factory for %s", syntax)
            return None
        logger.debug("Creating deserializer for %s", syntax)
        return factory.create_deserializer()

    def syntaxes(self) -> list[Syntax]:
        with self._lock:
            return [factory.syntax for factory in self._factories.values()]

    def __contains__(self, syntax: object) -> bool:
        if not isinstance(syntax, (Syntax, str)):
            return False
        return self.get_factory(syntax) is not None
