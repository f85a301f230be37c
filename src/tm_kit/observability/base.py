import threading
from collections import Counter
from typing import Protocol

# tm-kit labels every metric with the syntax it concerns: {"syntax": "ltm"}
Labels = dict[str, str]

SYNTAX_LABEL = "syntax"


def syntax_labels(syntax_name: str) -> Labels:
    return {SYNTAX_LABEL: syntax_name.lower()}


class MetricsHook(Protocol):
    """Receiver of parse and registry metrics.

    Implementations forward to a metrics backend (Prometheus, StatsD, ...).
    Registries call the hook from several threads.
    """

    def record_latency(
        self,
        name: str,
        value_ms: float,
        labels: Labels | None = None,
    ) -> None:
        """Duration of one parse, see ``names.PARSE_DURATION``."""

    def increment(
        self,
        name: str,
        value: int = 1,
        labels: Labels | None = None,
    ) -> None:
        """Parse requests and errors, registry lookups and misses."""

    def record_gauge(
        self,
        name: str,
        value: float,
        labels: Labels | None = None,
    ) -> None:
        """Number of registered deserializer factories."""


class NoOpMetricsHook:
    """Default hook of deserializers and registries; drops everything."""

    def record_latency(
        self, name: str, value_ms: float, labels: Labels | None = None
    ) -> None:
        pass

    def increment(
        self, name: str, value: int = 1, labels: Labels | None = None
    ) -> None:
        pass

    def record_gauge(
        self, name: str, value: float, labels: Labels | None = None
    ) -> None:
        pass


class InMemoryMetricsHook:
    """Keeps counters, gauges and latencies in memory.

    ``counters`` and ``latencies`` are keyed by metric name; the per-syntax
    breakdown is available through :meth:`count`. Handy for tests and
    ad-hoc diagnostics.
    """

    def __init__(self) -> None:
        self.counters: Counter[str] = Counter()
        self.gauges: dict[str, float] = {}
        self.latencies: dict[str, list[float]] = {}
        self._by_syntax: Counter[tuple[str, str | None]] = Counter()
        self._lock = threading.Lock()

    def record_latency(
        self, name: str, value_ms: float, labels: Labels | None = None
    ) -> None:
        with self._lock:
            self.latencies.setdefault(name, []).append(value_ms)

    def increment(
        self, name: str, value: int = 1, labels: Labels | None = None
    ) -> None:
        syntax = (labels or {}).get(SYNTAX_LABEL)
        with self._lock:
            self.counters[name] += value
            self._by_syntax[name, syntax] += value

    def record_gauge(
        self, name: str, value: float, labels: Labels | None = None
    ) -> None:
        with self._lock:
            self.gauges[name] = value

    def count(self, name: str, syntax: str | None = None) -> int:
        """Returns the counter ``name``, restricted to ``syntax`` if given."""
        with self._lock:
            if syntax is None:
                return self.counters[name]
            return self._by_syntax[name, syntax.lower()]
