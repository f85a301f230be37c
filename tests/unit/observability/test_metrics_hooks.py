import io
from concurrent.futures import ThreadPoolExecutor

from tm_kit.deserializers.base import ParseLifecycle
from tm_kit.deserializers.registry import DeserializerRegistry
from tm_kit.io.source import Source
from tm_kit.observability import (
    InMemoryMetricsHook,
    MetricsHook,
    NoOpMetricsHook,
    names,
    syntax_labels,
)


def test_syntax_labels_are_lowercased() -> None:
    assert syntax_labels("LTM") == {"syntax": "ltm"}


def test_noop_hook_drops_everything() -> None:
    hook: MetricsHook = NoOpMetricsHook()

    labels = syntax_labels("ltm")

    assert hook.increment(names.PARSE_REQUESTS_TOTAL, labels=labels) is None
    assert hook.record_latency(names.PARSE_DURATION, 1.5) is None
    assert hook.record_gauge(names.REGISTRY_FACTORIES, 2) is None


class TestInMemoryMetricsHook:
    def test_counts_per_syntax(self) -> None:
        hook = InMemoryMetricsHook()

        hook.increment(names.REGISTRY_LOOKUPS_TOTAL, labels=syntax_labels("LTM"))
        hook.increment(names.REGISTRY_LOOKUPS_TOTAL, 2, labels=syntax_labels("ctm"))
        hook.increment(names.REGISTRY_LOOKUPS_TOTAL)

        assert hook.count(names.REGISTRY_LOOKUPS_TOTAL) == 4
        assert hook.count(names.REGISTRY_LOOKUPS_TOTAL, "ltm") == 1
        assert hook.count(names.REGISTRY_LOOKUPS_TOTAL, "CTM") == 2
        assert hook.count(names.REGISTRY_MISSES_TOTAL, "ltm") == 0

    def test_gauge_keeps_last_value(self) -> None:
        hook = InMemoryMetricsHook()

        hook.record_gauge(names.REGISTRY_FACTORIES, 1)
        hook.record_gauge(names.REGISTRY_FACTORIES, 3)

        assert hook.gauges[names.REGISTRY_FACTORIES] == 3

    def test_concurrent_increments_are_not_lost(self) -> None:
        hook = InMemoryMetricsHook()

        def bump(_: int) -> None:
            for _ in range(1000):
                hook.increment(names.REGISTRY_LOOKUPS_TOTAL, labels={"syntax": "ltm"})

        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(bump, range(8)))

        assert hook.count(names.REGISTRY_LOOKUPS_TOTAL, "ltm") == 8000


def test_parse_and_registry_metrics_share_syntax_label(recorder) -> None:
    hook = InMemoryMetricsHook()
    lifecycle = ParseLifecycle("LTM", hook)
    lifecycle.set_handler(recorder)

    source = Source.from_bytes(io.BytesIO(), "http://www.example.org/map")

    lifecycle.run(source, lambda source, handler: None)
    DeserializerRegistry(metrics_hook=hook).create("Ltm")

    assert hook.count(names.PARSE_REQUESTS_TOTAL, "ltm") == 1
    assert hook.count(names.REGISTRY_LOOKUPS_TOTAL, "ltm") == 1
    assert hook.count(names.REGISTRY_MISSES_TOTAL, "ltm") == 1
    assert len(hook.latencies[names.PARSE_DURATION]) == 1
