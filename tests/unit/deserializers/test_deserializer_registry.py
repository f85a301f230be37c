import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from tm_kit.deserializers.registry import DeserializerRegistry
from tm_kit.deserializers.syntax import Syntax
from tm_kit.errors import ArgumentError
from tm_kit.observability import InMemoryMetricsHook, names

LTM = Syntax(name="LTM", file_extensions=("ltm",))
CTM = Syntax(name="CTM", file_extensions=("ctm",))


class StubDeserializer:
    def __init__(self, factory: "StubFactory") -> None:
        self.factory = factory


class StubFactory:
    def __init__(self, syntax: Syntax, label: str = "stub") -> None:
        self.syntax = syntax
        self.label = label
        self.created = 0

    def create_deserializer(self) -> StubDeserializer:
        self.created += 1
        return StubDeserializer(self)

    def __repr__(self) -> str:
        return f"StubFactory({self.label})"


@pytest.fixture
def metrics() -> InMemoryMetricsHook:
    return InMemoryMetricsHook()


@pytest.fixture
def registry(metrics: InMemoryMetricsHook) -> DeserializerRegistry:
    return DeserializerRegistry(metrics_hook=metrics)


def test_register_and_create(registry: DeserializerRegistry) -> None:
    factory = StubFactory(LTM)
    registry.register(factory)

    deserializer = registry.create(LTM)

    assert isinstance(deserializer, StubDeserializer)
    assert deserializer.factory is factory
    assert registry.get_factory(LTM) is factory


def test_create_returns_fresh_instances(registry: DeserializerRegistry) -> None:
    factory = StubFactory(LTM)
    registry.register(factory)

    assert registry.create(LTM) is not registry.create(LTM)
    assert factory.created == 2


def test_lookup_by_name_ignores_case(registry: DeserializerRegistry) -> None:
    registry.register(StubFactory(LTM))

    assert registry.create("ltm") is not None
    assert "Ltm" in registry
    assert LTM in registry


def test_create_unknown_syntax_returns_none(
    registry: DeserializerRegistry, metrics: InMemoryMetricsHook
) -> None:
    registry.register(StubFactory(LTM))

    assert registry.create(CTM) is None
    assert metrics.counters[names.REGISTRY_LOOKUPS_TOTAL] == 1
    assert metrics.counters[names.REGISTRY_MISSES_TOTAL] == 1


def test_create_none_syntax_raises(registry: DeserializerRegistry) -> None:
    with pytest.raises(ArgumentError):
        registry.create(None)  # type: ignore[arg-type]


def test_register_none_raises(registry: DeserializerRegistry) -> None:
    with pytest.raises(ArgumentError):
        registry.register(None)  # type: ignore[arg-type]


def test_last_registration_wins(registry: DeserializerRegistry, caplog) -> None:
    first = StubFactory(LTM, "first")
    second = StubFactory(LTM, "second")
    registry.register(first)

    with caplog.at_level(logging.INFO, logger="tm_kit.deserializers.registry"):
        registry.register(second)

    assert registry.get_factory(LTM) is second
    assert registry.create(LTM).factory is second
    assert "Replaced deserializer factory for LTM" in caplog.text

    registry.unregister(second)
    assert registry.create(LTM) is None


def test_registering_same_factory_twice_does_not_log_replacement(
    registry: DeserializerRegistry, caplog
) -> None:
    factory = StubFactory(LTM)
    registry.register(factory)

    with caplog.at_level(logging.INFO, logger="tm_kit.deserializers.registry"):
        registry.register(factory)

    assert "Replaced" not in caplog.text


def test_unregister_none_is_noop(registry: DeserializerRegistry) -> None:
    registry.register(StubFactory(LTM))

    registry.unregister(None)

    assert LTM in registry


def test_unregister_unknown_factory_is_noop(registry: DeserializerRegistry) -> None:
    registry.unregister(StubFactory(CTM))

    assert registry.syntaxes() == []


def test_unregister_only_removes_the_registered_factory(
    registry: DeserializerRegistry,
) -> None:
    registered = StubFactory(LTM, "registered")
    stale = StubFactory(LTM, "stale")
    registry.register(registered)

    registry.unregister(stale)
    assert registry.get_factory(LTM) is registered

    registry.unregister(registered)
    assert registry.get_factory(LTM) is None
    assert registry.create(LTM) is None


def test_syntaxes(registry: DeserializerRegistry, metrics: InMemoryMetricsHook) -> None:
    registry.register(StubFactory(LTM))
    registry.register(StubFactory(CTM))

    assert {s.name for s in registry.syntaxes()} == {"LTM", "CTM"}
    assert metrics.gauges[names.REGISTRY_FACTORIES] == 2


def test_contains_rejects_other_types(registry: DeserializerRegistry) -> None:
    registry.register(StubFactory(LTM))

    assert 42 not in registry


def test_concurrent_register_unregister_and_create() -> None:
    registry = DeserializerRegistry()
    ctm = StubFactory(CTM, "ctm")
    registry.register(ctm)
    factories = [StubFactory(LTM, f"worker-{i}") for i in range(8)]

    def churn(factory: StubFactory) -> list:
        created = []
        for _ in range(200):
            registry.register(factory)
            created.append(registry.create(LTM))
            created.append(registry.create(CTM))
            registry.unregister(factory)
        return created

    with ThreadPoolExecutor(max_workers=len(factories)) as executor:
        results = [
            deserializer
            for created in executor.map(churn, factories)
            for deserializer in created
        ]

    assert len(results) == len(factories) * 400
    for deserializer in results:
        assert deserializer is None or deserializer.factory in factories + [ctm]
    ctm_results = [d for d in results if d is not None and d.factory is ctm]
    assert len(ctm_results) == len(factories) * 200
    # Every worker unregistered its own factory last
    assert registry.get_factory(LTM) is None
    assert registry.syntaxes() == [CTM]
    assert registry.create(CTM).factory is ctm
