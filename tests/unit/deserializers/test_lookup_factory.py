import logging

import pytest

from tm_kit.deserializers.factory import (
    create_default_registry,
    create_deserializer,
    deserializer_for_file_extension,
    deserializer_for_filename,
    deserializer_for_mime_type,
)
from tm_kit.deserializers.registry import DeserializerRegistry
from tm_kit.deserializers.syntax import Syntax, SyntaxCatalog
from tm_kit.ltm import LTMDeserializer, LTMDeserializerFactory
from tm_kit.observability import InMemoryMetricsHook, names


@pytest.fixture
def registry() -> DeserializerRegistry:
    return create_default_registry()


def test_default_registry_contains_ltm(registry: DeserializerRegistry) -> None:
    assert "LTM" in registry
    assert isinstance(registry.get_factory("ltm"), LTMDeserializerFactory)
    assert [s.name for s in registry.syntaxes()] == ["LTM"]


def test_default_registry_records_factory_gauge() -> None:
    metrics = InMemoryMetricsHook()

    create_default_registry(metrics)

    assert metrics.gauges[names.REGISTRY_FACTORIES] == 1


def test_default_registries_are_independent() -> None:
    assert create_default_registry() is not create_default_registry()


def test_create_deserializer(registry: DeserializerRegistry) -> None:
    deserializer = create_deserializer("LTM", registry)

    assert isinstance(deserializer, LTMDeserializer)
    assert deserializer.get_syntax().name == "LTM"


def test_create_deserializer_for_unregistered_syntax_logs_error(
    registry: DeserializerRegistry, caplog
) -> None:
    with caplog.at_level(logging.ERROR, logger="tm_kit.deserializers.factory"):
        assert create_deserializer("CTM", registry) is None

    assert "CTM" in caplog.text


@pytest.mark.parametrize("ext", ["ltm", ".ltm", "LTM"])
def test_for_file_extension(registry: DeserializerRegistry, ext: str) -> None:
    assert isinstance(deserializer_for_file_extension(ext, registry), LTMDeserializer)


@pytest.mark.parametrize("ext", ["the-not-yet-invented-syntax", "ctm"])
def test_for_file_extension_without_deserializer(
    registry: DeserializerRegistry, ext: str
) -> None:
    assert deserializer_for_file_extension(ext, registry) is None


def test_for_filename(registry: DeserializerRegistry) -> None:
    assert isinstance(deserializer_for_filename("opera.ltm", registry), LTMDeserializer)
    assert deserializer_for_filename("ltm", registry) is None
    assert deserializer_for_filename("a-file.here.n3", registry) is None


def test_for_mime_type(registry: DeserializerRegistry) -> None:
    assert isinstance(
        deserializer_for_mime_type("application/x-tm+ltm", registry), LTMDeserializer
    )
    assert deserializer_for_mime_type("text/turtle", registry) is None


def test_custom_catalog(registry: DeserializerRegistry) -> None:
    catalog = SyntaxCatalog([Syntax(name="LTM", file_extensions=("linear",))])

    assert isinstance(
        deserializer_for_file_extension("linear", registry, catalog), LTMDeserializer
    )
    assert deserializer_for_file_extension("ltm", registry, catalog) is None
