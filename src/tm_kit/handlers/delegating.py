from tm_kit.values.ref import Ref

from .base import MapHandler


class DelegatingMapHandler:
    """Forwards every event to an underlying handler."""

    def __init__(self, handler: MapHandler) -> None:
        self._handler = handler

    @property
    def delegate(self) -> MapHandler:
        return self._handler

    def start_topic_map(self) -> None:
        self._handler.start_topic_map()

    def end_topic_map(self) -> None:
        self._handler.end_topic_map()

    def start_topic(self, identity: Ref) -> None:
        self._handler.start_topic(identity)

    def end_topic(self) -> None:
        self._handler.end_topic()

    def start_association(self) -> None:
        self._handler.start_association()

    def end_association(self) -> None:
        self._handler.end_association()

    def start_role(self) -> None:
        self._handler.start_role()

    def end_role(self) -> None:
        self._handler.end_role()

    def start_occurrence(self) -> None:
        self._handler.start_occurrence()

    def end_occurrence(self) -> None:
        self._handler.end_occurrence()

    def start_name(self) -> None:
        self._handler.start_name()

    def end_name(self) -> None:
        self._handler.end_name()

    def start_variant(self) -> None:
        self._handler.start_variant()

    def end_variant(self) -> None:
        self._handler.end_variant()

    def start_scope(self) -> None:
        self._handler.start_scope()

    def end_scope(self) -> None:
        self._handler.end_scope()

    def start_theme(self) -> None:
        self._handler.start_theme()

    def end_theme(self) -> None:
        self._handler.end_theme()

    def value(self, value: str, datatype: str | None = None) -> None:
        self._handler.value(value, datatype)

    def subject_identifier(self, iri: str) -> None:
        self._handler.subject_identifier(iri)

    def subject_locator(self, iri: str) -> None:
        self._handler.subject_locator(iri)

    def item_identifier(self, iri: str) -> None:
        self._handler.item_identifier(iri)

    def start_player(self) -> None:
        self._handler.start_player()

    def end_player(self) -> None:
        self._handler.end_player()

    def start_type(self) -> None:
        self._handler.start_type()

    def end_type(self) -> None:
        self._handler.end_type()

    def start_reifier(self) -> None:
        self._handler.start_reifier()

    def end_reifier(self) -> None:
        self._handler.end_reifier()

    def topic_ref(self, identity: Ref) -> None:
        self._handler.topic_ref(identity)

    def start_isa(self) -> None:
        self._handler.start_isa()

    def end_isa(self) -> None:
        self._handler.end_isa()
