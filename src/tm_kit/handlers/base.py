# src/tm_kit/handlers/base.py

from typing import Protocol

from tm_kit.values.ref import Ref


class MapHandler(Protocol):
    """Receiver of map-construction events.

    The event vocabulary is the same for every syntax. Values (IRIs, dates,
    ...) are reported as found in the source; normalizing them is up to
    the implementation.

    Contract:
    - ``start_topic_map`` and ``end_topic_map`` are reported once per
      top-level parse; ``end_topic_map`` is reported even if parsing fails
    - all other events happen strictly between them
    - an exception raised by the handler aborts the parse
    """

    def start_topic_map(self) -> None: ...

    def end_topic_map(self) -> None: ...

    def start_topic(self, identity: Ref) -> None: ...

    def end_topic(self) -> None: ...

    def start_association(self) -> None: ...

    def end_association(self) -> None: ...

    def start_role(self) -> None: ...

    def end_role(self) -> None: ...

    def start_occurrence(self) -> None: ...

    def end_occurrence(self) -> None: ...

    def start_name(self) -> None: ...

    def end_name(self) -> None:
        """End of a name; a name without type event has the default name type."""
        ...

    def start_variant(self) -> None: ...

    def end_variant(self) -> None: ...

    def start_scope(self) -> None: ...

    def end_scope(self) -> None: ...

    def start_theme(self) -> None: ...

    def end_theme(self) -> None: ...

    def value(self, value: str, datatype: str | None = None) -> None:
        """Reports a name value (no datatype) or an occurrence/variant value."""
        ...

    def subject_identifier(self, iri: str) -> None: ...

    def subject_locator(self, iri: str) -> None: ...

    def item_identifier(self, iri: str) -> None: ...

    def start_player(self) -> None: ...

    def end_player(self) -> None: ...

    def start_type(self) -> None: ...

    def end_type(self) -> None: ...

    def start_reifier(self) -> None: ...

    def end_reifier(self) -> None: ...

    def topic_ref(self, identity: Ref) -> None:
        """A topic reference; its meaning depends on the enclosing event."""
        ...

    def start_isa(self) -> None: ...

    def end_isa(self) -> None: ...


class DefaultMapHandler:
    """MapHandler which ignores every event. Subclass and override."""

    def start_topic_map(self) -> None:
        pass

    def end_topic_map(self) -> None:
        pass

    def start_topic(self, identity: Ref) -> None:
        pass

    def end_topic(self) -> None:
        pass

    def start_association(self) -> None:
        pass

    def end_association(self) -> None:
        pass

    def start_role(self) -> None:
        pass

    def end_role(self) -> None:
        pass

    def start_occurrence(self) -> None:
        pass

    def end_occurrence(self) -> None:
        pass

    def start_name(self) -> None:
        pass

    def end_name(self) -> None:
        pass

    def start_variant(self) -> None:
        pass

    def end_variant(self) -> None:
        pass

    def start_scope(self) -> None:
        pass

    def end_scope(self) -> None:
        pass

    def start_theme(self) -> None:
        pass

    def end_theme(self) -> None:
        pass

    def value(self, value: str, datatype: str | None = None) -> None:
        pass

    def subject_identifier(self, iri: str) -> None:
        pass

    def subject_locator(self, iri: str) -> None:
        pass

    def item_identifier(self, iri: str) -> None:
        pass

    def start_player(self) -> None:
        pass

    def end_player(self) -> None:
        pass

    def start_type(self) -> None:
        pass

    def end_type(self) -> None:
        pass

    def start_reifier(self) -> None:
        pass

    def end_reifier(self) -> None:
        pass

    def topic_ref(self, identity: Ref) -> None:
        pass

    def start_isa(self) -> None:
        pass

    def end_isa(self) -> None:
        pass
