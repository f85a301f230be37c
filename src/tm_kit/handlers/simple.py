# src/tm_kit/handlers/simple.py

from tm_kit.values.ref import Ref
from tm_kit.voc import TMDM

from .base import MapHandler
from .delegating import DelegatingMapHandler

_TYPE_INSTANCE = Ref.subject_identifier(TMDM.TYPE_INSTANCE)
_TYPE = Ref.subject_identifier(TMDM.TYPE)
_INSTANCE = Ref.subject_identifier(TMDM.INSTANCE)

_SUPERTYPE_SUBTYPE = Ref.subject_identifier(TMDM.SUPERTYPE_SUBTYPE)
_SUPERTYPE = Ref.subject_identifier(TMDM.SUPERTYPE)
_SUBTYPE = Ref.subject_identifier(TMDM.SUBTYPE)


class SimpleMapHandler(DelegatingMapHandler):
    """Delegating handler with shortcuts for common event sequences.

    Parsers use it to emit e.g. ``start_type``/``topic_ref``/``end_type``
    with a single call.
    """

    @classmethod
    def create(cls, handler: MapHandler) -> "SimpleMapHandler":
        """Returns ``handler`` if it is already a SimpleMapHandler, else wraps it."""
        if isinstance(handler, SimpleMapHandler):
            return handler
        return cls(handler)

    def type(self, ref: Ref) -> None:
        self.start_type()
        self.topic_ref(ref)
        self.end_type()

    def reifier(self, ref: Ref | None) -> None:
        """Emits a reifier declaration; does nothing if ``ref`` is None."""
        if ref is None:
            return
        self.start_reifier()
        self.topic_ref(ref)
        self.end_reifier()

    def player(self, ref: Ref) -> None:
        self.start_player()
        self.topic_ref(ref)
        self.end_player()

    def role(self, type: Ref, player: Ref) -> None:
        self.start_typed_role(type)
        self.player(player)
        self.end_role()

    def theme(self, ref: Ref) -> None:
        self.start_theme()
        self.topic_ref(ref)
        self.end_theme()

    def isa(self, ref: Ref, type: Ref | None = None) -> None:
        """Declares a type of the current topic.

        With two arguments, emits a type-instance association where ``ref``
        plays the instance role and ``type`` the type role instead.
        """
        if type is None:
            self.start_isa()
            self.topic_ref(ref)
            self.end_isa()
            return
        self.start_typed_association(_TYPE_INSTANCE)
        self.role(_TYPE, type)
        self.role(_INSTANCE, ref)
        self.end_association()

    def ako(self, subtype: Ref, supertype: Ref) -> None:
        """Emits a supertype-subtype association."""
        self.start_typed_association(_SUPERTYPE_SUBTYPE)
        self.role(_SUPERTYPE, supertype)
        self.role(_SUBTYPE, subtype)
        self.end_association()

    def start_typed_association(self, type: Ref) -> None:
        self.start_association()
        self.type(type)

    def start_typed_role(self, type: Ref) -> None:
        self.start_role()
        self.type(type)

    def start_typed_occurrence(self, type: Ref) -> None:
        self.start_occurrence()
        self.type(type)

    def start_typed_name(self, type: Ref) -> None:
        self.start_name()
        self.type(type)

    def scope(self, themes: list[Ref]) -> None:
        """Emits a scope declaration; does nothing if ``themes`` is empty."""
        if not themes:
            return
        self.start_scope()
        for theme in themes:
            self.theme(theme)
        self.end_scope()
