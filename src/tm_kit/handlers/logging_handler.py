import logging

from tm_kit.values.ref import Ref

from .delegating import DelegatingMapHandler

logger = logging.getLogger(__name__)


class LoggingMapHandler(DelegatingMapHandler):
    """Logs every event with level INFO before forwarding it.

    Mainly used for debugging.
    """

    def start_topic_map(self) -> None:
        logger.info("start_topic_map")
        super().start_topic_map()

    def end_topic_map(self) -> None:
        logger.info("end_topic_map")
        super().end_topic_map()

    def start_topic(self, identity: Ref) -> None:
        logger.info("start_topic, identity=%s", identity)
        super().start_topic(identity)

    def end_topic(self) -> None:
        logger.info("end_topic")
        super().end_topic()

    def start_association(self) -> None:
        logger.info("start_association")
        super().start_association()

    def end_association(self) -> None:
        logger.info("end_association")
        super().end_association()

    def start_role(self) -> None:
        logger.info("start_role")
        super().start_role()

    def end_role(self) -> None:
        logger.info("end_role")
        super().end_role()

    def start_occurrence(self) -> None:
        logger.info("start_occurrence")
        super().start_occurrence()

    def end_occurrence(self) -> None:
        logger.info("end_occurrence")
        super().end_occurrence()

    def start_name(self) -> None:
        logger.info("start_name")
        super().start_name()

    def end_name(self) -> None:
        logger.info("end_name")
        super().end_name()

    def start_variant(self) -> None:
        logger.info("start_variant")
        super().start_variant()

    def end_variant(self) -> None:
        logger.info("end_variant")
        super().end_variant()

    def start_scope(self) -> None:
        logger.info("start_scope")
        super().start_scope()

    def end_scope(self) -> None:
        logger.info("end_scope")
        super().end_scope()

    def start_theme(self) -> None:
        logger.info("start_theme")
        super().start_theme()

    def end_theme(self) -> None:
        logger.info("end_theme")
        super().end_theme()

    def value(self, value: str, datatype: str | None = None) -> None:
        logger.info("value, value='%s', datatype='%s'", value, datatype)
        super().value(value, datatype)

    def subject_identifier(self, iri: str) -> None:
        logger.info("subject_identifier, iri=%s", iri)
        super().subject_identifier(iri)

    def subject_locator(self, iri: str) -> None:
        logger.info("subject_locator, iri=%s", iri)
        super().subject_locator(iri)

    def item_identifier(self, iri: str) -> None:
        logger.info("item_identifier, iri=%s", iri)
        super().item_identifier(iri)

    def start_player(self) -> None:
        logger.info("start_player")
        super().start_player()

    def end_player(self) -> None:
        logger.info("end_player")
        super().end_player()

    def start_type(self) -> None:
        logger.info("start_type")
        super().start_type()

    def end_type(self) -> None:
        logger.info("end_type")
        super().end_type()

    def start_reifier(self) -> None:
        logger.info("start_reifier")
        super().start_reifier()

    def end_reifier(self) -> None:
        logger.info("end_reifier")
        super().end_reifier()

    def topic_ref(self, identity: Ref) -> None:
        logger.info("topic_ref, identity=%s", identity)
        super().topic_ref(identity)

    def start_isa(self) -> None:
        logger.info("start_isa")
        super().start_isa()

    def end_isa(self) -> None:
        logger.info("end_isa")
        super().end_isa()
