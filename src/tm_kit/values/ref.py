from dataclasses import dataclass
from enum import Enum


class RefKind(int, Enum):
    """Kind of identity a reference denotes."""

    ITEM_IDENTIFIER = 1
    SUBJECT_IDENTIFIER = 2
    SUBJECT_LOCATOR = 3


_LABELS = {
    RefKind.ITEM_IDENTIFIER: "item identifier",
    RefKind.SUBJECT_IDENTIFIER: "subject identifier",
    RefKind.SUBJECT_LOCATOR: "subject locator",
}


@dataclass(frozen=True)
class Ref:
    """Reference to a topic by one of its identities.

    The IRI is always absolute.
    """

    iri: str
    kind: RefKind

    @classmethod
    def item_identifier(cls, iri: str) -> "Ref":
        return cls(iri, RefKind.ITEM_IDENTIFIER)

    @classmethod
    def subject_identifier(cls, iri: str) -> "Ref":
        return cls(iri, RefKind.SUBJECT_IDENTIFIER)

    @classmethod
    def subject_locator(cls, iri: str) -> "Ref":
        return cls(iri, RefKind.SUBJECT_LOCATOR)

    def __str__(self) -> str:
        return f"<{_LABELS[self.kind]} {self.iri}>"
