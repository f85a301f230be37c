# src/tm_kit/values/literal.py

from dataclasses import dataclass

from tm_kit.errors import ArgumentError
from tm_kit.voc import XSD


@dataclass(frozen=True)
class Literal:
    """Immutable value/datatype pair.

    No validation of the value against its datatype takes place.
    """

    value: str
    datatype: str

    def __post_init__(self) -> None:
        if self.value is None:
            raise ArgumentError("The value must not be None")
        if self.datatype is None:
            raise ArgumentError("The datatype must not be None")

    @classmethod
    def create(cls, value: str, datatype: str) -> "Literal":
        return cls(value, datatype)

    @classmethod
    def create_string(cls, value: str) -> "Literal":
        """Creates a literal with the datatype ``xsd:string``."""
        return cls(value, XSD.STRING)

    @classmethod
    def create_iri(cls, value: str) -> "Literal":
        """Creates a literal with the datatype ``xsd:anyURI``."""
        return cls(value, XSD.ANY_URI)

    @classmethod
    def create_integer(cls, value: str) -> "Literal":
        """Creates a literal with the datatype ``xsd:integer``."""
        return cls(value, XSD.INTEGER)

    @classmethod
    def create_decimal(cls, value: str) -> "Literal":
        """Creates a literal with the datatype ``xsd:decimal``."""
        return cls(value, XSD.DECIMAL)

    @classmethod
    def create_date(cls, value: str) -> "Literal":
        """Creates a literal with the datatype ``xsd:date``."""
        return cls(value, XSD.DATE)

    @classmethod
    def create_date_time(cls, value: str) -> "Literal":
        """Creates a literal with the datatype ``xsd:dateTime``."""
        return cls(value, XSD.DATE_TIME)

    @classmethod
    def create_year_month(cls, value: str) -> "Literal":
        """Creates a literal with the datatype ``xsd:gYearMonth``."""
        return cls(value, XSD.G_YEAR_MONTH)
