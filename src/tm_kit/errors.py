# src/tm_kit/errors.py

"""Exception taxonomy for tm-kit.

Usage errors (``ArgumentError``, ``ConfigurationError``) are raised before
any I/O happens. Value errors (``MalformedReferenceError``,
``InvalidQNameError``) always surface to the immediate caller. Lexical errors
are ``MapSyntaxError`` subclasses, so a parser propagates them unchanged.
"""


class TopicMapError(Exception):
    """Base class for all tm-kit errors."""


class ArgumentError(TopicMapError, ValueError):
    """An argument is missing or has an illegal value."""


class ConfigurationError(TopicMapError, RuntimeError):
    """The object is not in a state that permits the operation."""


class MalformedReferenceError(TopicMapError, ValueError):
    """A string cannot be interpreted as an IRI."""


class InvalidQNameError(TopicMapError, ValueError):
    """A string is not of the form ``prefix:local``."""


class MapSyntaxError(TopicMapError):
    """A document violates the grammar of its syntax."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ) -> None:
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class UnterminatedTokenError(MapSyntaxError):
    """The input ended inside a string, data block or comment."""


class UnexpectedCharacterError(MapSyntaxError):
    """A character cannot start any token."""
