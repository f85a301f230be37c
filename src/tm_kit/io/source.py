# src/tm_kit/io/source.py

import logging
from typing import BinaryIO, TextIO

from tm_kit.errors import ArgumentError
from tm_kit.values.locator import Locator

logger = logging.getLogger(__name__)


class Source:
    """Input of a parse: one stream plus the base IRI of the document.

    Exactly one of ``byte_stream`` and ``character_stream`` is set, unless
    the source was created by :meth:`from_iri`; the deserializer then opens
    the IRI itself.
    """

    def __init__(
        self,
        *,
        byte_stream: BinaryIO | None = None,
        character_stream: TextIO | None = None,
        base_iri: str | None = None,
        encoding: str | None = None,
        iri: str | None = None,
    ) -> None:
        if byte_stream is not None and character_stream is not None:
            raise ArgumentError(
                "A source provides either a byte stream or a character stream"
            )
        self.byte_stream = byte_stream
        self.character_stream = character_stream
        self.base_iri = base_iri
        self.encoding = encoding
        self.iri = iri
        self._closed = False

    @classmethod
    def from_bytes(
        cls, stream: BinaryIO, base_iri: str, encoding: str | None = None
    ) -> "Source":
        return cls(byte_stream=stream, base_iri=base_iri, encoding=encoding)

    @classmethod
    def from_text(
        cls, stream: TextIO, base_iri: str, encoding: str | None = None
    ) -> "Source":
        return cls(character_stream=stream, base_iri=base_iri, encoding=encoding)

    @classmethod
    def from_iri(cls, iri: str) -> "Source":
        """A source which is read from ``iri``; the IRI is also the base."""
        return cls(base_iri=iri, iri=iri)

    @property
    def base_locator(self) -> Locator:
        return Locator.create(self.base_iri)  # type: ignore[arg-type]

    @property
    def has_stream(self) -> bool:
        return self.byte_stream is not None or self.character_stream is not None

    def close(self) -> None:
        """Closes the underlying stream. Subsequent calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        stream = self.byte_stream if self.byte_stream is not None else self.character_stream
        if stream is not None:
            logger.debug("Closing source stream of %s", self.base_iri)
            stream.close()

    def __repr__(self) -> str:
        kind = (
            "bytes"
            if self.byte_stream is not None
            else "text"
            if self.character_stream is not None
            else "iri"
        )
        return f"Source(kind={kind!r}, base_iri={self.base_iri!r})"
