# src/tm_kit/io/bom.py

import io
import logging
from typing import BinaryIO

logger = logging.getLogger(__name__)

BOM_SIZE = 4

# UTF-32 signatures must be tested before UTF-16, FF FE 00 00 starts with FF FE
_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x00\x00\xfe\xff", "UTF-32BE"),
    (b"\xff\xfe\x00\x00", "UTF-32LE"),
    (b"\xef\xbb\xbf", "UTF-8"),
    (b"\xfe\xff", "UTF-16BE"),
    (b"\xff\xfe", "UTF-16LE"),
)


def read_fully(stream: BinaryIO, size: int) -> bytes:
    """Reads up to ``size`` bytes, less only if the stream is exhausted."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


class BOMInputStream(io.RawIOBase):
    """Binary stream which detects and drops a byte order mark.

    Up to four bytes are read on construction. If they start with a
    UTF-8, UTF-16 or UTF-32 signature, the signature is dropped and
    :attr:`encoding` reports the detected encoding; otherwise all bytes are
    kept and :attr:`encoding` is the ``default_encoding``.

    With ``closefd=False`` closing this stream leaves the wrapped stream
    open, which is what a reader borrowing a caller's stream needs.
    """

    def __init__(
        self,
        stream: BinaryIO,
        default_encoding: str | None = None,
        *,
        closefd: bool = True,
    ) -> None:
        super().__init__()
        self._stream = stream
        self._closefd = closefd
        lead = read_fully(stream, BOM_SIZE)
        self._found_bom = False
        self._encoding = default_encoding
        for signature, encoding in _SIGNATURES:
            if lead.startswith(signature):
                self._found_bom = True
                self._encoding = encoding
                lead = lead[len(signature) :]
                logger.debug("Detected BOM for %s", encoding)
                break
        self._lead = lead

    @property
    def encoding(self) -> str | None:
        """Either the encoding read from the BOM or the default encoding."""
        return self._encoding

    @property
    def found_bom(self) -> bool:
        return self._found_bom

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[override]
        view = memoryview(buffer).cast("B")
        size = len(view)
        if size == 0:
            return 0
        count = 0
        if self._lead:
            count = min(size, len(self._lead))
            view[:count] = self._lead[:count]
            self._lead = self._lead[count:]
            if count == size:
                return count
        data = self._stream.read(size - count)
        if data:
            view[count : count + len(data)] = data
            count += len(data)
        return count

    def unread(self, data: bytes) -> None:
        """Pushes ``data`` back; the next read returns it first."""
        self._lead = bytes(data) + self._lead

    def close(self) -> None:
        if not self.closed and self._closefd:
            self._stream.close()
        super().close()
