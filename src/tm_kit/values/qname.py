import re
from dataclasses import dataclass

from tm_kit.errors import InvalidQNameError

_PART = re.compile(r"\w[\w.\-]*\Z")


@dataclass(frozen=True)
class QName:
    """A prefixed name ``prefix:local``.

    No IRI expansion takes place; mapping the prefix to an IRI is up to the
    caller.
    """

    prefix: str
    local: str

    @classmethod
    def create(cls, text: str) -> "QName":
        parts = text.split(":") if text is not None else []
        if len(parts) != 2 or not all(_PART.match(part) for part in parts):
            raise InvalidQNameError(f"Illegal QName: '{text}'")
        return cls(parts[0], parts[1])

    def __str__(self) -> str:
        return f"{self.prefix}:{self.local}"
