# src/tm_kit/values/locator.py

import re
from dataclasses import dataclass
from urllib.parse import quote

from tm_kit.errors import MalformedReferenceError

# RFC 3986, appendix B
_URI_PATTERN = re.compile(
    r"^(?:(?P<scheme>[^:/?#]+):)?"
    r"(?://(?P<authority>[^/?#]*))?"
    r"(?P<path>[^?#]*)"
    r"(?:\?(?P<query>[^#]*))?"
    r"(?:#(?P<fragment>.*))?$",
    re.DOTALL,
)

_SCHEME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*\Z")
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")
_ILLEGAL_CHARS = frozenset('<>"{}|\\^`')

# Characters which are kept verbatim by to_external_form()
_EXTERNAL_SAFE = "!#$%&'()*+,/:;=?@[]~-._"


@dataclass(frozen=True)
class _Components:
    scheme: str | None
    authority: str | None
    path: str
    query: str | None
    fragment: str | None

    def unsplit(self) -> str:
        result = []
        if self.scheme is not None:
            result.append(self.scheme)
            result.append(":")
        if self.authority is not None:
            result.append("//")
            result.append(self.authority)
        result.append(self.path)
        if self.query is not None:
            result.append("?")
            result.append(self.query)
        if self.fragment is not None:
            result.append("#")
            result.append(self.fragment)
        return "".join(result)


def _split(reference: str) -> _Components:
    match = _URI_PATTERN.match(reference)
    if match is None:  # pragma: no cover - the pattern matches any string
        raise MalformedReferenceError(f"Illegal IRI: '{reference}'")
    return _Components(
        scheme=match.group("scheme"),
        authority=match.group("authority"),
        path=match.group("path"),
        query=match.group("query"),
        fragment=match.group("fragment"),
    )


def _check(reference: str) -> None:
    if not reference:
        raise MalformedReferenceError("The IRI must not be empty")
    for ch in reference:
        if ch.isspace() or ord(ch) < 0x20 or ch in _ILLEGAL_CHARS:
            raise MalformedReferenceError(
                f"Illegal character {ch!r} in IRI: '{reference}'"
            )
    if _BAD_PERCENT.search(reference):
        raise MalformedReferenceError(f"Illegal percent escape in IRI: '{reference}'")
    scheme = _split(reference).scheme
    if scheme is not None and not _SCHEME_PATTERN.match(scheme):
        raise MalformedReferenceError(f"Illegal scheme in IRI: '{reference}'")


def remove_dot_segments(path: str) -> str:
    """Removes ``.`` and ``..`` segments from an (absolute or relative) path.

    Follows RFC 3986, section 5.2.4.
    """
    output: list[str] = []
    while path:
        if path.startswith("../"):
            path = path[3:]
        elif path.startswith("./"):
            path = path[2:]
        elif path.startswith("/./"):
            path = path[2:]
        elif path == "/.":
            path = "/"
        elif path.startswith("/../"):
            path = path[3:]
            if output:
                output.pop()
        elif path == "/..":
            path = "/"
            if output:
                output.pop()
        elif path in (".", ".."):
            path = ""
        else:
            start = 1 if path.startswith("/") else 0
            end = path.find("/", start)
            if end == -1:
                end = len(path)
            output.append(path[:end])
            path = path[end:]
    return "".join(output)


def _merge(base: _Components, path: str) -> str:
    if base.authority is not None and not base.path:
        return "/" + path
    return base.path[: base.path.rfind("/") + 1] + path


@dataclass(frozen=True)
class Locator:
    """An immutable IRI.

    Equality and hashing use the reference string as is: no case folding,
    default port removal or percent decoding takes place.
    """

    reference: str

    @classmethod
    def create(cls, reference: str) -> "Locator":
        """Returns a locator for ``reference``.

        Raises:
            MalformedReferenceError: If ``reference`` is not a valid IRI.
        """
        if reference is None:
            raise MalformedReferenceError("The IRI must not be None")
        _check(reference)
        return cls(reference)

    def resolve(self, reference: str) -> "Locator":
        """Resolves ``reference`` against this locator (RFC 3986, 5.2.2).

        An absolute ``reference`` is returned as is, the base is ignored.
        """
        if reference == "":
            return self
        _check(reference)
        rel = _split(reference)
        if rel.scheme is not None:
            return Locator(reference)
        base = _split(self.reference)
        if rel.authority is not None:
            authority = rel.authority
            path = remove_dot_segments(rel.path)
            query = rel.query
        else:
            authority = base.authority
            if not rel.path:
                path = base.path
                query = rel.query if rel.query is not None else base.query
            else:
                if rel.path.startswith("/"):
                    path = remove_dot_segments(rel.path)
                else:
                    path = remove_dot_segments(_merge(base, rel.path))
                query = rel.query
        result = _Components(
            scheme=base.scheme,
            authority=authority,
            path=path,
            query=query,
            fragment=rel.fragment,
        )
        return Locator(result.unsplit())

    def to_external_form(self) -> str:
        """Returns the reference with non-ASCII characters percent-encoded."""
        return quote(self.reference, safe=_EXTERNAL_SAFE)

    def __str__(self) -> str:
        return self.reference
