# src/tm_kit/deserializers/syntax.py

import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Iterable

import yaml
from pydantic import BaseModel, ConfigDict

from tm_kit.errors import ConfigurationError

logger = logging.getLogger(__name__)

_BUILTIN_TABLE = "syntaxes.yaml"


class Syntax(BaseModel):
    """A concrete topic map notation.

    ``name`` is the stable identifier under which deserializers are
    registered; lookups by name, MIME type and file extension ignore case.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    description: str = ""
    mime_types: tuple[str, ...] = ()
    file_extensions: tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.name


class SyntaxCatalog:
    def __init__(self, syntaxes: Iterable[Syntax] = ()) -> None:
        self._syntaxes: dict[str, Syntax] = {}
        self._by_extension: dict[str, Syntax] = {}
        self._by_mime_type: dict[str, Syntax] = {}
        for syntax in syntaxes:
            self.add(syntax)

    @classmethod
    def default(cls) -> "SyntaxCatalog":
        """Returns a catalog with the built-in syntaxes."""
        return cls(_builtin_syntaxes())

    @classmethod
    def from_directory(cls, directory: str | Path) -> "SyntaxCatalog":
        """Returns a catalog with the syntaxes of all ``*.yaml`` files in
        ``directory``."""
        path = Path(directory)
        logger.info("Loading syntaxes from directory: %s", path)
        catalog = cls()
        for file_path in sorted(path.glob("*.yaml")):
            with open(file_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
            for syntax in _parse_table(data, str(file_path)):
                catalog.add(syntax)
        logger.info("Loaded %d syntaxes", len(catalog))
        return catalog

    def add(self, syntax: Syntax) -> None:
        key = syntax.name.lower()
        if key in self._syntaxes:
            logger.debug("Replacing syntax: %s", syntax.name)
        self._syntaxes[key] = syntax
        for ext in syntax.file_extensions:
            self._by_extension[ext.lower()] = syntax
        for mime_type in syntax.mime_types:
            self._by_mime_type[mime_type.lower()] = syntax

    def get(self, name: str, default: Syntax | None = None) -> Syntax | None:
        return self._syntaxes.get(name.lower(), default)

    def for_file_extension(
        self, ext: str, default: Syntax | None = None
    ) -> Syntax | None:
        """Returns the syntax for ``ext``; a leading dot is ignored."""
        return self._by_extension.get(ext.lower().lstrip("."), default)

    def for_filename(
        self, filename: str, default: Syntax | None = None
    ) -> Syntax | None:
        """Returns the syntax for the extension of ``filename``.

        ``filename`` must contain a dot, ``"n3"`` alone is not a filename.
        """
        if "." not in filename:
            return default
        return self.for_file_extension(filename.rsplit(".", 1)[1], default)

    def for_mime_type(
        self, mime_type: str, default: Syntax | None = None
    ) -> Syntax | None:
        """Returns the syntax for ``mime_type``, parameters like
        ``; charset=utf-8`` are ignored."""
        key = mime_type.split(";", 1)[0].strip().lower()
        return self._by_mime_type.get(key, default)

    def list(self) -> list[Syntax]:
        return list(self._syntaxes.values())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._syntaxes

    def __len__(self) -> int:
        return len(self._syntaxes)


def _parse_table(data: Any, origin: str) -> list[Syntax]:
    if not isinstance(data, dict) or not isinstance(data.get("syntaxes"), list):
        raise ConfigurationError(f"Expected a 'syntaxes' list in {origin}")
    return [Syntax(**entry) for entry in data["syntaxes"]]


@lru_cache(maxsize=None)
def _builtin_syntaxes() -> tuple[Syntax, ...]:
    text = (
        resources.files("tm_kit.deserializers")
        .joinpath(_BUILTIN_TABLE)
        .read_text(encoding="utf-8")
    )
    syntaxes = tuple(_parse_table(yaml.safe_load(text), _BUILTIN_TABLE))
    logger.info("Loaded %d built-in syntaxes", len(syntaxes))
    return syntaxes
