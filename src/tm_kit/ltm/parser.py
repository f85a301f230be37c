# src/tm_kit/ltm/parser.py

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Protocol, TextIO

from tm_kit.deserializers.base import IRIContext
from tm_kit.errors import (
    ConfigurationError,
    InvalidQNameError,
    MalformedReferenceError,
    MapSyntaxError,
)
from tm_kit.handlers.base import MapHandler
from tm_kit.handlers.simple import SimpleMapHandler
from tm_kit.values import Literal, Locator, QName, Ref
from tm_kit.voc import TMDM, XTM10

from .lexer import LTMLexer
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)

LTM_VERSION = "1.3"

_SORT = Ref.subject_identifier(TMDM.SORT)
_LEGACY_SORT = Ref.subject_identifier(XTM10.SORT)
_DISPLAY = Ref.subject_identifier(XTM10.DISPLAY)
_DEFAULT_ROLE_TYPE = Ref.subject_identifier(XTM10.ROLE)

_TOPIC_REFS = (TokenType.IDENT, TokenType.QNAME)

_DIRECTIVES = (
    TokenType.DIR_PREFIX,
    TokenType.DIR_BASEURI,
    TokenType.DIR_MERGEMAP,
    TokenType.DIR_INCLUDE,
    TokenType.DIR_VERSION,
    TokenType.DIR_TOPICMAP,
)

_UNICODE_ESCAPE = re.compile(r"\\u([0-9a-fA-F]{4,6})")

# (document IRI, syntax name, including documents)
Loader = Callable[[str, str, tuple[Locator, ...]], None]


class PrefixListener(Protocol):
    """Receives the prefixes and the base IRI declared in an LTM document."""

    def handle_base_locator(self, iri: str) -> None: ...

    def handle_subject_identifier_prefix(self, prefix: str, iri: str) -> None: ...

    def handle_subject_locator_prefix(self, prefix: str, iri: str) -> None: ...


def unescape_unicode(value: str) -> str:
    """Replaces ``\\uXXXX`` (four to six hex digits) by the character.

    Invalid escapes are kept as is.
    """

    def _replace(match: re.Match) -> str:
        code = int(match.group(1), 16)
        if code > 0x10FFFF:
            return match.group(0)
        return chr(code)

    return _UNICODE_ESCAPE.sub(_replace, value)


# Reifiers are kept as the identifier (legacy mode needs it) or as a Ref
# for QNames
_Reifier = str | Ref | None


@dataclass
class _Variant:
    value: str
    scope: list[Ref]
    reifier: _Reifier = None


@dataclass
class _Name:
    value: str
    sort: str | None = None
    display: str | None = None
    scope: list[Ref] = field(default_factory=list)
    reifier: _Reifier = None
    variants: list[_Variant] = field(default_factory=list)


@dataclass
class _Topic:
    ref: Ref
    types: list[Ref] = field(default_factory=list)
    names: list[_Name] = field(default_factory=list)
    subject_identifiers: list[str] = field(default_factory=list)
    subject_locators: list[str] = field(default_factory=list)


@dataclass
class _Role:
    player: Ref
    type: Ref | None
    reifier: _Reifier


class LTMParser:
    """Recursive-descent LTM 1.3 parser which reports to a MapHandler.

    A statement is read completely before its events are reported, topics
    referenced by identifier are reported before the statement itself.
    ``#INCLUDE`` and ``#MERGEMAP`` are delegated to ``loader``.
    """

    def __init__(
        self,
        handler: MapHandler,
        document_iri: str,
        *,
        legacy: bool = False,
        ignore_include: bool = False,
        ignore_mergemap: bool = False,
        subordinate: bool = False,
        context: IRIContext | None = None,
        included_by: Iterable[Locator] = (),
        prefix_listener: PrefixListener | None = None,
        loader: Loader | None = None,
    ) -> None:
        self._handler = SimpleMapHandler.create(handler)
        self._doc_locator = Locator.create(document_iri)
        self._base_locator = self._doc_locator
        self._base_locator_seen = False
        self._legacy = legacy
        self._sort = _LEGACY_SORT if legacy else _SORT
        self._ignore_include = ignore_include
        self._ignore_mergemap = ignore_mergemap
        self._subordinate = subordinate
        self._context = context if context is not None else IRIContext()
        self._context.add(self._doc_locator.to_external_form())
        self._included_by = tuple(included_by)
        self._prefix_listener = prefix_listener
        self._loader = loader
        self._sid_prefixes: dict[str, str] = {}
        self._slo_prefixes: dict[str, str] = {}
        self._lexer: LTMLexer | None = None
        self._tokens = iter(())
        self._lookahead: list[Token] = []

    def parse(self, reader: TextIO) -> None:
        self._lexer = LTMLexer(reader)
        self._tokens = iter(self._lexer)
        self._lookahead = []
        # Encoding declaration, already evaluated by the deserializer
        if self._accept(TokenType.AT):
            self._expect(TokenType.STRING)
        while self._peek() is not None:
            self._statement()

    # --- statements -------------------------------------------------------

    def _statement(self) -> None:
        token = self._peek()
        kind = token.kind  # type: ignore[union-attr]
        if kind is TokenType.LBRACK:
            self._emit_topic(self._topic())
        elif kind is TokenType.LCURLY:
            self._occurrence()
        elif kind in _TOPIC_REFS:
            self._association()
        elif kind in _DIRECTIVES:
            self._directive()
        else:
            raise self._unexpected("a topic, an association, an occurrence or a directive")

    def _directive(self) -> None:
        token = self._consume()
        kind = token.kind
        if kind is TokenType.DIR_VERSION:
            version = self._expect(TokenType.STRING)
            if version.value != LTM_VERSION:
                raise self._error(
                    f"Invalid version. Expected '{LTM_VERSION}', got '{version.value}'",
                    version,
                )
        elif kind is TokenType.DIR_TOPICMAP:
            if self._at_single_ref(TokenType.IDENT):
                self._topic_map_item_identifier(self._consume())
            if self._accept(TokenType.TILDE):
                self._topic_map_reifier(self._expect(TokenType.IDENT))
        elif kind is TokenType.DIR_BASEURI:
            self._register_base_locator(self._expect(TokenType.STRING))
        elif kind is TokenType.DIR_PREFIX:
            prefix = self._expect(TokenType.IDENT)
            if self._accept(TokenType.AT):
                iri = self._expect(TokenType.STRING)
                self._register_prefix(prefix, iri, self._sid_prefixes)
                if self._prefix_listener is not None:
                    self._prefix_listener.handle_subject_identifier_prefix(
                        prefix.value, iri.value
                    )
            elif self._accept(TokenType.PERCENT):
                iri = self._expect(TokenType.STRING)
                self._register_prefix(prefix, iri, self._slo_prefixes)
                if self._prefix_listener is not None:
                    self._prefix_listener.handle_subject_locator_prefix(
                        prefix.value, iri.value
                    )
            else:
                raise self._unexpected("'@' or '%'")
        elif kind is TokenType.DIR_INCLUDE:
            iri = self._expect(TokenType.STRING)
            if not self._ignore_include:
                self._load(iri, "ltm", (*self._included_by, self._doc_locator))
        elif kind is TokenType.DIR_MERGEMAP:
            iri = self._expect(TokenType.STRING)
            syntax = self._accept(TokenType.STRING)
            if not self._ignore_mergemap:
                self._load(iri, syntax.value if syntax else "ltm", ())

    def _topic(self) -> _Topic:
        self._expect(TokenType.LBRACK)
        topic = _Topic(self._topic_ref())
        if self._accept(TokenType.COLON):
            topic.types.append(self._topic_ref())
            while self._at(*_TOPIC_REFS):
                topic.types.append(self._topic_ref())
        while True:
            if self._accept(TokenType.EQ):
                topic.names.append(self._name())
            elif self._accept(TokenType.AT):
                iri = self._expect(TokenType.STRING)
                topic.subject_identifiers.append(self._resolve_iri(iri.value, iri))
            elif self._accept(TokenType.PERCENT):
                iri = self._expect(TokenType.STRING)
                topic.subject_locators.append(self._resolve_iri(iri.value, iri))
            else:
                break
        self._expect(TokenType.RBRACK)
        return topic

    def _name(self) -> _Name:
        name = _Name(self._string(self._expect(TokenType.STRING)))
        if self._accept(TokenType.SEMI):
            sort = self._accept(TokenType.STRING)
            if sort is not None:
                name.sort = self._string(sort)
            if self._accept(TokenType.SEMI):
                name.display = self._string(self._expect(TokenType.STRING))
        name.scope = self._scope(in_topic=True)
        name.reifier = self._reifier()
        while self._at(TokenType.LPAREN):
            name.variants.append(self._variant())
        return name

    def _variant(self) -> _Variant:
        self._expect(TokenType.LPAREN)
        value = self._string(self._expect(TokenType.STRING))
        scope = self._scope(required=True, in_topic=True)
        reifier = self._reifier()
        self._expect(TokenType.RPAREN)
        return _Variant(value, scope, reifier)

    def _occurrence(self) -> None:
        self._expect(TokenType.LCURLY)
        topic = self._topic_ref()
        self._expect(TokenType.COMMA)
        type = self._topic_ref()
        self._expect(TokenType.COMMA)
        token = self._peek()
        if token is not None and token.kind is TokenType.STRING:
            value = Literal.create_iri(self._resolve_iri(token.value, token))
        elif token is not None and token.kind is TokenType.DATA:
            value = Literal.create_string(unescape_unicode(token.value))
        else:
            raise self._unexpected("a string or a data block")
        self._consume()
        self._expect(TokenType.RCURLY)
        scope = self._scope()
        reifier = self._reifier()

        handler = self._handler
        handler.start_topic(topic)
        handler.start_typed_occurrence(type)
        handler.value(value.value, value.datatype)
        handler.scope(scope)
        self._emit_reifier(reifier)
        handler.end_occurrence()
        handler.end_topic()

    def _association(self) -> None:
        type = self._topic_ref()
        self._expect(TokenType.LPAREN)
        roles = [self._role()]
        while self._accept(TokenType.COMMA):
            roles.append(self._role())
        self._expect(TokenType.RPAREN)
        scope = self._scope()
        reifier = self._reifier()

        handler = self._handler
        handler.start_typed_association(type)
        for role in roles:
            handler.start_typed_role(role.type or _DEFAULT_ROLE_TYPE)
            self._emit_reifier(role.reifier)
            handler.player(role.player)
            handler.end_role()
        handler.scope(scope)
        self._emit_reifier(reifier)
        handler.end_association()

    def _role(self) -> _Role:
        if self._at(TokenType.LBRACK):
            topic = self._topic()
            self._emit_topic(topic)
            player = topic.ref
        else:
            player = self._topic_ref()
        reifier = self._reifier()
        type = self._topic_ref() if self._accept(TokenType.COLON) else None
        return _Role(player, type, reifier)

    def _scope(self, required: bool = False, in_topic: bool = False) -> list[Ref]:
        if required:
            self._expect(TokenType.SLASH)
        elif not self._accept(TokenType.SLASH):
            return []
        themes = [self._topic_ref()]
        # Outside a topic block a theme followed by "(" starts an association
        more = self._at if in_topic else self._at_single_ref
        while more(*_TOPIC_REFS):
            themes.append(self._topic_ref())
        return themes

    def _reifier(self) -> _Reifier:
        if not self._accept(TokenType.TILDE):
            return None
        token = self._peek()
        if token is None or token.kind not in _TOPIC_REFS:
            raise self._unexpected("a topic reference")
        self._consume()
        if token.kind is TokenType.QNAME:
            return self._qname_ref(token)
        return token.value

    # --- event emission ---------------------------------------------------

    def _emit_topic(self, topic: _Topic) -> None:
        handler = self._handler
        handler.start_topic(topic.ref)
        for type in topic.types:
            handler.isa(type)
        for iri in topic.subject_identifiers:
            handler.subject_identifier(iri)
        for iri in topic.subject_locators:
            handler.subject_locator(iri)
        for name in topic.names:
            self._emit_name(name)
        handler.end_topic()

    def _emit_name(self, name: _Name) -> None:
        handler = self._handler
        handler.start_name()
        handler.value(name.value)
        handler.scope(name.scope)
        self._emit_reifier(name.reifier)
        if name.sort is not None:
            self._emit_variant(_Variant(name.sort, [self._sort]))
        if name.display is not None:
            self._emit_variant(_Variant(name.display, [_DISPLAY]))
        for variant in name.variants:
            self._emit_variant(variant)
        handler.end_name()

    def _emit_variant(self, variant: _Variant) -> None:
        handler = self._handler
        handler.start_variant()
        literal = Literal.create_string(variant.value)
        handler.value(literal.value, literal.datatype)
        handler.scope(variant.scope)
        self._emit_reifier(variant.reifier)
        handler.end_variant()

    def _emit_reifier(self, reifier: _Reifier) -> None:
        if reifier is None or isinstance(reifier, Ref):
            self._handler.reifier(reifier)
            return
        ref = Ref.item_identifier(self._resolve_locator("#" + reifier).reference)
        if not self._legacy:
            self._handler.reifier(ref)
            return
        # XTM 1.0 reification: the reifier's subject identifier is an item
        # identifier of the reified construct
        iri = self._base_locator.resolve("#--reified--" + reifier).reference
        handler = self._handler
        handler.item_identifier(iri)
        handler.start_reifier()
        handler.start_topic(ref)
        handler.subject_identifier(iri)
        handler.end_topic()
        handler.end_reifier()

    def _topic_map_item_identifier(self, token: Token) -> None:
        if not self._subordinate:
            self._handler.item_identifier(self._resolve_iri("#" + token.value, token))

    def _topic_map_reifier(self, token: Token) -> None:
        if self._legacy or not self._subordinate:
            self._emit_reifier(token.value)
            return
        # Only the top-level map gets a reifier
        self._handler.start_topic(
            Ref.item_identifier(self._resolve_iri("#" + token.value, token))
        )
        self._handler.end_topic()

    # --- references -------------------------------------------------------

    def _topic_ref(self) -> Ref:
        token = self._peek()
        if token is None or token.kind not in _TOPIC_REFS:
            raise self._unexpected("a topic reference")
        self._consume()
        if token.kind is TokenType.QNAME:
            return self._qname_ref(token)
        return self._create_topic(token)

    def _create_topic(self, token: Token) -> Ref:
        fragment = "#" + token.value
        ref = Ref.item_identifier(self._resolve_iri(fragment, token))
        handler = self._handler
        handler.start_topic(ref)
        for locator in self._included_by:
            handler.item_identifier(locator.resolve(fragment).reference)
        handler.end_topic()
        return ref

    def _qname_ref(self, token: Token) -> Ref:
        try:
            qname = QName.create(token.value)
        except InvalidQNameError as exc:
            raise self._error(str(exc), token) from exc
        iri = self._sid_prefixes.get(qname.prefix)
        if iri is not None:
            return Ref.subject_identifier(self._resolve_iri(iri + qname.local, token))
        iri = self._slo_prefixes.get(qname.prefix)
        if iri is not None:
            return Ref.subject_locator(self._resolve_iri(iri + qname.local, token))
        raise self._error(f"The prefix '{qname.prefix}' is not registered", token)

    def _register_prefix(
        self, prefix: Token, iri: Token, prefixes: dict[str, str]
    ) -> None:
        if prefix.value in self._sid_prefixes or prefix.value in self._slo_prefixes:
            raise self._error(
                f"The prefix '{prefix.value}' is already registered", prefix
            )
        prefixes[prefix.value] = iri.value
        logger.debug("Registered prefix %s -> %s", prefix.value, iri.value)

    def _register_base_locator(self, token: Token) -> None:
        if self._base_locator_seen:
            raise self._error("The base locator was already set", token)
        self._base_locator_seen = True
        self._base_locator = self._locator(token.value, token)
        if self._prefix_listener is not None:
            self._prefix_listener.handle_base_locator(token.value)

    def _load(self, token: Token, syntax: str, included_by: tuple[Locator, ...]) -> None:
        locator = self._locator(token.value, token)
        iri = locator.to_external_form()
        if not self._context.add(iri):
            logger.debug("Skipping %s, already loaded", iri)
            return
        if self._loader is None:
            raise ConfigurationError(f"Cannot load '{iri}': no loader configured")
        logger.debug("Loading %s as %s", iri, syntax)
        self._loader(iri, syntax, included_by)

    def _resolve_locator(self, iri: str) -> Locator:
        if iri.startswith("#"):
            return self._doc_locator.resolve(iri)
        return self._base_locator.resolve(iri)

    def _locator(self, iri: str, token: Token) -> Locator:
        try:
            return self._resolve_locator(iri)
        except MalformedReferenceError as exc:
            raise self._error(str(exc), token) from exc

    def _resolve_iri(self, iri: str, token: Token) -> str:
        return self._locator(iri, token).reference

    @staticmethod
    def _string(token: Token) -> str:
        return unescape_unicode(token.value.replace('""', '"'))

    # --- token stream -----------------------------------------------------

    def _peek(self, offset: int = 0) -> Token | None:
        while len(self._lookahead) <= offset:
            token = next(self._tokens, None)
            if token is None:
                return None
            self._lookahead.append(token)
        return self._lookahead[offset]

    def _consume(self) -> Token:
        token = self._peek()
        if token is None:
            raise self._unexpected("a token")
        self._lookahead.pop(0)
        return token

    def _at(self, *kinds: TokenType) -> bool:
        token = self._peek()
        return token is not None and token.kind in kinds

    def _at_single_ref(self, *kinds: TokenType) -> bool:
        """True if the next token is of ``kinds`` and does not start an
        association."""
        if not self._at(*kinds):
            return False
        following = self._peek(1)
        return following is None or following.kind is not TokenType.LPAREN

    def _accept(self, kind: TokenType) -> Token | None:
        if self._at(kind):
            return self._consume()
        return None

    def _expect(self, kind: TokenType) -> Token:
        if not self._at(kind):
            raise self._unexpected(str(kind))
        return self._consume()

    def _error(self, message: str, token: Token | None = None) -> MapSyntaxError:
        if token is not None:
            return MapSyntaxError(message, token.line, token.column)
        line, column = self._lexer.position() if self._lexer else (None, None)
        return MapSyntaxError(message, line, column)

    def _unexpected(self, expected: str) -> MapSyntaxError:
        token = self._peek()
        if token is None:
            return self._error(f"Unexpected end of input, expected {expected}")
        return self._error(
            f"Unexpected {token.kind} '{token.value}', expected {expected}", token
        )
