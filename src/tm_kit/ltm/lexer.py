# src/tm_kit/ltm/lexer.py

from enum import Enum
from typing import Iterator, TextIO

from tm_kit.errors import UnexpectedCharacterError, UnterminatedTokenError

from .tokens import DIRECTIVES, PUNCTUATION, Token, TokenType


_CHUNK_SIZE = 4096


class LexerState(str, Enum):
    DEFAULT = "default"
    IN_STRING = "in_string"
    IN_DATA_BLOCK = "in_data_block"
    SKIPPING = "skipping"


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _is_ident_part(ch: str) -> bool:
    return ch.isalnum() or ch in "_-."


class LTMLexer:
    """Pull-based LTM scanner.

    Usage::

        lexer = LTMLexer(reader)
        while lexer.advance():
            print(lexer.token(), lexer.value())

    String values are returned without the surrounding quotes; a doubled
    quote stays doubled. Data block values are the characters between
    ``[[`` and ``]]``. The lexer cannot be restarted, a new input needs a
    new instance.
    """

    def __init__(self, reader: TextIO) -> None:
        self._reader = reader
        self._buffer = ""
        self._pos = 0
        self._eof = False
        self._line = 1
        self._column = 1
        self._at_start = True
        self._state = LexerState.DEFAULT
        self._kind: TokenType | None = None
        self._value: str | None = None
        self._token_line = 0
        self._token_column = 0

    @property
    def state(self) -> LexerState:
        return self._state

    def advance(self) -> bool:
        """Reads the next token. Returns False at the end of the input."""
        if self._at_start:
            self._at_start = False
            if self._peek() == "\ufeff":
                self._pos += 1
        self._skip()
        ch = self._peek()
        if not ch:
            self._kind = None
            self._value = None
            return False

        self._token_line = self._line
        self._token_column = self._column
        if ch == '"':
            self._scan_string()
        elif ch == "[" and self._peek(1) == "[":
            self._scan_data()
        elif ch == "#":
            self._scan_directive()
        elif _is_ident_start(ch):
            self._scan_name()
        elif ch in PUNCTUATION:
            self._read()
            self._emit(PUNCTUATION[ch], ch)
        else:
            raise UnexpectedCharacterError(
                f"Unexpected character {ch!r}", self._line, self._column
            )
        return True

    def token(self) -> TokenType | None:
        return self._kind

    def value(self) -> str | None:
        return self._value

    def line(self) -> int:
        """Line of the start of the current token."""
        return self._token_line

    def column(self) -> int:
        return self._token_column

    def position(self) -> tuple[int, int]:
        """Current read position, which is past the current token."""
        return self._line, self._column

    def current(self) -> Token | None:
        if self._kind is None:
            return None
        return Token(self._kind, self._value or "", self._token_line, self._token_column)

    def __iter__(self) -> Iterator[Token]:
        while self.advance():
            yield Token(self._kind, self._value, self._token_line, self._token_column)  # type: ignore[arg-type]

    def _emit(self, kind: TokenType, value: str) -> None:
        self._kind = kind
        self._value = value
        self._state = LexerState.DEFAULT

    def _skip(self) -> None:
        self._state = LexerState.SKIPPING
        while True:
            ch = self._peek()
            if ch and ch.isspace():
                self._read()
            elif ch == "/" and self._peek(1) == "*":
                self._skip_comment()
            else:
                break
        self._state = LexerState.DEFAULT

    def _skip_comment(self) -> None:
        line, column = self._line, self._column
        self._read()
        self._read()
        while True:
            ch = self._read()
            if not ch:
                raise UnterminatedTokenError("Unterminated comment", line, column)
            if ch == "*" and self._peek() == "/":
                self._read()
                return

    def _scan_string(self) -> None:
        self._state = LexerState.IN_STRING
        self._read()
        chars = []
        while True:
            ch = self._read()
            if not ch:
                raise UnterminatedTokenError(
                    "Unterminated string", self._token_line, self._token_column
                )
            if ch == '"':
                if self._peek() != '"':
                    break
                self._read()
                chars.append('""')
            else:
                chars.append(ch)
        self._emit(TokenType.STRING, "".join(chars))

    def _scan_data(self) -> None:
        self._state = LexerState.IN_DATA_BLOCK
        self._read()
        self._read()
        depth = 0
        chars = []
        while True:
            ch = self._read()
            if not ch:
                raise UnterminatedTokenError(
                    "Unterminated data block", self._token_line, self._token_column
                )
            if ch == "]":
                if depth == 0 and self._peek() == "]":
                    self._read()
                    break
                if depth > 0:
                    depth -= 1
            elif ch == "[":
                depth += 1
            chars.append(ch)
        self._emit(TokenType.DATA, "".join(chars))

    def _scan_directive(self) -> None:
        line, column = self._line, self._column
        self._read()
        if not _is_ident_start(self._peek()):
            raise UnexpectedCharacterError("Unexpected character '#'", line, column)
        name = self._read_ident()
        kind = DIRECTIVES.get(name)
        if kind is None:
            raise UnexpectedCharacterError(f"Unknown directive '#{name}'", line, column)
        self._emit(kind, "#" + name)

    def _scan_name(self) -> None:
        name = self._read_ident()
        local = self._peek(1)
        if self._peek() == ":" and (local.isalnum() or local == "_"):
            self._read()
            self._emit(TokenType.QNAME, f"{name}:{self._read_ident()}")
        else:
            self._emit(TokenType.IDENT, name)

    def _read_ident(self) -> str:
        chars = [self._read()]
        while True:
            ch = self._peek()
            if not ch or not _is_ident_part(ch):
                break
            chars.append(self._read())
        return "".join(chars)

    def _fill(self, count: int) -> bool:
        while len(self._buffer) - self._pos < count and not self._eof:
            chunk = self._reader.read(_CHUNK_SIZE)
            if not chunk:
                self._eof = True
                break
            self._buffer = self._buffer[self._pos :] + chunk
            self._pos = 0
        return len(self._buffer) - self._pos >= count

    def _peek(self, offset: int = 0) -> str:
        if not self._fill(offset + 1):
            return ""
        return self._buffer[self._pos + offset]

    def _read(self) -> str:
        ch = self._peek()
        if not ch:
            return ""
        self._pos += 1
        # \r\n counts as one line break
        if ch == "\n" or (ch == "\r" and self._peek() != "\n"):
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch
