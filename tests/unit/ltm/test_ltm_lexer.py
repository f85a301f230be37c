import io

import pytest

from tm_kit.errors import MapSyntaxError, UnexpectedCharacterError, UnterminatedTokenError
from tm_kit.ltm.lexer import LexerState, LTMLexer
from tm_kit.ltm.tokens import Token, TokenType as T


def _lex(text: str) -> list[tuple[T, str]]:
    return [(t.kind, t.value) for t in LTMLexer(io.StringIO(text))]


def _kinds(text: str) -> list[T]:
    return [kind for kind, _ in _lex(text)]


@pytest.mark.parametrize(
    "text, kind",
    [
        ("#PREFIX", T.DIR_PREFIX),
        ("#BASEURI", T.DIR_BASEURI),
        ("#MERGEMAP", T.DIR_MERGEMAP),
        ("#INCLUDE", T.DIR_INCLUDE),
        ("#VERSION", T.DIR_VERSION),
        ("#TOPICMAP", T.DIR_TOPICMAP),
    ],
)
def test_directives(text: str, kind: T) -> None:
    assert _lex(text) == [(kind, text)]


def test_prefix_directive() -> None:
    assert _lex('#PREFIX ident @"http://psi.semagia.com/"') == [
        (T.DIR_PREFIX, "#PREFIX"),
        (T.IDENT, "ident"),
        (T.AT, "@"),
        (T.STRING, "http://psi.semagia.com/"),
    ]


def test_topic_with_unusual_identifier() -> None:
    assert _lex("[Semagi.-_a]") == [
        (T.LBRACK, "["),
        (T.IDENT, "Semagi.-_a"),
        (T.RBRACK, "]"),
    ]


def test_topic_with_name() -> None:
    assert _lex('[semagia = "Semagia"]') == [
        (T.LBRACK, "["),
        (T.IDENT, "semagia"),
        (T.EQ, "="),
        (T.STRING, "Semagia"),
        (T.RBRACK, "]"),
    ]


def test_association() -> None:
    assert _kinds("format-for(ltm : format, topic-maps : standard)") == [
        T.IDENT,
        T.LPAREN,
        T.IDENT,
        T.COLON,
        T.IDENT,
        T.COMMA,
        T.IDENT,
        T.COLON,
        T.IDENT,
        T.RPAREN,
    ]


def test_all_punctuation() -> None:
    assert _kinds("[](){}@%=;:,~/") == [
        T.LBRACK,
        T.RBRACK,
        T.LPAREN,
        T.RPAREN,
        T.LCURLY,
        T.RCURLY,
        T.AT,
        T.PERCENT,
        T.EQ,
        T.SEMI,
        T.COLON,
        T.COMMA,
        T.TILDE,
        T.SLASH,
    ]


def test_qname() -> None:
    assert _lex("[ex:lara]") == [
        (T.LBRACK, "["),
        (T.QNAME, "ex:lara"),
        (T.RBRACK, "]"),
    ]


def test_colon_followed_by_space_is_not_a_qname() -> None:
    assert _kinds("ex: lara") == [T.IDENT, T.COLON, T.IDENT]


def test_qname_local_part_may_start_with_digit() -> None:
    assert _lex("ex:123") == [(T.QNAME, "ex:123")]


class TestDataBlocks:
    """Occurrence data between ``[[`` and ``]]``."""

    def test_simple_statement(self) -> None:
        assert _lex("{simple, statement, [[hello]world]]}") == [
            (T.LCURLY, "{"),
            (T.IDENT, "simple"),
            (T.COMMA, ","),
            (T.IDENT, "statement"),
            (T.DATA, "hello]world"),
            (T.RCURLY, "}"),
        ]

    def test_single_bracket_before_end(self) -> None:
        assert _lex("[[] ]]") == [(T.DATA, "] ")]

    def test_balanced_brackets(self) -> None:
        assert _lex("[[a [b] c]]") == [(T.DATA, "a [b] c")]

    def test_nested_brackets_do_not_terminate(self) -> None:
        assert _lex("[[x[y]]z]]") == [(T.DATA, "x[y]]z")]

    def test_empty(self) -> None:
        assert _lex("[[]]") == [(T.DATA, "")]

    def test_unterminated(self) -> None:
        with pytest.raises(UnterminatedTokenError) as exc_info:
            _lex("\n  [[never closed")

        assert exc_info.value.line == 2
        assert exc_info.value.column == 3


class TestStrings:
    def test_doubled_quote_is_kept(self) -> None:
        assert _lex('"Se""magia"') == [(T.STRING, 'Se""magia')]

    def test_empty(self) -> None:
        assert _lex('""') == [(T.STRING, "")]

    def test_multiline(self) -> None:
        assert _lex('"a\nb"') == [(T.STRING, "a\nb")]

    def test_unterminated(self) -> None:
        with pytest.raises(UnterminatedTokenError, match="Unterminated string") as exc_info:
            _lex('[x = "Semagia')

        assert exc_info.value.line == 1
        assert exc_info.value.column == 6


class TestComments:
    def test_are_skipped(self) -> None:
        assert _kinds("/* a [comment] */ [x] /* another */") == [
            T.LBRACK,
            T.IDENT,
            T.RBRACK,
        ]

    def test_unterminated(self) -> None:
        with pytest.raises(UnterminatedTokenError, match="Unterminated comment"):
            _lex("[x] /* never closed")


class TestErrors:
    def test_unknown_directive(self) -> None:
        with pytest.raises(UnexpectedCharacterError, match="#FOO"):
            _lex("#FOO")

    def test_lone_hash(self) -> None:
        with pytest.raises(UnexpectedCharacterError):
            _lex("# PREFIX")

    def test_unexpected_character(self) -> None:
        with pytest.raises(UnexpectedCharacterError) as exc_info:
            _lex("[x]\n  !")

        assert exc_info.value.line == 2
        assert exc_info.value.column == 3

    def test_identifier_starting_with_digit(self) -> None:
        with pytest.raises(UnexpectedCharacterError, match="'1'") as exc_info:
            _lex("[1abc]")

        assert exc_info.value.line == 1
        assert exc_info.value.column == 2

    def test_directive_starting_with_digit(self) -> None:
        with pytest.raises(UnexpectedCharacterError):
            _lex("#1PREFIX")

    def test_errors_are_syntax_errors(self) -> None:
        with pytest.raises(MapSyntaxError):
            _lex("?")


def test_leading_bom_is_skipped() -> None:
    assert _kinds("\ufeff[x]") == [T.LBRACK, T.IDENT, T.RBRACK]


def test_token_positions() -> None:
    tokens = list(LTMLexer(io.StringIO("[a]\r\n  [b]")))

    assert tokens[0] == Token(T.LBRACK, "[", 1, 1)
    assert tokens[1] == Token(T.IDENT, "a", 1, 2)
    assert tokens[3] == Token(T.LBRACK, "[", 2, 3)


def test_pull_interface() -> None:
    lexer = LTMLexer(io.StringIO("[lara]"))

    assert lexer.advance()
    assert lexer.token() is T.LBRACK
    assert lexer.advance()
    assert lexer.token() is T.IDENT
    assert lexer.value() == "lara"
    assert (lexer.line(), lexer.column()) == (1, 2)
    assert lexer.current() == Token(T.IDENT, "lara", 1, 2)
    assert lexer.advance()
    assert not lexer.advance()
    assert lexer.token() is None
    assert lexer.current() is None
    assert lexer.state is LexerState.DEFAULT


def test_long_input_spans_buffer_chunks() -> None:
    text = " ".join(f"[t{i}]" for i in range(2000))

    assert len(_lex(text)) == 6000


def test_token_type_display_name() -> None:
    assert str(T.DIR_PREFIX) == "#PREFIX"
    assert str(T.STRING) == "<string>"
