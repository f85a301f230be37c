from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Kinds of LTM tokens. The value is the display name."""

    DIR_PREFIX = "#PREFIX"
    DIR_BASEURI = "#BASEURI"
    DIR_MERGEMAP = "#MERGEMAP"
    DIR_INCLUDE = "#INCLUDE"
    DIR_VERSION = "#VERSION"
    DIR_TOPICMAP = "#TOPICMAP"

    IDENT = "<identifier>"
    QNAME = "<qname>"

    LBRACK = "["
    RBRACK = "]"
    LPAREN = "("
    RPAREN = ")"
    LCURLY = "{"
    RCURLY = "}"
    AT = "@"
    PERCENT = "%"
    EQ = "="
    SEMI = ";"
    COLON = ":"
    COMMA = ","
    TILDE = "~"
    SLASH = "/"

    STRING = "<string>"
    DATA = "<data>"

    def __str__(self) -> str:
        return self.value


# Keyed by the name following '#'
DIRECTIVES: dict[str, TokenType] = {
    "PREFIX": TokenType.DIR_PREFIX,
    "BASEURI": TokenType.DIR_BASEURI,
    "MERGEMAP": TokenType.DIR_MERGEMAP,
    "INCLUDE": TokenType.DIR_INCLUDE,
    "VERSION": TokenType.DIR_VERSION,
    "TOPICMAP": TokenType.DIR_TOPICMAP,
}

PUNCTUATION: dict[str, TokenType] = {
    "[": TokenType.LBRACK,
    "]": TokenType.RBRACK,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LCURLY,
    "}": TokenType.RCURLY,
    "@": TokenType.AT,
    "%": TokenType.PERCENT,
    "=": TokenType.EQ,
    ";": TokenType.SEMI,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
    "~": TokenType.TILDE,
    "/": TokenType.SLASH,
}


@dataclass(frozen=True)
class Token:
    kind: TokenType
    value: str
    line: int
    column: int
