from .deserializer import DEFAULT_ENCODING, LTMDeserializer, LTMDeserializerFactory
from .lexer import LexerState, LTMLexer
from .parser import LTMParser, PrefixListener, unescape_unicode
from .tokens import Token, TokenType

__all__ = [
    "DEFAULT_ENCODING",
    "LTMDeserializer",
    "LTMDeserializerFactory",
    "LTMLexer",
    "LTMParser",
    "LexerState",
    "PrefixListener",
    "Token",
    "TokenType",
    "unescape_unicode",
]
