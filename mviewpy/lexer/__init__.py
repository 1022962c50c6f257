"""Lexer."""

from mviewpy.lexer.lexer import Lexer, dump_tokens, token_text
from mviewpy.lexer.tokens import CLOSING_DELIMITER, Token, TokenFlags, TokenKind

__all__ = [
    "CLOSING_DELIMITER",
    "Lexer",
    "Token",
    "TokenFlags",
    "TokenKind",
    "dump_tokens",
    "token_text",
]
