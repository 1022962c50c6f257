"""Lexer tokens."""

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Final

from mviewpy.text import TextRange


class TokenKind(IntEnum):
    # -------------------------
    # Special / sentinels
    # -------------------------
    EOF = 1

    # -------------------------
    # Trivia tokens (emitted by the lexer)
    # -------------------------
    WHITESPACE = 10
    NEWLINE = 11
    COMMENT = 12
    SKIPPED = 13  # unrecognised character, kept so ranges stay lossless

    # -------------------------
    # Identifiers / literals
    # -------------------------
    IDENTIFIER = 20
    STRING = 21  # "..." or r#"..."#
    CHAR = 22  # 'x'
    INT = 23
    FLOAT = 24

    # -------------------------
    # Operators (multi-char included)
    # -------------------------
    EQUAL = 30  # =
    EQUAL_EQUAL = 31  # ==
    NOT_EQUAL = 32  # !=
    LESS_THAN_OR_EQUAL = 33  # <=
    GREATER_THAN_OR_EQUAL = 34  # >=
    LESS_THAN = 35  # <
    GREATER_THAN = 36  # >
    ARROW = 37  # ->
    FAT_ARROW = 38  # =>

    # -------------------------
    # Punctuation / separators
    # -------------------------
    COLON = 40  # :
    COLON2 = 41  # ::
    SEMICOLON = 42  # ;
    COMMA = 43  # ,
    DOT = 44  # .
    DOT2 = 45  # ..
    HASH = 46  # #
    SLASH = 47  # /
    AT = 48  # @
    APOSTROPHE = 49  # ' (lifetimes)

    PLUS = 50  # +
    MINUS = 51  # -
    STAR = 52  # *
    PERCENT = 53  # %
    CARET = 54  # ^
    PIPE = 55  # |
    AMP = 56  # &
    QUESTION = 57  # ?
    BANG = 58  # !

    LBRACE = 60  # {
    RBRACE = 61  # }
    LBRACKET = 62  # [
    RBRACKET = 63  # ]
    LPAREN = 64  # (
    RPAREN = 65  # )

    @property
    def is_trivia(self) -> bool:
        return self in (
            TokenKind.WHITESPACE,
            TokenKind.NEWLINE,
            TokenKind.COMMENT,
            TokenKind.SKIPPED,
        )

    @property
    def is_opening_delimiter(self) -> bool:
        return self in (TokenKind.LBRACE, TokenKind.LBRACKET, TokenKind.LPAREN)

    @property
    def is_closing_delimiter(self) -> bool:
        return self in (TokenKind.RBRACE, TokenKind.RBRACKET, TokenKind.RPAREN)


CLOSING_DELIMITER: Final[dict[TokenKind, TokenKind]] = {
    TokenKind.LBRACE: TokenKind.RBRACE,
    TokenKind.LBRACKET: TokenKind.RBRACKET,
    TokenKind.LPAREN: TokenKind.RPAREN,
}


class TokenFlags(IntFlag):
    """Token metadata flags."""

    NONE = 0
    PRECEDING_LINE_BREAK = 1 << 0  # NEWLINE before
    HAS_ESCAPE = 1 << 1
    RAW_STRING = 1 << 2


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token (trivia or non-trivia)."""

    kind: TokenKind
    range: TextRange
    flags: TokenFlags = TokenFlags.NONE

    def has_preceding_line_break(self) -> bool:
        return bool(self.flags & TokenFlags.PRECEDING_LINE_BREAK)
