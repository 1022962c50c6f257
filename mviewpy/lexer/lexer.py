"""Lexer."""

from typing import Final

from mviewpy.diagnostics import Diagnostic
from mviewpy.diagnostics.codes import (
    LEXER_UNTERMINATED_COMMENT,
    LEXER_UNTERMINATED_STRING,
    DiagnosticSpec,
)
from mviewpy.diagnostics.report import make_diagnostic
from mviewpy.lexer.tokens import Token, TokenFlags, TokenKind
from mviewpy.text import TextRange, TextSize, slice_text_range

_TWO_CHAR_TOKENS: Final[dict[str, TokenKind]] = {
    "==": TokenKind.EQUAL_EQUAL,
    "!=": TokenKind.NOT_EQUAL,
    "<=": TokenKind.LESS_THAN_OR_EQUAL,
    ">=": TokenKind.GREATER_THAN_OR_EQUAL,
    "->": TokenKind.ARROW,
    "=>": TokenKind.FAT_ARROW,
    "::": TokenKind.COLON2,
    "..": TokenKind.DOT2,
}

_SINGLE_CHAR_TOKENS: Final[dict[str, TokenKind]] = {
    "=": TokenKind.EQUAL,
    "<": TokenKind.LESS_THAN,
    ">": TokenKind.GREATER_THAN,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "%": TokenKind.PERCENT,
    "^": TokenKind.CARET,
    "|": TokenKind.PIPE,
    "&": TokenKind.AMP,
    "?": TokenKind.QUESTION,
    "!": TokenKind.BANG,
    ":": TokenKind.COLON,
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "#": TokenKind.HASH,
    "/": TokenKind.SLASH,
    "@": TokenKind.AT,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


class Lexer:
    """Lossless lexer that emits trivia and non-trivia tokens.

    The token vocabulary is the host language's: identifiers, string, char and
    number literals, punctuation and delimiters. Whitespace, line breaks and
    `//` / `/* */` comments are trivia. Concatenating the text of every token
    reproduces the source exactly.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._after_newline = False
        self._current_start = TextSize.from_int(0)
        self._current_flags = TokenFlags.NONE
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> str:
        """Original source text."""
        return self._source

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """List of diagnostics emitted during lexing."""
        return self._diagnostics

    @property
    def current_range(self) -> TextRange:
        return TextRange.new(self._current_start, TextSize.from_int(self._position))

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def next_token(self) -> Token:
        self._current_start = TextSize.from_int(self._position)
        self._current_flags = TokenFlags.NONE

        if self.is_eof:
            return Token(TokenKind.EOF, TextRange.empty(self._current_start), self._current_flags)

        kind = self._lex_token()
        if self._after_newline:
            self._current_flags |= TokenFlags.PRECEDING_LINE_BREAK
        if not kind.is_trivia:
            self._after_newline = False

        return Token(kind, self.current_range, self._current_flags)

    def lex(self) -> list[Token]:
        """Lex the whole source; the last token is always EOF."""
        tokens: list[Token] = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.kind == TokenKind.EOF:
                break
        return tokens

    def _lex_token(self) -> TokenKind:
        ch = self._current_char()

        if ch in "\r\n\t ":
            return self._consume_newline_or_whitespaces()

        if ch == "/" and self._peek_char() == "/":
            return self._lex_line_comment()
        if ch == "/" and self._peek_char() == "*":
            return self._lex_block_comment()

        if ch == '"':
            return self._lex_string()

        if ch == "r" and self._at_raw_string_start():
            return self._lex_raw_string()

        if ch == "'":
            return self._lex_char_or_apostrophe()

        if ch.isdigit():
            return self._lex_number()

        if ch.isalpha() or ch == "_":
            return self._lex_identifier()

        kind = _TWO_CHAR_TOKENS.get(ch + self._peek_char())
        if kind is not None:
            self._advance(2)
            return kind

        kind = _SINGLE_CHAR_TOKENS.get(ch)
        if kind is not None:
            self._advance(1)
            return kind

        # Fallback: preserve the character as SKIPPED trivia.
        self._advance(1)
        return TokenKind.SKIPPED

    def _lex_line_comment(self) -> TokenKind:
        # Consume until end of line, do not consume the newline itself.
        self._advance(2)
        while not self.is_eof:
            ch = self._current_char()
            if ch == "\n" or ch == "\r":
                break
            self._advance(1)
        return TokenKind.COMMENT

    def _lex_block_comment(self) -> TokenKind:
        # Block comments nest.
        self._advance(2)
        depth = 1
        while not self.is_eof:
            ch = self._current_char()
            if ch == "/" and self._peek_char() == "*":
                depth += 1
                self._advance(2)
                continue
            if ch == "*" and self._peek_char() == "/":
                depth -= 1
                self._advance(2)
                if depth == 0:
                    return TokenKind.COMMENT
                continue
            if ch == "\n" or ch == "\r":
                self._after_newline = True
            self._advance(1)

        self._report(LEXER_UNTERMINATED_COMMENT)
        return TokenKind.COMMENT

    def _lex_string(self) -> TokenKind:
        # Consume opening quote
        self._advance(1)
        escaped = False
        closed = False

        while not self.is_eof:
            ch = self._current_char()
            if ch == '"':
                self._advance(1)
                closed = True
                break
            if ch == "\\":
                escaped = True
                self._advance(1)
                if not self.is_eof:
                    self._advance(1)
                continue
            self._advance(1)

        if escaped:
            self._current_flags |= TokenFlags.HAS_ESCAPE

        if not closed:
            self._report(LEXER_UNTERMINATED_STRING)

        return TokenKind.STRING

    def _at_raw_string_start(self) -> bool:
        ahead = 1
        while self._peek_char(ahead) == "#":
            ahead += 1
        return self._peek_char(ahead) == '"'

    def _lex_raw_string(self) -> TokenKind:
        self._current_flags |= TokenFlags.RAW_STRING
        self._advance(1)
        hashes = 0
        while self._current_char() == "#":
            hashes += 1
            self._advance(1)
        self._advance(1)

        terminator = '"' + "#" * hashes
        end = self._source.find(terminator, self._position)
        if end == -1:
            self._position = len(self._source)
            self._report(LEXER_UNTERMINATED_STRING)
        else:
            self._position = end + len(terminator)
        return TokenKind.STRING

    def _lex_char_or_apostrophe(self) -> TokenKind:
        next_char = self._peek_char()
        if next_char == "\\":
            self._advance(2)
            while not self.is_eof:
                ch = self._current_char()
                if ch == "'":
                    self._advance(1)
                    break
                if ch == "\n" or ch == "\r":
                    break
                self._advance(1)
            self._current_flags |= TokenFlags.HAS_ESCAPE
            return TokenKind.CHAR
        if next_char not in "\0\n\r'" and self._peek_char(2) == "'":
            self._advance(3)
            return TokenKind.CHAR
        self._advance(1)
        return TokenKind.APOSTROPHE

    def _lex_number(self) -> TokenKind:
        saw_dot = False
        while not self.is_eof:
            ch = self._current_char()
            if ch.isdigit() or ch == "_":
                self._advance(1)
                continue
            if ch == "." and not saw_dot and self._peek_char().isdigit():
                saw_dot = True
                self._advance(1)
                continue
            break
        # Type suffix such as `5u32` or `1.5f64`.
        while not self.is_eof and (self._current_char().isalnum() or self._current_char() == "_"):
            self._advance(1)
        return TokenKind.FLOAT if saw_dot else TokenKind.INT

    def _lex_identifier(self) -> TokenKind:
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if ch.isalnum() or ch == "_":
                self._advance(1)
                continue
            break
        return TokenKind.IDENTIFIER

    def _consume_newline_or_whitespaces(self) -> TokenKind:
        if self._consume_newline():
            self._after_newline = True
            return TokenKind.NEWLINE
        self._consume_whitespaces()
        return TokenKind.WHITESPACE

    def _consume_whitespaces(self) -> None:
        while not self.is_eof:
            ch = self._current_char()
            if ch == " " or ch == "\t":
                self._advance(1)
                continue
            break

    def _consume_newline(self) -> bool:
        if self._current_char() == "\n":
            self._advance(1)
            return True
        if self._current_char() == "\r":
            if self._peek_char() == "\n":
                self._advance(2)
            else:
                self._advance(1)
            return True
        return False

    def _report(self, spec: DiagnosticSpec) -> None:
        self._diagnostics.append(make_diagnostic(spec, self.current_range))

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position += steps


def token_text(source: str, token: Token) -> str:
    """Get the text of a token from the source string based on its range."""
    if token.kind == TokenKind.EOF:
        return ""
    return slice_text_range(source, token.range)


def dump_tokens(tokens: list[Token], source: str, diagnostics: list[Diagnostic] | None = None) -> None:
    """Print token list with kind, range, flags, and text for debugging."""
    for i, tok in enumerate(tokens):
        text = token_text(source, tok)
        print(f"{i:03d} {tok.kind.name:<22} range={tok.range.as_tuple()} flags={tok.flags!r} text={text!r}")

    if diagnostics is not None:
        print("\nDiagnostics:")
        for d in diagnostics:
            print(f"- {d.severity.upper()} {d.code} range={d.range.as_tuple()} message={d.message}")
