"""Token source that hides trivia from the parser."""

from dataclasses import dataclass

from mviewpy.diagnostics import Diagnostic
from mviewpy.lexer import Lexer, Token, TokenKind
from mviewpy.text import TextRange, TextSize, slice_text_range


@dataclass(frozen=True, slots=True)
class SourceToken:
    """A non-trivia token together with what separated it from its predecessor."""

    kind: TokenKind
    range: TextRange
    has_preceding_trivia: bool
    has_preceding_line_break: bool


@dataclass(frozen=True, slots=True)
class TokenSourceCheckpoint:
    position: int


class TokenSource:
    """Bridge between lexer and parser that strips trivia.

    The whole input is lexed up front; lookahead and rewinding are plain index
    arithmetic over the non-trivia tokens. Adjacency (whether trivia sits
    between two tokens) is kept per token because kebab identifiers, value
    prefixes and `#id` selectors are only recognised when their parts touch.
    """

    def __init__(self, lexer: Lexer) -> None:
        self._text = lexer.source
        self._tokens = _significant_tokens(lexer.lex())
        self._lexer_diagnostics = lexer.diagnostics
        self._position = 0

    @property
    def current(self) -> TokenKind:
        return self._tokens[self._position].kind

    @property
    def current_range(self) -> TextRange:
        return self._tokens[self._position].range

    @property
    def text(self) -> str:
        return self._text

    @property
    def position(self) -> TextSize:
        return self.current_range.start

    @property
    def end_range(self) -> TextRange:
        """Empty range at the end of input."""
        return TextRange.empty(TextSize.of(self._text))

    @property
    def has_preceding_line_break(self) -> bool:
        return self._tokens[self._position].has_preceding_line_break

    @property
    def has_preceding_trivia(self) -> bool:
        return self._tokens[self._position].has_preceding_trivia

    @property
    def checkpoint(self) -> TokenSourceCheckpoint:
        return TokenSourceCheckpoint(self._position)

    def bump(self) -> None:
        if self.current != TokenKind.EOF:
            self._position += 1

    def nth(self, n: int) -> TokenKind:
        return self._nth_token(n).kind

    def nth_range(self, n: int) -> TextRange:
        return self._nth_token(n).range

    def nth_text(self, n: int) -> str:
        return slice_text_range(self._text, self._nth_token(n).range)

    def has_nth_preceding_trivia(self, n: int) -> bool:
        return self._nth_token(n).has_preceding_trivia

    def rewind(self, checkpoint: TokenSourceCheckpoint) -> None:
        self._position = checkpoint.position

    def finish(self) -> list[Diagnostic]:
        return self._lexer_diagnostics

    def _nth_token(self, n: int) -> SourceToken:
        index = min(self._position + n, len(self._tokens) - 1)
        return self._tokens[index]


def _significant_tokens(tokens: list[Token]) -> list[SourceToken]:
    significant: list[SourceToken] = []
    saw_trivia = False
    for token in tokens:
        if token.kind.is_trivia:
            saw_trivia = True
            continue
        significant.append(
            SourceToken(
                kind=token.kind,
                range=token.range,
                has_preceding_trivia=saw_trivia,
                has_preceding_line_break=token.has_preceding_line_break(),
            )
        )
        saw_trivia = False
    return significant
