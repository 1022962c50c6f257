"""Parser core: the cursor the grammar routines drive."""

from dataclasses import dataclass

from mviewpy.diagnostics import Diagnostic, make_diagnostic
from mviewpy.diagnostics.codes import PARSER_MISMATCHED_DELIMITER, PARSER_UNEXPECTED_END
from mviewpy.lexer import CLOSING_DELIMITER, TokenKind
from mviewpy.parser.options import ParserOptions
from mviewpy.parser.token_source import TokenSource, TokenSourceCheckpoint
from mviewpy.text import TextRange, TextSize, slice_text_range


@dataclass(frozen=True, slots=True)
class ParserCheckpoint:
    source_checkpoint: TokenSourceCheckpoint
    diagnostics_len: int
    last_range: TextRange


@dataclass(frozen=True, slots=True)
class DelimitedGroup:
    """A balanced `{..}`, `[..]` or `(..)` group consumed as one unit.

    `range` covers the delimiters, `inner` only what sits between them. When
    input ends before the group is closed, `closed` is false and both ranges
    run to the end of input.
    """

    open: TokenKind
    range: TextRange
    inner: TextRange
    closed: bool


@dataclass(slots=True)
class ParserProgress:
    """Detect parser stalls inside list-style loops."""

    _position: TextSize | None = None

    def has_progressed(self, parser: "Parser") -> bool:
        has_progressed = self._position is None or self._position < parser.position
        self._position = parser.position
        return has_progressed

    def assert_progressing(self, parser: "Parser") -> None:
        if not self.has_progressed(parser):
            raise RuntimeError(f"Parser stopped making progress at {parser.current.name} {parser.current_range}")


class Parser:
    """Cursor over the significant tokens plus the parser's diagnostic list."""

    def __init__(self, source: TokenSource, options: ParserOptions | None = None) -> None:
        self._source = source
        self._options = options or ParserOptions()
        self._diagnostics: list[Diagnostic] = []
        self._last_range = TextRange.empty(TextSize.from_int(0))

    @property
    def source(self) -> TokenSource:
        return self._source

    @property
    def options(self) -> ParserOptions:
        return self._options

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    @property
    def current(self) -> TokenKind:
        return self._source.current

    @property
    def current_range(self) -> TextRange:
        return self._source.current_range

    @property
    def current_text(self) -> str:
        return self._source.nth_text(0)

    @property
    def position(self) -> TextSize:
        return self._source.position

    @property
    def last_range(self) -> TextRange:
        """Range of the most recently consumed token."""
        return self._last_range

    @property
    def end_range(self) -> TextRange:
        return self._source.end_range

    @property
    def has_preceding_line_break(self) -> bool:
        return self._source.has_preceding_line_break

    @property
    def has_preceding_trivia(self) -> bool:
        return self._source.has_preceding_trivia

    def at(self, kind: TokenKind) -> bool:
        return self.current == kind

    def at_set(self, kinds: frozenset[TokenKind] | set[TokenKind]) -> bool:
        return self.current in kinds

    def nth(self, n: int) -> TokenKind:
        return self._source.nth(n)

    def nth_at(self, n: int, kind: TokenKind) -> bool:
        return self._source.nth(n) == kind

    def nth_range(self, n: int) -> TextRange:
        return self._source.nth_range(n)

    def nth_text(self, n: int) -> str:
        return self._source.nth_text(n)

    def has_nth_preceding_trivia(self, n: int) -> bool:
        return self._source.has_nth_preceding_trivia(n)

    def slice(self, range: TextRange) -> str:
        return slice_text_range(self._source.text, range)

    def checkpoint(self) -> ParserCheckpoint:
        return ParserCheckpoint(
            source_checkpoint=self._source.checkpoint,
            diagnostics_len=len(self._diagnostics),
            last_range=self._last_range,
        )

    def rewind(self, checkpoint: ParserCheckpoint) -> None:
        self._source.rewind(checkpoint.source_checkpoint)
        del self._diagnostics[checkpoint.diagnostics_len :]
        self._last_range = checkpoint.last_range

    def bump(self) -> None:
        if self.current == TokenKind.EOF:
            return
        self._last_range = self.current_range
        self._source.bump()

    def eat(self, kind: TokenKind) -> bool:
        if self.current == kind:
            self.bump()
            return True
        return False

    def error(self, diagnostic: Diagnostic) -> None:
        """Record `diagnostic` unless it repeats the previous code at the same start."""
        if self._diagnostics:
            previous = self._diagnostics[-1]
            if previous.code == diagnostic.code and previous.range.start == diagnostic.range.start:
                return
        self._diagnostics.append(diagnostic)

    def error_unexpected_end(self) -> None:
        self.error(make_diagnostic(PARSER_UNEXPECTED_END, self.end_range))

    def bump_delimited(self) -> DelimitedGroup:
        """Consume a balanced delimiter group starting at the current token.

        Contents are not interpreted, only nesting is tracked. A stray closer
        of the wrong kind is reported and skipped; a closer that matches an
        enclosing opener closes the inner groups early.
        """
        open_kind = self.current
        start_range = self.current_range
        expected = [CLOSING_DELIMITER[open_kind]]
        self.bump()

        while expected:
            if self.at(TokenKind.EOF):
                self.error_unexpected_end()
                end = self.end_range
                return DelimitedGroup(
                    open=open_kind,
                    range=start_range.cover(end),
                    inner=TextRange.new(start_range.end, end.end),
                    closed=False,
                )
            if self.current.is_opening_delimiter:
                expected.append(CLOSING_DELIMITER[self.current])
            elif self.current.is_closing_delimiter:
                if self.current == expected[-1]:
                    expected.pop()
                elif self.current in expected:
                    self.error(
                        make_diagnostic(
                            PARSER_MISMATCHED_DELIMITER,
                            self.current_range,
                            message=f"Mismatched closing delimiter `{self.current_text}`",
                        )
                    )
                    while expected[-1] != self.current:
                        expected.pop()
                    expected.pop()
                else:
                    self.error(
                        make_diagnostic(
                            PARSER_MISMATCHED_DELIMITER,
                            self.current_range,
                            message=f"Unexpected closing delimiter `{self.current_text}`",
                        )
                    )
            self.bump()

        close_range = self._last_range
        return DelimitedGroup(
            open=open_kind,
            range=start_range.cover(close_range),
            inner=TextRange.new(start_range.end, close_range.start),
            closed=True,
        )

    def finish(self) -> list[Diagnostic]:
        return self._diagnostics
