"""Parser recovery primitives."""

from dataclasses import dataclass
from enum import StrEnum

from mviewpy.lexer import TokenKind
from mviewpy.parser.parser import Parser
from mviewpy.text import TextRange


class RecoveryError(StrEnum):
    EOF = "eof"
    ALREADY_RECOVERED = "already_recovered"


@dataclass(frozen=True, slots=True)
class ParseRecoveryTokenSet:
    """Recover by skipping tokens until a safe token is reached.

    The offending token is always consumed so that recovery makes progress.
    Delimiter groups met along the way are skipped whole, so a `}` nested in
    skipped input never counts as a recovery point.
    """

    recovery_set: frozenset[TokenKind]
    line_break: bool = False

    def enable_recovery_on_line_break(self) -> "ParseRecoveryTokenSet":
        return ParseRecoveryTokenSet(
            recovery_set=self.recovery_set,
            line_break=True,
        )

    def recover(self, parser: Parser) -> tuple[TextRange | None, RecoveryError | None]:
        if parser.at(TokenKind.EOF):
            return None, RecoveryError.EOF

        if parser.at_set(self.recovery_set):
            return None, RecoveryError.ALREADY_RECOVERED

        skipped = parser.current_range
        while True:
            if parser.current.is_opening_delimiter:
                skipped = skipped.cover(parser.bump_delimited().range)
            else:
                skipped = skipped.cover(parser.current_range)
                parser.bump()
            if parser.at(TokenKind.EOF) or self.is_at_recovered(parser):
                break

        return skipped, None

    def is_at_recovered(self, parser: Parser) -> bool:
        return parser.at_set(self.recovery_set) or (
            self.line_break and parser.has_preceding_line_break
        )
