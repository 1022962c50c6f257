"""Value resolver: classifies what follows `=` (and value-like children)."""

from typing import Final

from mviewpy.ast import BlockValue, BracketValue, LiteralKind, LiteralValue, MissingValue, Value
from mviewpy.diagnostics import make_diagnostic
from mviewpy.diagnostics.codes import PARSER_EXPECTED_VALUE
from mviewpy.lexer import TokenKind
from mviewpy.parser.parser import DelimitedGroup, Parser
from mviewpy.text import TextRange

LITERAL_TOKEN_KINDS: Final[dict[TokenKind, LiteralKind]] = {
    TokenKind.STRING: LiteralKind.STRING,
    TokenKind.CHAR: LiteralKind.CHAR,
    TokenKind.INT: LiteralKind.INT,
    TokenKind.FLOAT: LiteralKind.FLOAT,
}

BOOL_LITERALS: Final[frozenset[str]] = frozenset({"true", "false"})

WRAP_IN_BRACES_HINT: Final[str] = "You may have meant to wrap this in braces."


def at_literal(parser: Parser) -> bool:
    if parser.current in LITERAL_TOKEN_KINDS:
        return True
    return parser.at(TokenKind.IDENTIFIER) and parser.current_text in BOOL_LITERALS


def parse_literal(parser: Parser) -> LiteralValue:
    kind = LITERAL_TOKEN_KINDS.get(parser.current, LiteralKind.BOOL)
    literal = LiteralValue(text=parser.current_text, kind=kind, range=parser.current_range)
    parser.bump()
    return literal


def at_bracket_value(parser: Parser) -> bool:
    """`[` or an identifier directly touching `[` (a prefixed bracket)."""
    if parser.at(TokenKind.LBRACKET):
        return True
    return (
        parser.at(TokenKind.IDENTIFIER)
        and parser.nth_at(1, TokenKind.LBRACKET)
        and not parser.has_nth_preceding_trivia(1)
    )


def parse_block_value(parser: Parser) -> tuple[BlockValue, DelimitedGroup]:
    group = parser.bump_delimited()
    return BlockValue(expr=_group_text(parser, group), range=group.range), group


def parse_bracket_value(parser: Parser) -> tuple[BracketValue, DelimitedGroup]:
    prefix: str | None = None
    prefix_range: TextRange | None = None
    if parser.at(TokenKind.IDENTIFIER):
        prefix = parser.current_text
        prefix_range = parser.current_range
        parser.bump()

    group = parser.bump_delimited()
    range = group.range if prefix_range is None else prefix_range.cover(group.range)
    value = BracketValue(
        prefix=prefix,
        prefix_range=prefix_range,
        expr=_group_text(parser, group),
        range=range,
    )
    return value, group


def parse_value(parser: Parser, eq_range: TextRange) -> Value:
    """Resolve the value after an already consumed `=`.

    A missing value records `PARSER_EXPECTED_VALUE` at the token following
    `=` and yields a `MissingValue`. Tokens that cannot start a value are
    left in place so the attribute loop resumes on them.
    """
    if at_literal(parser):
        return parse_literal(parser)

    if parser.at(TokenKind.LBRACE):
        value, group = parse_block_value(parser)
        if group.closed and not value.expr:
            return _missing(parser, group.range, consumed=True)
        return value

    if at_bracket_value(parser):
        value, group = parse_bracket_value(parser)
        if group.closed and not value.expr:
            return _missing(parser, group.range, consumed=True)
        return value

    if parser.at(TokenKind.EOF):
        return _missing(parser, TextRange.empty(eq_range.end), consumed=False)

    hint = WRAP_IN_BRACES_HINT if parser.at(TokenKind.IDENTIFIER) else None
    parser.error(make_diagnostic(PARSER_EXPECTED_VALUE, parser.current_range, hint=hint))
    return MissingValue(range=TextRange.empty(eq_range.end))


def _missing(parser: Parser, range: TextRange, *, consumed: bool) -> MissingValue:
    parser.error(make_diagnostic(PARSER_EXPECTED_VALUE, range))
    return MissingValue(range=range if consumed else TextRange.empty(range.start))


def _group_text(parser: Parser, group: DelimitedGroup) -> str:
    return parser.slice(group.inner).strip()
