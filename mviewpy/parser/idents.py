"""Identifier and path parsing."""

from mviewpy.ast import KebabIdent, Path
from mviewpy.lexer import TokenKind
from mviewpy.parser.parser import Parser

KEBAB_START: frozenset[TokenKind] = frozenset({TokenKind.IDENTIFIER, TokenKind.MINUS})
KEBAB_CONTINUE: frozenset[TokenKind] = frozenset({TokenKind.IDENTIFIER, TokenKind.INT, TokenKind.MINUS})


def at_kebab_ident(parser: Parser) -> bool:
    return parser.at_set(KEBAB_START)


def parse_kebab_ident(parser: Parser) -> KebabIdent | None:
    """Parse a maximal run of touching identifier, number and `-` tokens.

    `data-id`, `--css-var` and `blue-100` are single identifiers; `a - b` is
    not, since the parts must not be separated by whitespace or comments.
    """
    if not at_kebab_ident(parser):
        return None

    range = parser.current_range
    parts = [parser.current_text]
    parser.bump()
    while parser.at_set(KEBAB_CONTINUE) and not parser.has_preceding_trivia:
        range = range.cover(parser.current_range)
        parts.append(parser.current_text)
        parser.bump()

    return KebabIdent(text="".join(parts), range=range)


def expect_kebab_ident(parser: Parser) -> KebabIdent:
    """`parse_kebab_ident` for callers that already checked the cursor."""
    ident = parse_kebab_ident(parser)
    if ident is None:
        raise RuntimeError(f"Expected an identifier at {parser.current.name} {parser.current_range}")
    return ident


def at_path_continuation(parser: Parser) -> bool:
    return parser.at(TokenKind.COLON2) and parser.nth_at(1, TokenKind.IDENTIFIER)


def parse_path_tail(parser: Parser, first: KebabIdent) -> Path:
    """Continue `first` with any `::segment` parts."""
    segments = [first.text]
    range = first.range
    while at_path_continuation(parser):
        parser.bump()
        segments.append(parser.current_text)
        range = range.cover(parser.current_range)
        parser.bump()
    return Path(segments=tuple(segments), range=range)
