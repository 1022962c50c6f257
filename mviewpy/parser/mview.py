"""High-level parse entrypoint for view template text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mviewpy.ast import Node
from mviewpy.diagnostics import Diagnostic, collect_diagnostics
from mviewpy.lexer import Lexer
from mviewpy.parser.grammar import parse_root
from mviewpy.parser.options import ParseMode, ParserOptions
from mviewpy.parser.parser import Parser
from mviewpy.parser.token_source import TokenSource

if TYPE_CHECKING:
    from mviewpy.pipeline import ViewParseResult


@dataclass(frozen=True, slots=True)
class ParsedView:
    """Top-level nodes plus lexer and parser diagnostics, in that order."""

    nodes: tuple[Node, ...]
    diagnostics: list[Diagnostic]


def _resolve_options(
    options: ParserOptions | None,
    mode: ParseMode | None,
) -> ParserOptions:
    if mode is not None and options is not None:
        raise ValueError("Pass either options or mode, not both")

    if options is not None:
        return options

    if mode is not None:
        return ParserOptions.for_mode(mode)

    return ParserOptions()


def parse(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> ParsedView:
    resolved_options = _resolve_options(options=options, mode=mode)

    lexer = Lexer(text)
    source = TokenSource(lexer)
    parser = Parser(source, options=resolved_options)

    nodes = parse_root(parser)
    parser_diagnostics = parser.finish()
    lexer_diagnostics = source.finish()
    diagnostics = collect_diagnostics(lexer_diagnostics, parser_diagnostics)

    return ParsedView(nodes=nodes, diagnostics=diagnostics)


def parse_result(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> ViewParseResult:
    from mviewpy.pipeline import ViewParseResult

    resolved_options = _resolve_options(options=options, mode=mode)
    parsed = parse(text, options=resolved_options)
    return ViewParseResult(
        source_text=text,
        parsed=parsed,
        options=resolved_options,
    )
