"""Entrypoints that run parse and generation over one parse lifecycle."""

from __future__ import annotations

from mviewpy.codegen import GeneratorOptions, generate, render
from mviewpy.diagnostics import dedupe_diagnostics, has_errors
from mviewpy.parser import ParseMode, ParserOptions, parse_result
from mviewpy.pipeline.result import ViewParseResult
from mviewpy.pipeline.results import CompileResult


def parse_view(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> ViewParseResult:
    """Parse a view template without generating code."""
    return parse_result(text, options=options, mode=mode)


def compile_view(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    generator_options: GeneratorOptions | None = None,
    parse: ViewParseResult | None = None,
) -> CompileResult:
    """Parse (or reuse `parse`) and lower the template into builder calls."""
    resolved_parse = _resolve_parse(text, options=options, mode=mode, parse=parse)
    output, codegen_diagnostics = generate(resolved_parse.nodes, generator_options)
    diagnostics = dedupe_diagnostics([*resolved_parse.diagnostics, *codegen_diagnostics])
    return CompileResult(
        parse=resolved_parse,
        output=output,
        code=render(output),
        diagnostics=diagnostics,
        has_errors=has_errors(diagnostics),
    )


def _resolve_parse(
    text: str,
    *,
    options: ParserOptions | None,
    mode: ParseMode | None,
    parse: ViewParseResult | None,
) -> ViewParseResult:
    if parse is not None:
        if options is not None or mode is not None:
            raise ValueError("Pass either parse or options/mode, not both")
        return parse
    return parse_result(text, options=options, mode=mode)
