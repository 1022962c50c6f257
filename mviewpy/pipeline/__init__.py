"""Shared parse carrier and lazy pipeline entrypoint exports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mviewpy.parser.options import ParseMode, ParserOptions
from mviewpy.pipeline.result import ViewParseResult
from mviewpy.pipeline.results import CompileResult

if TYPE_CHECKING:
    from mviewpy.codegen import GeneratorOptions


def parse_view(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> ViewParseResult:
    from mviewpy.pipeline.entrypoints import parse_view as _parse_view

    return _parse_view(text, options=options, mode=mode)


def compile_view(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    generator_options: GeneratorOptions | None = None,
    parse: ViewParseResult | None = None,
) -> CompileResult:
    from mviewpy.pipeline.entrypoints import compile_view as _compile_view

    return _compile_view(
        text,
        options=options,
        mode=mode,
        generator_options=generator_options,
        parse=parse,
    )


__all__ = [
    "CompileResult",
    "ViewParseResult",
    "compile_view",
    "parse_view",
]
