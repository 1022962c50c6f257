"""Pipeline run result carriers."""

from __future__ import annotations

from dataclasses import dataclass

from mviewpy.codegen.calltree import Expr
from mviewpy.diagnostics import Diagnostic
from mviewpy.pipeline.result import ViewParseResult


@dataclass(frozen=True, slots=True)
class CompileResult:
    """Result of generating builder calls from a shared parse result.

    `output` is always present, even when `has_errors` is true; invalid
    fragments are replaced by placeholders so later errors stay local.
    """

    parse: ViewParseResult
    output: Expr
    code: str
    diagnostics: list[Diagnostic]
    has_errors: bool
