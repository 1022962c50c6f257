#!/usr/bin/env python
"""Compile a view template and print the generated builder calls."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from mviewpy.codegen import GeneratorOptions
from mviewpy.diagnostics import Diagnostic
from mviewpy.parser import ParseMode
from mviewpy.pipeline import compile_view
from mviewpy.text import line_col


def _format_diagnostic(name: str, text: str, diagnostic: Diagnostic) -> str:
    line, column = line_col(text, diagnostic.range.start)
    rendered = f"{name}:{line}:{column}: {diagnostic.severity} [{diagnostic.code}] {diagnostic.message}"
    if diagnostic.hint:
        rendered += f"\n    hint: {diagnostic.hint}"
    return rendered


def main() -> int:
    parser = argparse.ArgumentParser(description="Compile a view template into builder calls")
    parser.add_argument("input", nargs="?", type=Path, help="Template file (default: stdin)")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ParseMode],
        default=ParseMode.STRICT.value,
        help="Parser mode (default: strict)",
    )
    parser.add_argument(
        "--sequence-slot",
        action="append",
        default=[],
        metavar="NAME",
        help="Slot name whose component field takes several values (repeatable)",
    )
    parser.add_argument(
        "--no-fold",
        action="store_true",
        help="Emit static classes and styles one call at a time",
    )
    args = parser.parse_args()

    if args.input is not None:
        name = str(args.input)
        text = args.input.read_text(encoding="utf-8")
    else:
        name = "<stdin>"
        text = sys.stdin.read()

    generator_options = GeneratorOptions(
        sequence_slots=frozenset(args.sequence_slot),
        fold_static_classes=not args.no_fold,
        fold_static_styles=not args.no_fold,
    )
    result = compile_view(text, mode=ParseMode(args.mode), generator_options=generator_options)

    print(result.code)
    for diagnostic in result.diagnostics:
        print(_format_diagnostic(name, text, diagnostic), file=sys.stderr)
    return 1 if result.has_errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
