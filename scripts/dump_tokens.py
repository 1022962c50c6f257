#!/usr/bin/env python
"""Print the lexer token stream of a template file (or stdin)."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from mviewpy.lexer import Lexer, dump_tokens


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump lexer tokens for a view template")
    parser.add_argument("input", nargs="?", type=Path, help="Template file (default: stdin)")
    parser.add_argument(
        "--significant",
        action="store_true",
        help="Hide whitespace, newline and comment tokens",
    )
    args = parser.parse_args()

    text = args.input.read_text(encoding="utf-8") if args.input is not None else sys.stdin.read()

    lexer = Lexer(text)
    tokens = lexer.lex()
    if args.significant:
        tokens = [token for token in tokens if not token.kind.is_trivia]

    dump_tokens(tokens, text, lexer.diagnostics)
    print(f"\n{len(tokens)} tokens")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
