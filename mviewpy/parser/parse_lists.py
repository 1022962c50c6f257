"""Reusable node-list parse loop."""

from collections.abc import Callable
from dataclasses import dataclass

from mviewpy.lexer import TokenKind
from mviewpy.parser.parsed_syntax import ParsedSyntax
from mviewpy.parser.parser import Parser, ParserProgress


@dataclass(slots=True)
class ParseNodeList[T]:
    """Non-separated list parser with progress and recovery hooks.

    `recover` receives every parse attempt. It returns the element to keep
    (the parsed one, or an error placeholder after skipping input), or
    `None` to stop the list.
    """

    is_at_list_end: Callable[[Parser], bool]
    parse_element: Callable[[Parser], ParsedSyntax[T]]
    recover: Callable[[Parser, ParsedSyntax[T]], ParsedSyntax[T] | None]

    def parse_list(self, parser: Parser) -> list[T]:
        elements: list[T] = []
        progress = ParserProgress()

        while not parser.at(TokenKind.EOF) and not self.is_at_list_end(parser):
            progress.assert_progressing(parser)
            parsed_element = self.parse_element(parser)
            recovered = self.recover(parser, parsed_element)
            if recovered is None:
                break
            if recovered.node is not None:
                elements.append(recovered.node)

        return elements
