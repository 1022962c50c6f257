"""Parse carrier shared by the compile entrypoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mviewpy.diagnostics import has_errors
from mviewpy.parser.mview import ParsedView
from mviewpy.parser.options import ParserOptions

if TYPE_CHECKING:
    from mviewpy.ast import Node
    from mviewpy.diagnostics import Diagnostic


@dataclass(slots=True)
class ViewParseResult:
    """Parse-once carrier: nodes and diagnostics for one template."""

    source_text: str
    parsed: ParsedView
    options: ParserOptions

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self.parsed.nodes

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.parsed.diagnostics

    @property
    def has_errors(self) -> bool:
        return has_errors(self.parsed.diagnostics)
