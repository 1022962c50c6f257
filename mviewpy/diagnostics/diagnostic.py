"""Diagnostics core types."""

from dataclasses import dataclass

from mviewpy.diagnostics.codes import Severity
from mviewpy.text import TextRange


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic emitted by the lexer, parser or generator."""

    code: str
    message: str
    range: TextRange
    severity: Severity = "error"
    hint: str | None = None
    category: str | None = None
