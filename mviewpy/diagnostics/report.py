"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from mviewpy.diagnostics.codes import DiagnosticSpec, Severity
from mviewpy.diagnostics.diagnostic import Diagnostic
from mviewpy.text import TextRange


def make_diagnostic(
    spec: DiagnosticSpec,
    range: TextRange,
    *,
    message: str | None = None,
    hint: str | None = None,
    severity: Severity | None = None,
) -> Diagnostic:
    """Build a diagnostic from a spec, optionally overriding its text."""
    return Diagnostic(
        code=spec.code,
        message=message if message is not None else spec.message,
        range=range,
        severity=severity if severity is not None else spec.severity,
        hint=hint if hint is not None else spec.hint,
        category=spec.category,
    )


def collect_diagnostics(*groups: Iterable[Diagnostic]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for group in groups:
        diagnostics.extend(group)
    return diagnostics


def dedupe_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Drop exact repeats while keeping first-seen order."""
    deduped: list[Diagnostic] = []
    seen: set[tuple[int, int, str, str]] = set()
    for diagnostic in diagnostics:
        key = (
            diagnostic.range.start.value,
            diagnostic.range.end.value,
            diagnostic.code,
            diagnostic.message,
        )
        if key in seen:
            continue
        seen.add(key)
        deduped.append(diagnostic)
    return deduped


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)
