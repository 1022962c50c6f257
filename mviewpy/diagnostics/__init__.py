"""Diagnostics."""

from mviewpy.diagnostics.codes import DiagnosticSpec
from mviewpy.diagnostics.diagnostic import Diagnostic, Severity
from mviewpy.diagnostics.report import (
    collect_diagnostics,
    dedupe_diagnostics,
    has_errors,
    make_diagnostic,
)

__all__ = [
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "collect_diagnostics",
    "dedupe_diagnostics",
    "has_errors",
    "make_diagnostic",
]
