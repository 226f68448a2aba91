"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from jominifmt.diagnostics.codes import DiagnosticSpec
from jominifmt.diagnostics.diagnostic import Diagnostic
from jominifmt.text import TextRange


def collect_diagnostics(*groups: Iterable[Diagnostic]) -> list[Diagnostic]:
    return [diagnostic for group in groups for diagnostic in group]


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(diagnostic.is_error for diagnostic in diagnostics)


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Order by position so reports read top to bottom; code and message break ties."""
    return sorted(
        diagnostics,
        key=lambda diagnostic: (
            diagnostic.range.start.value,
            diagnostic.range.end.value,
            diagnostic.code,
            diagnostic.message,
        ),
    )


def diagnostic_from_spec(spec: DiagnosticSpec, range: TextRange, message: str | None = None) -> Diagnostic:
    return Diagnostic(
        code=spec.code,
        message=spec.message if message is None else message,
        range=range,
        severity=spec.severity,
        hint=spec.hint,
        stage=spec.stage,
    )
