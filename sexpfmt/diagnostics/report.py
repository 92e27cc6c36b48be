"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from sexpfmt.diagnostics.diagnostic import Diagnostic
from sexpfmt.text import line_col


def collect_diagnostics(*groups: Iterable[Diagnostic]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for group in groups:
        diagnostics.extend(group)
    return diagnostics


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    return sorted(
        diagnostics,
        key=lambda diagnostic: (
            diagnostic.range.start.value,
            diagnostic.range.end.value,
            diagnostic.code,
            diagnostic.message,
        ),
    )


def format_diagnostic(diagnostic: Diagnostic, source: str) -> str:
    """One-line `line:col CODE: message` rendering for error messages."""
    line, col = line_col(source, diagnostic.range.start)
    return f"{line}:{col} {diagnostic.code}: {diagnostic.message}"
