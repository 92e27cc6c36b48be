"""Pipeline run result carriers for tool entrypoints."""

from __future__ import annotations

from dataclasses import dataclass

from sexpfmt.diagnostics import Diagnostic, has_errors
from sexpfmt.reader import ReadResult


@dataclass(frozen=True, slots=True)
class FormatRunResult:
    """Result of formatting from a shared read result."""

    read: ReadResult
    formatted_text: str
    diagnostics: list[Diagnostic]
    changed: bool

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)
