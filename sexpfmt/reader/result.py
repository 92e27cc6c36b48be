"""Read result carrier shared by the reader and the format pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from sexpfmt.ast import Node
from sexpfmt.diagnostics import Diagnostic, has_errors
from sexpfmt.reader.options import ReaderOptions
from sexpfmt.text import TextRange


@dataclass(frozen=True, slots=True)
class ReadResult:
    """Forms read from one source text, with everything reported on the way."""

    source_text: str
    forms: tuple[Node, ...]
    diagnostics: list[Diagnostic]
    options: ReaderOptions
    form_ranges: tuple[TextRange, ...] = ()

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)
