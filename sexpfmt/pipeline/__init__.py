"""Shared read carriers and lazy pipeline entrypoint exports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sexpfmt.pipeline.results import FormatRunResult
from sexpfmt.reader import ReaderOptions, ReadMode, ReadResult

if TYPE_CHECKING:
    from sexpfmt.format.options import FormatOptions
    from sexpfmt.format.rules import RuleRegistry


def run_format(
    text: str,
    options: FormatOptions | None = None,
    *,
    reader_options: ReaderOptions | None = None,
    read: ReadResult | None = None,
    registry: RuleRegistry | None = None,
) -> FormatRunResult:
    from sexpfmt.format.runner import run_format as _run_format

    return _run_format(
        text,
        options,
        reader_options=reader_options,
        read=read,
        registry=registry,
    )


__all__ = [
    "FormatRunResult",
    "ReadMode",
    "ReadResult",
    "ReaderOptions",
    "run_format",
]
