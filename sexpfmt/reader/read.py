"""High-level read entrypoints for S-expression source text."""

from __future__ import annotations

from sexpfmt.ast import Node
from sexpfmt.diagnostics import collect_diagnostics, format_diagnostic, sort_diagnostics
from sexpfmt.lexer import Lexer
from sexpfmt.reader.options import ReaderOptions, ReadMode
from sexpfmt.reader.reader import Reader
from sexpfmt.reader.result import ReadResult


def _resolve_options(
    options: ReaderOptions | None,
    mode: ReadMode | None,
) -> ReaderOptions:
    if mode is not None and options is not None:
        raise ValueError("Pass either options or mode, not both")

    if options is not None:
        return options

    if mode is not None:
        return ReaderOptions.for_mode(mode)

    return ReaderOptions()


def read_source(
    text: str,
    options: ReaderOptions | None = None,
    *,
    mode: ReadMode | None = None,
) -> ReadResult:
    """Read every top-level form of `text`."""
    resolved_options = _resolve_options(options=options, mode=mode)

    lexer = Lexer(text)
    tokens = lexer.lex()
    reader = Reader(text, tokens, options=resolved_options)
    forms = reader.read_forms()
    diagnostics = collect_diagnostics(lexer.diagnostics, reader.diagnostics)

    return ReadResult(
        source_text=text,
        forms=forms,
        diagnostics=sort_diagnostics(diagnostics),
        options=resolved_options,
        form_ranges=reader.form_ranges,
    )


def read_node(text: str, options: ReaderOptions | None = None) -> Node:
    """Read exactly one form, raising `ValueError` on errors."""
    result = read_source(text, options)
    if result.has_errors:
        details = "; ".join(format_diagnostic(d, text) for d in result.diagnostics)
        raise ValueError(f"Cannot read form: {details}")
    if len(result.forms) != 1:
        raise ValueError(f"Expected exactly one form, got {len(result.forms)}")
    return result.forms[0]
