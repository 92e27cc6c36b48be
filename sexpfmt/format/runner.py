"""Format runner over a shared read result."""

from __future__ import annotations

import logging

from sexpfmt.ast import Node
from sexpfmt.diagnostics import (
    FORMAT_NO_APPLICABLE_RULE,
    FORMAT_TOO_DEEP,
    Diagnostic,
    format_diagnostic,
    sort_diagnostics,
)
from sexpfmt.doc import render
from sexpfmt.format.defaults import default_registry
from sexpfmt.format.errors import NoApplicableRuleError
from sexpfmt.format.options import FormatOptions
from sexpfmt.format.resolve import resolve
from sexpfmt.format.rules import RuleRegistry
from sexpfmt.pipeline.results import FormatRunResult
from sexpfmt.reader import ReaderOptions, ReadResult, read_source
from sexpfmt.text import ZERO, TextRange, slice_text_range

logger = logging.getLogger(__name__)


def format_node(
    node: Node,
    options: FormatOptions | None = None,
    *,
    registry: RuleRegistry | None = None,
) -> str:
    """Render one node at the configured page width."""
    resolved_options = options if options is not None else FormatOptions()
    return render(resolve(node, registry), resolved_options.width)


def run_format(
    text: str,
    options: FormatOptions | None = None,
    *,
    reader_options: ReaderOptions | None = None,
    read: ReadResult | None = None,
    registry: RuleRegistry | None = None,
) -> FormatRunResult:
    """Format every top-level form from a single read lifecycle."""
    resolved_read = _resolve_read(text, reader_options=reader_options, read=read)
    resolved_options = options if options is not None else FormatOptions()
    resolved_registry = registry if registry is not None else default_registry()
    diagnostics = list(resolved_read.diagnostics)

    if resolved_read.has_errors:
        # Never reformat text that was not read cleanly.
        return FormatRunResult(
            read=resolved_read,
            formatted_text=resolved_read.source_text,
            diagnostics=diagnostics,
            changed=False,
        )

    rendered: list[str] = []
    for index, node in enumerate(resolved_read.forms):
        try:
            rendered.append(format_node(node, resolved_options, registry=resolved_registry))
            continue
        except NoApplicableRuleError as error:
            logger.warning("Cannot format top-level form %d: %s", index, error)
            diagnostic = Diagnostic.from_spec(
                FORMAT_NO_APPLICABLE_RULE,
                _form_range(resolved_read, index),
                message=f"{FORMAT_NO_APPLICABLE_RULE.message} {error}.",
            )
        except RecursionError:
            logger.warning("Top-level form %d is nested too deeply to format", index)
            diagnostic = Diagnostic.from_spec(FORMAT_TOO_DEEP, _form_range(resolved_read, index))

        diagnostics.append(diagnostic)
        # Unformatted forms are kept as written.
        verbatim = _verbatim_form(resolved_read, index)
        if verbatim is not None:
            rendered.append(verbatim)

    formatted_text = resolved_options.form_separator.join(rendered) + "\n" if rendered else ""
    return FormatRunResult(
        read=resolved_read,
        formatted_text=formatted_text,
        diagnostics=sort_diagnostics(diagnostics),
        changed=formatted_text != resolved_read.source_text,
    )


def format_source(
    text: str,
    options: FormatOptions | None = None,
    *,
    registry: RuleRegistry | None = None,
) -> str:
    """Formatted text of `text`, raising `ValueError` when anything was reported as an error."""
    result = run_format(text, options, registry=registry)
    if result.has_errors:
        details = "; ".join(format_diagnostic(d, text) for d in result.diagnostics if d.severity == "error")
        raise ValueError(f"Cannot format source: {details}")
    return result.formatted_text


def _resolve_read(
    text: str,
    *,
    reader_options: ReaderOptions | None,
    read: ReadResult | None,
) -> ReadResult:
    if read is not None:
        if reader_options is not None:
            raise ValueError("Pass either read or reader_options, not both")
        return read
    return read_source(text, options=reader_options)


def _form_range(read: ReadResult, index: int) -> TextRange:
    if index < len(read.form_ranges):
        return read.form_ranges[index]
    return TextRange.empty(ZERO)


def _verbatim_form(read: ReadResult, index: int) -> str | None:
    if index < len(read.form_ranges):
        return slice_text_range(read.source_text, read.form_ranges[index])
    return None
