"""Diagnostics."""

from sexpfmt.diagnostics.codes import (
    FORMAT_NO_APPLICABLE_RULE,
    FORMAT_TOO_DEEP,
    LEXER_INVALID_HASH_LITERAL,
    LEXER_UNTERMINATED_BLOCK_COMMENT,
    LEXER_UNTERMINATED_STRING,
    READER_EXPECTED_DATUM,
    READER_MISMATCHED_CLOSER,
    READER_MISSING_CLOSER,
    READER_NESTING_TOO_DEEP,
    READER_UNEXPECTED_CLOSER,
    READER_UNEXPECTED_TOKEN,
    READER_UNSUPPORTED_BRACKETS,
    DiagnosticSpec,
    Severity,
)
from sexpfmt.diagnostics.diagnostic import Diagnostic
from sexpfmt.diagnostics.report import collect_diagnostics, format_diagnostic, has_errors, sort_diagnostics

__all__ = [
    "FORMAT_NO_APPLICABLE_RULE",
    "FORMAT_TOO_DEEP",
    "LEXER_INVALID_HASH_LITERAL",
    "LEXER_UNTERMINATED_BLOCK_COMMENT",
    "LEXER_UNTERMINATED_STRING",
    "READER_EXPECTED_DATUM",
    "READER_MISMATCHED_CLOSER",
    "READER_MISSING_CLOSER",
    "READER_NESTING_TOO_DEEP",
    "READER_UNEXPECTED_CLOSER",
    "READER_UNEXPECTED_TOKEN",
    "READER_UNSUPPORTED_BRACKETS",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "collect_diagnostics",
    "format_diagnostic",
    "has_errors",
    "sort_diagnostics",
]
