"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


LEXER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_STRING",
    message="Unterminated string literal.",
    hint='Close the string with a double quote (`"`).',
    severity="error",
    category="lexer",
)

LEXER_UNTERMINATED_BLOCK_COMMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_BLOCK_COMMENT",
    message="Unterminated block comment.",
    hint="Close the comment with `|#`.",
    severity="error",
    category="lexer",
)

LEXER_INVALID_HASH_LITERAL: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_INVALID_HASH_LITERAL",
    message="Invalid `#` literal.",
    hint="Supported forms are `#t`, `#f`, `#true`, `#false`, `#:keyword`, `#\\char`, `#|...|#` and `#;`.",
    severity="error",
    category="lexer",
)

READER_UNEXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="READER_UNEXPECTED_TOKEN",
    message="Unexpected token",
    severity="error",
    category="reader",
)

READER_UNEXPECTED_CLOSER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="READER_UNEXPECTED_CLOSER",
    message="Unexpected closing delimiter",
    hint="Remove the delimiter or add the matching opener.",
    severity="error",
    category="reader",
)

READER_MISMATCHED_CLOSER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="READER_MISMATCHED_CLOSER",
    message="Closing delimiter does not match the opener",
    severity="error",
    category="reader",
)

READER_MISSING_CLOSER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="READER_MISSING_CLOSER",
    message="Missing closing delimiter at end of input",
    severity="error",
    category="reader",
)

READER_EXPECTED_DATUM: Final[DiagnosticSpec] = DiagnosticSpec(
    code="READER_EXPECTED_DATUM",
    message="Expected a datum",
    severity="error",
    category="reader",
)

READER_UNSUPPORTED_BRACKETS: Final[DiagnosticSpec] = DiagnosticSpec(
    code="READER_UNSUPPORTED_BRACKETS",
    message="Square and curly brackets are disabled",
    hint="Use parentheses or enable `allow_brackets`.",
    severity="error",
    category="reader",
)

READER_NESTING_TOO_DEEP: Final[DiagnosticSpec] = DiagnosticSpec(
    code="READER_NESTING_TOO_DEEP",
    message="Form is nested too deeply to read",
    severity="error",
    category="reader",
)

FORMAT_NO_APPLICABLE_RULE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FORMAT_NO_APPLICABLE_RULE",
    message="No formatting rule applies to this form.",
    hint="Register a rule for this shape or keep the generic form rules in the registry.",
    severity="error",
    category="format",
)

FORMAT_TOO_DEEP: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FORMAT_TOO_DEEP",
    message="Form is nested too deeply to format.",
    hint="The form is kept as written.",
    severity="error",
    category="format",
)
