"""Rule-based formatting: partial formats, the rule registry and the resolver."""

from sexpfmt.format.adapter import flatten_doc, literal_doc
from sexpfmt.format.defaults import (
    DEFINE_KEYWORDS,
    QUOTE_PREFIXES,
    atom_rule,
    binding_rules,
    compact_form_rule,
    default_registry,
    default_rules,
    expanded_form_rule,
    function_definition_rule,
    quote_rule,
)
from sexpfmt.format.errors import (
    FlattenUnsatisfiableError,
    FormatError,
    MalformedRuleOutputError,
    NoApplicableRuleError,
)
from sexpfmt.format.model import (
    ALIGN,
    AlignIndent,
    DeferredSubform,
    Indentation,
    NestIndent,
    PartialFormat,
    Piece,
    nest_by,
)
from sexpfmt.format.options import FormatOptions
from sexpfmt.format.resolve import resolve
from sexpfmt.format.rules import (
    FormatRule,
    RuleRegistry,
    dispatch,
    format_rule,
    make_rule,
    validate_rules,
)
from sexpfmt.format.runner import format_node, format_source, run_format

__all__ = [
    "ALIGN",
    "DEFINE_KEYWORDS",
    "QUOTE_PREFIXES",
    "AlignIndent",
    "DeferredSubform",
    "FlattenUnsatisfiableError",
    "FormatError",
    "FormatOptions",
    "FormatRule",
    "Indentation",
    "MalformedRuleOutputError",
    "NestIndent",
    "NoApplicableRuleError",
    "PartialFormat",
    "Piece",
    "RuleRegistry",
    "atom_rule",
    "binding_rules",
    "compact_form_rule",
    "default_registry",
    "default_rules",
    "dispatch",
    "expanded_form_rule",
    "flatten_doc",
    "format_node",
    "format_rule",
    "format_source",
    "function_definition_rule",
    "literal_doc",
    "make_rule",
    "nest_by",
    "quote_rule",
    "resolve",
    "run_format",
    "validate_rules",
]
