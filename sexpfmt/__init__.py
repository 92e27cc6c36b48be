"""Rule-based S-expression pretty-printer."""

from sexpfmt.ast import AstAtom, AstList, AtomKind, ListShape, Node
from sexpfmt.format import (
    DeferredSubform,
    FormatOptions,
    FormatRule,
    NoApplicableRuleError,
    PartialFormat,
    RuleRegistry,
    default_registry,
    format_node,
    format_rule,
    format_source,
    make_rule,
    nest_by,
    resolve,
    run_format,
)
from sexpfmt.pipeline import FormatRunResult
from sexpfmt.reader import ReaderOptions, ReadMode, read_node, read_source

__all__ = [
    "AstAtom",
    "AstList",
    "AtomKind",
    "DeferredSubform",
    "FormatOptions",
    "FormatRule",
    "FormatRunResult",
    "ListShape",
    "NoApplicableRuleError",
    "Node",
    "PartialFormat",
    "ReadMode",
    "ReaderOptions",
    "RuleRegistry",
    "default_registry",
    "format_node",
    "format_rule",
    "format_source",
    "make_rule",
    "nest_by",
    "read_node",
    "read_source",
    "resolve",
    "run_format",
]
