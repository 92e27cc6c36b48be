"""Immutable S-expression nodes."""

from sexpfmt.ast.atom import (
    CHARACTER_NAMES,
    atom_text,
    decode_character,
    decode_string,
    decode_symbol,
    interpret_atom,
    parse_number,
)
from sexpfmt.ast.model import (
    AstAtom,
    AstList,
    AtomKind,
    AtomValue,
    ListShape,
    Node,
    form,
    keyword,
    number,
    string,
    symbol,
)

__all__ = [
    "CHARACTER_NAMES",
    "AstAtom",
    "AstList",
    "AtomKind",
    "AtomValue",
    "ListShape",
    "Node",
    "atom_text",
    "decode_character",
    "decode_string",
    "decode_symbol",
    "form",
    "interpret_atom",
    "keyword",
    "number",
    "parse_number",
    "string",
    "symbol",
]
