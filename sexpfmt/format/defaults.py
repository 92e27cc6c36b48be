"""Default rule set: atoms, quote abbreviations, generic forms and definitions."""

from __future__ import annotations

from collections.abc import Collection
from typing import Final, cast

from sexpfmt.ast import AstAtom, AstList, Node, atom_text
from sexpfmt.format.model import DeferredSubform, PartialFormat, Piece, nest_by
from sexpfmt.format.rules import FormatRule, RuleRegistry, format_rule

DEFINE_KEYWORDS: Final[frozenset[str]] = frozenset({"define", "define-syntax", "define-syntax-rule"})

QUOTE_PREFIXES: Final[dict[str, str]] = {
    "quote": "'",
    "quasiquote": "`",
    "unquote": ",",
    "unquote-splicing": ",@",
}

BODY_INDENT: Final[int] = 2


def is_atom(node: Node) -> bool:
    return isinstance(node, AstAtom)


def is_list(node: Node) -> bool:
    return isinstance(node, AstList)


def is_quote_form(node: Node) -> bool:
    return isinstance(node, AstList) and node.shape.opener == "(" and node.is_form(QUOTE_PREFIXES, length=2)


@format_rule("atom", matches=is_atom)
def atom_rule(node: Node) -> PartialFormat | None:
    text = atom_text(cast(AstAtom, node))
    # Escaped line breaks cannot be laid out without changing the atom.
    if "\n" in text or "\r" in text:
        return None
    return PartialFormat.of(text)


@format_rule("quote", matches=is_quote_form)
def quote_rule(node: Node) -> PartialFormat | None:
    head, quoted = cast(AstList, node).children
    prefix = QUOTE_PREFIXES[str(cast(AstAtom, head).value)]
    return PartialFormat.of(DeferredSubform(quoted, prefix=prefix))


@format_rule("compact-form", matches=is_list, fallback=True)
def compact_form_rule(node: Node) -> PartialFormat | None:
    """All children on one line: `(a b c)`."""
    form = cast(AstList, node)
    pieces: list[Piece] = [form.shape.opener]
    for index, child in enumerate(form.children):
        if index:
            pieces.append(" ")
        pieces.append(DeferredSubform(child, flatten=True))
    pieces.append(form.shape.closer)
    return PartialFormat(tuple(pieces))


@format_rule("expanded-form", matches=is_list, fallback=True)
def expanded_form_rule(node: Node) -> PartialFormat | None:
    """Head inline, every other child on its own line aligned under the first argument."""
    form = cast(AstList, node)
    opener, closer = form.shape.opener, form.shape.closer
    if not form.children:
        return PartialFormat.of(opener + closer)

    pieces: list[Piece] = [opener, DeferredSubform(form.children[0])]
    arguments = form.tail
    if arguments:
        pieces.append(" ")
        last = len(arguments) - 1
        for index, argument in enumerate(arguments):
            pieces.append(DeferredSubform(argument, suffix="" if index == last else "\n"))
    pieces.append(closer)
    return PartialFormat(tuple(pieces))


def binding_rules(define_keywords: Collection[str] = DEFINE_KEYWORDS) -> tuple[FormatRule, FormatRule]:
    """Compact and expanded layouts for `(define name expr)`."""
    keywords = frozenset(define_keywords)

    def is_binding(node: Node) -> bool:
        return (
            isinstance(node, AstList)
            and node.is_form(keywords, length=3)
            and isinstance(node.children[1], AstAtom)
            and node.children[1].is_symbol()
        )

    @format_rule("binding-compact", matches=is_binding)
    def binding_compact(node: Node) -> PartialFormat | None:
        form = cast(AstList, node)
        keyword, name, expr = form.children
        return PartialFormat.of(
            form.shape.opener,
            DeferredSubform(keyword, flatten=True),
            " ",
            DeferredSubform(name, flatten=True),
            " ",
            DeferredSubform(expr, flatten=True),
            form.shape.closer,
        )

    @format_rule("binding-expanded", matches=is_binding)
    def binding_expanded(node: Node) -> PartialFormat | None:
        form = cast(AstList, node)
        keyword, name, expr = form.children
        return PartialFormat.of(
            form.shape.opener,
            DeferredSubform(keyword),
            " ",
            DeferredSubform(name),
            DeferredSubform(expr, prefix="\n", indentation=nest_by(BODY_INDENT)),
            form.shape.closer,
        )

    return binding_compact, binding_expanded


def function_definition_rule(define_keywords: Collection[str] = DEFINE_KEYWORDS) -> FormatRule:
    """`(define (name params ...) body ...)` with one body expression per line."""
    keywords = frozenset(define_keywords)

    def is_function_definition(node: Node) -> bool:
        if not isinstance(node, AstList) or not node.is_form(keywords, min_length=2):
            return False
        header = node.children[1]
        return isinstance(header, AstList) and header.length > 0

    @format_rule("function-definition", matches=is_function_definition)
    def function_definition(node: Node) -> PartialFormat | None:
        form = cast(AstList, node)
        keyword, header, *body = form.children
        pieces: list[Piece] = [
            form.shape.opener,
            DeferredSubform(keyword),
            " ",
            DeferredSubform(header),
        ]
        for expr in body:
            pieces.append(DeferredSubform(expr, prefix="\n", indentation=nest_by(BODY_INDENT)))
        pieces.append(form.shape.closer)
        return PartialFormat(tuple(pieces))

    return function_definition


def default_rules(*, define_keywords: Collection[str] = DEFINE_KEYWORDS) -> tuple[FormatRule, ...]:
    binding_compact, binding_expanded = binding_rules(define_keywords)
    return (
        atom_rule,
        quote_rule,
        function_definition_rule(define_keywords),
        binding_compact,
        binding_expanded,
        compact_form_rule,
        expanded_form_rule,
    )


_DEFAULT_REGISTRY: Final[RuleRegistry] = RuleRegistry(default_rules())


def default_registry(*, define_keywords: Collection[str] | None = None) -> RuleRegistry:
    if define_keywords is None:
        return _DEFAULT_REGISTRY
    return RuleRegistry(default_rules(define_keywords=define_keywords))
