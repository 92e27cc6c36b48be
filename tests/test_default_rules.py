import pytest

from sexpfmt.ast import AstList, keyword, number, string, symbol
from sexpfmt.format import (
    DeferredSubform,
    FormatOptions,
    PartialFormat,
    binding_rules,
    compact_form_rule,
    default_registry,
    expanded_form_rule,
    format_node,
    function_definition_rule,
    nest_by,
    quote_rule,
)
from sexpfmt.reader import read_node
from tests._shared_cases import FORMAT_CASES, FormatCase, case_id


def fmt(source: str, width: int = 100, **kwargs) -> str:
    return format_node(read_node(source), FormatOptions(width=width), **kwargs)


@pytest.mark.parametrize("case", FORMAT_CASES, ids=case_id)
def test_format_cases(case: FormatCase) -> None:
    assert fmt(case.source, case.width) == case.expected


def test_atoms_format_to_their_literal_text():
    assert format_node(symbol("hello")) == "hello"
    assert format_node(string("hello")) == '"hello"'
    assert format_node(number(42)) == "42"
    assert format_node(keyword("hello")) == "#:hello"


@pytest.mark.parametrize("width", [12, 40, 100, 400])
def test_function_definition_bodies_never_share_a_line(width: int) -> None:
    assert fmt("(define (square x) (display x) (* x x))", width) == (
        "(define (square x)\n  (display x)\n  (* x x))"
    )


def test_function_definition_header_aligns_when_it_wraps():
    assert fmt("(define (long-name alpha beta) alpha)", 20) == (
        "(define (long-name alpha\n                   beta)\n  alpha)"
    )


def test_function_definition_without_body():
    assert fmt("(define (f))") == "(define (f))"


def test_define_shapes_outside_the_special_rules_use_generic_layout():
    assert fmt("(define 1 2)") == "(define 1 2)"
    assert fmt("(define () x)") == "(define () x)"
    assert fmt("(define x)") == "(define x)"


def test_define_keywords_are_configurable():
    registry = default_registry(define_keywords={"def"})

    assert fmt("(def (f) 1)", registry=registry) == "(def (f)\n  1)"
    assert fmt("(define (f) 1)", registry=registry) == "(define (f) 1)"
    assert fmt("(def (f) 1)") == "(def (f) 1)"


def test_define_syntax_rule_is_a_definition():
    assert fmt("(define-syntax-rule (swap a b) (set! a b))") == (
        "(define-syntax-rule (swap a b)\n  (set! a b))"
    )


def test_quote_rule_only_abbreviates_two_element_parenthesized_forms():
    assert fmt("(quote x)") == "'x"
    assert fmt("(quote a b)") == "(quote a b)"
    assert fmt("[quote x]") == "[quote x]"
    assert quote_rule(read_node("(quote)")) is None


def test_quoted_list_aligns_after_the_prefix():
    assert fmt("'(alpha beta gamma)", 12) == "'(alpha beta\n        gamma)"


def test_expanded_form_degenerate_shapes():
    assert expanded_form_rule(read_node("()")) == PartialFormat.of("()")
    assert fmt("()", 1) == "()"
    assert fmt("(f)", 1) == "(f)"


def test_generic_rules_are_fallbacks():
    registry = default_registry()

    assert [rule.name for rule in registry.fallback_rules] == ["compact-form", "expanded-form"]
    assert registry.names == (
        "atom",
        "quote",
        "function-definition",
        "binding-compact",
        "binding-expanded",
        "compact-form",
        "expanded-form",
    )


def test_binding_rules_produce_compact_then_expanded():
    node = read_node("(define x (f 1))")
    assert isinstance(node, AstList)
    define, name, value = node.children
    compact, expanded = binding_rules()

    assert compact(node) == PartialFormat.of(
        "(",
        DeferredSubform(define, flatten=True),
        " ",
        DeferredSubform(name, flatten=True),
        " ",
        DeferredSubform(value, flatten=True),
        ")",
    )
    assert expanded(node) == PartialFormat.of(
        "(",
        DeferredSubform(define),
        " ",
        DeferredSubform(name),
        DeferredSubform(value, prefix="\n", indentation=nest_by(2)),
        ")",
    )


def test_function_definition_rule_nests_each_body():
    node = read_node("(define (f x) a b)")
    assert isinstance(node, AstList)
    define, header, first, second = node.children

    assert function_definition_rule()(node) == PartialFormat.of(
        "(",
        DeferredSubform(define),
        " ",
        DeferredSubform(header),
        DeferredSubform(first, prefix="\n", indentation=nest_by(2)),
        DeferredSubform(second, prefix="\n", indentation=nest_by(2)),
        ")",
    )


def test_compact_form_flattens_every_child():
    node = read_node("[a b]")
    assert isinstance(node, AstList)
    a, b = node.children

    assert compact_form_rule(node) == PartialFormat.of(
        "[", DeferredSubform(a, flatten=True), " ", DeferredSubform(b, flatten=True), "]"
    )
    assert compact_form_rule(symbol("a")) is None
