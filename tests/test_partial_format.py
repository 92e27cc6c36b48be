import pytest

from sexpfmt.ast import form, symbol
from sexpfmt.format import (
    ALIGN,
    DeferredSubform,
    MalformedRuleOutputError,
    NestIndent,
    PartialFormat,
    nest_by,
)

X = symbol("x")
Y = symbol("y")


def test_pieces_read_back_unchanged_when_already_normal():
    pieces = ("(", DeferredSubform(X), " ", DeferredSubform(Y, suffix="\n", indentation=nest_by(2)), ")")

    assert PartialFormat(pieces).pieces == pieces


def test_adjacent_literals_are_merged_and_empty_ones_dropped():
    partial = PartialFormat.of("(", "", "a", DeferredSubform(X), "", "b", "c")

    assert partial.pieces == ("(a", DeferredSubform(X), "bc")
    assert "".join(p for p in partial.pieces if isinstance(p, str)) == "(abc"


def test_list_of_pieces_is_accepted():
    assert PartialFormat(["a", "b"]).pieces == ("ab",)  # type: ignore[arg-type]


def test_subforms_and_literal_flag():
    partial = PartialFormat.of("(", DeferredSubform(X, flatten=True), ")")

    assert partial.subforms == (DeferredSubform(X, flatten=True),)
    assert not partial.is_literal
    assert PartialFormat.of("()").is_literal
    assert PartialFormat(()).is_literal


def test_deferred_subform_defaults():
    piece = DeferredSubform(X)

    assert piece.prefix == ""
    assert piece.suffix == ""
    assert piece.indentation == ALIGN
    assert piece.flatten is False


def test_deferred_subform_references_the_node_without_copying():
    node = form(symbol("f"), X)

    assert DeferredSubform(node).node is node


@pytest.mark.parametrize(
    "build",
    [
        lambda: PartialFormat.of("(", 42),  # type: ignore[arg-type]
        lambda: PartialFormat("not a sequence"),  # type: ignore[arg-type]
        lambda: NestIndent(-1),
        lambda: NestIndent(True),  # type: ignore[arg-type]
        lambda: nest_by(-2),
        lambda: DeferredSubform("x"),  # type: ignore[arg-type]
        lambda: DeferredSubform(X, prefix=None),  # type: ignore[arg-type]
        lambda: DeferredSubform(X, indentation=2),  # type: ignore[arg-type]
    ],
)
def test_malformed_rule_output_is_rejected(build) -> None:
    with pytest.raises(MalformedRuleOutputError):
        build()


def test_malformed_rule_output_is_a_value_error():
    with pytest.raises(ValueError, match="negative"):
        nest_by(-1)
