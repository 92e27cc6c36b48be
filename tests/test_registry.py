import logging

import pytest

from sexpfmt.ast import AstList, Node, form, symbol
from sexpfmt.format import (
    FormatRule,
    MalformedRuleOutputError,
    PartialFormat,
    RuleRegistry,
    default_registry,
    dispatch,
    format_rule,
    make_rule,
    validate_rules,
)


def literal_rule(name: str, output: str, *, fallback: bool = False) -> FormatRule:
    return make_rule(name, lambda node: PartialFormat.of(output), fallback=fallback)


def is_list(node: Node) -> bool:
    return isinstance(node, AstList)


def test_normal_candidates_keep_registration_order():
    registry = RuleRegistry((literal_rule("first", "1"), literal_rule("second", "2")))

    assert dispatch(symbol("x"), registry) == (PartialFormat.of("1"), PartialFormat.of("2"))


def test_fallback_rules_are_not_invoked_when_a_normal_rule_matches():
    calls: list[Node] = []

    def spy(node: Node) -> PartialFormat | None:
        calls.append(node)
        return PartialFormat.of("fallback")

    registry = RuleRegistry(
        (
            FormatRule("spy", spy, fallback=True),
            make_rule("lists", lambda node: PartialFormat.of("list"), matches=is_list),
        )
    )

    assert registry.dispatch(form(symbol("a"))) == (PartialFormat.of("list"),)
    assert calls == []

    assert registry.dispatch(symbol("a")) == (PartialFormat.of("fallback"),)
    assert calls == [symbol("a")]


def test_no_candidates_is_an_empty_tuple():
    registry = RuleRegistry((make_rule("lists", lambda node: PartialFormat.of("list"), matches=is_list),))

    assert registry.dispatch(symbol("a")) == ()
    assert RuleRegistry().dispatch(symbol("a")) == ()


def test_partitions_preserve_order():
    registry = RuleRegistry(
        (
            literal_rule("a", "a", fallback=True),
            literal_rule("b", "b"),
            literal_rule("c", "c", fallback=True),
            literal_rule("d", "d"),
        )
    )

    assert [rule.name for rule in registry.normal_rules] == ["b", "d"]
    assert [rule.name for rule in registry.fallback_rules] == ["a", "c"]
    assert registry.names == ("a", "b", "c", "d")


def test_decorator_builds_guarded_rule():
    @format_rule("shout", matches=lambda node: isinstance(node, AstList) and node.is_form("shout"))
    def shout(node: Node) -> PartialFormat | None:
        return PartialFormat.of("SHOUT")

    assert isinstance(shout, FormatRule)
    assert shout.name == "shout"
    assert shout(form(symbol("shout"), symbol("x"))) == PartialFormat.of("SHOUT")
    assert shout(form(symbol("whisper"))) is None
    assert shout(symbol("shout")) is None


def test_rule_returning_wrong_type_is_malformed():
    rule = make_rule("bad", lambda node: "text")  # type: ignore[arg-type,return-value]

    with pytest.raises(MalformedRuleOutputError, match="`bad` returned str"):
        RuleRegistry((rule,)).dispatch(symbol("x"))


def test_with_rules_registers_ahead_of_defaults():
    override = literal_rule("override", "OVERRIDE")
    registry = default_registry().with_rules(override)

    assert registry.names[0] == "override"
    assert registry.dispatch(symbol("x"))[0] == PartialFormat.of("OVERRIDE")
    assert "override" not in default_registry().names


def test_without_removes_named_rules():
    registry = default_registry().without("compact-form")

    assert "compact-form" not in registry.names
    with pytest.raises(ValueError, match="Unknown format rules: nope"):
        registry.without("nope")


def test_registry_validation():
    with pytest.raises(ValueError, match="registered twice"):
        RuleRegistry((literal_rule("same", "1"), literal_rule("same", "2")))
    with pytest.raises(ValueError, match="empty name"):
        RuleRegistry((literal_rule("", "1"),))
    with pytest.raises(ValueError, match="not a FormatRule"):
        validate_rules((lambda node: None,))  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="not callable"):
        RuleRegistry((FormatRule("broken", None),))  # type: ignore[arg-type]


def test_matches_are_logged_at_debug_level(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="sexpfmt.format.rules")

    default_registry().dispatch(form(symbol("f"), symbol("x")))

    assert "Rules compact-form, expanded-form matched form `(f ...)` (2 children)" in caplog.text
