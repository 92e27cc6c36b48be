"""Formatting rules, the rule builder and the two-tier rule registry."""

from __future__ import annotations

from typing import TypeAlias

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from sexpfmt.ast import Node
from sexpfmt.format.errors import MalformedRuleOutputError, describe_node
from sexpfmt.format.model import PartialFormat

logger = logging.getLogger(__name__)

RuleBody: TypeAlias = Callable[[Node], PartialFormat | None]
Pattern: TypeAlias = Callable[[Node], bool]


@dataclass(frozen=True, slots=True)
class FormatRule:
    """Named pure function from a node to at most one partial format.

    Fallback rules are only consulted when no normal rule matches.
    """

    name: str
    body: RuleBody
    fallback: bool = False

    def apply(self, node: Node) -> PartialFormat | None:
        result = self.body(node)
        if result is not None and not isinstance(result, PartialFormat):
            raise MalformedRuleOutputError(
                f"Format rule `{self.name}` returned {type(result).__name__}; expected PartialFormat or None."
            )
        return result

    def __call__(self, node: Node) -> PartialFormat | None:
        return self.apply(node)


def make_rule(
    name: str,
    body: RuleBody,
    *,
    matches: Pattern | None = None,
    fallback: bool = False,
) -> FormatRule:
    """Build a rule; with `matches`, `body` only runs on nodes the pattern accepts."""
    if matches is None:
        return FormatRule(name=name, body=body, fallback=fallback)

    def guarded(node: Node) -> PartialFormat | None:
        if not matches(node):
            return None
        return body(node)

    return FormatRule(name=name, body=guarded, fallback=fallback)


def format_rule(
    name: str,
    *,
    matches: Pattern | None = None,
    fallback: bool = False,
) -> Callable[[RuleBody], FormatRule]:
    """Decorator form of `make_rule`."""

    def decorator(body: RuleBody) -> FormatRule:
        return make_rule(name, body, matches=matches, fallback=fallback)

    return decorator


def validate_rules(rules: tuple[FormatRule, ...]) -> None:
    seen: set[str] = set()
    for rule in rules:
        if not isinstance(rule, FormatRule):
            raise ValueError(f"Registry entry {rule!r} is not a FormatRule.")
        if not rule.name:
            raise ValueError("Format rule has an empty name.")
        if rule.name in seen:
            raise ValueError(f"Format rule `{rule.name}` is registered twice.")
        if not callable(rule.body):
            raise ValueError(f"Format rule `{rule.name}` has a body that is not callable.")
        seen.add(rule.name)


@dataclass(frozen=True, slots=True)
class RuleRegistry:
    """Ordered rules; order is the preference order of the produced layouts."""

    rules: tuple[FormatRule, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))
        validate_rules(self.rules)

    @property
    def normal_rules(self) -> tuple[FormatRule, ...]:
        return tuple(rule for rule in self.rules if not rule.fallback)

    @property
    def fallback_rules(self) -> tuple[FormatRule, ...]:
        return tuple(rule for rule in self.rules if rule.fallback)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(rule.name for rule in self.rules)

    def with_rules(self, *rules: FormatRule) -> RuleRegistry:
        """New registry with `rules` registered ahead of the existing ones."""
        return RuleRegistry((*rules, *self.rules))

    def without(self, *names: str) -> RuleRegistry:
        unknown = set(names) - set(self.names)
        if unknown:
            raise ValueError(f"Unknown format rules: {', '.join(sorted(unknown))}")
        return RuleRegistry(tuple(rule for rule in self.rules if rule.name not in names))

    def dispatch(self, node: Node) -> tuple[PartialFormat, ...]:
        candidates = _apply_rules(self.normal_rules, node)
        if candidates:
            return candidates
        return _apply_rules(self.fallback_rules, node)


def dispatch(node: Node, registry: RuleRegistry) -> tuple[PartialFormat, ...]:
    """Candidate layouts for `node`, normal rules first, fallback rules only if none matched."""
    return registry.dispatch(node)


def _apply_rules(rules: Iterable[FormatRule], node: Node) -> tuple[PartialFormat, ...]:
    candidates: list[PartialFormat] = []
    matched: list[str] = []
    for rule in rules:
        result = rule.apply(node)
        if result is None:
            continue
        candidates.append(result)
        matched.append(rule.name)
    if matched and logger.isEnabledFor(logging.DEBUG):
        logger.debug("Rules %s matched %s", ", ".join(matched), describe_node(node))
    return tuple(candidates)
