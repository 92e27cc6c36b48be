"""Immutable node model for S-expression source."""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Collection
from dataclasses import dataclass
from enum import StrEnum
from fractions import Fraction


class AtomKind(StrEnum):
    SYMBOL = "symbol"
    NUMBER = "number"
    STRING = "string"
    KEYWORD = "keyword"
    BOOLEAN = "boolean"
    CHARACTER = "character"
    DIRECTIVE = "directive"


class ListShape(StrEnum):
    """Delimiter pair a list was read with."""

    PAREN = "()"
    BRACKET = "[]"
    BRACE = "{}"

    @property
    def opener(self) -> str:
        return self.value[0]

    @property
    def closer(self) -> str:
        return self.value[1]


AtomValue: TypeAlias = str | int | float | Fraction | bool


@dataclass(frozen=True, slots=True)
class AstAtom:
    """Leaf value.

    `value` holds the interpreted datum: the symbol name, the number, the decoded
    string contents, the keyword name (without `#:`), the boolean, the character,
    or the raw directive line (e.g. `#lang racket`).
    """

    kind: AtomKind
    value: AtomValue

    @property
    def is_atom(self) -> bool:
        return True

    @property
    def is_list(self) -> bool:
        return False

    def is_symbol(self, name: str | Collection[str] | None = None) -> bool:
        if self.kind != AtomKind.SYMBOL:
            return False
        if name is None:
            return True
        if isinstance(name, str):
            return self.value == name
        return self.value in name


@dataclass(frozen=True, slots=True)
class AstList:
    """Ordered sequence of child nodes."""

    children: tuple[Node, ...]
    shape: ListShape = ListShape.PAREN

    @property
    def is_atom(self) -> bool:
        return False

    @property
    def is_list(self) -> bool:
        return True

    @property
    def length(self) -> int:
        return len(self.children)

    @property
    def head(self) -> Node | None:
        return self.children[0] if self.children else None

    @property
    def tail(self) -> tuple[Node, ...]:
        return self.children[1:]

    def child(self, index: int) -> Node:
        return self.children[index]

    def is_form(
        self,
        head: str | Collection[str] | None = None,
        *,
        length: int | None = None,
        min_length: int | None = None,
    ) -> bool:
        """Shape query, e.g. `is_form("define", length=3)` for `(define x e)`."""
        if length is not None and len(self.children) != length:
            return False
        if min_length is not None and len(self.children) < min_length:
            return False
        if head is None:
            return True
        first = self.head
        return isinstance(first, AstAtom) and first.is_symbol(head)


Node: TypeAlias = AstAtom | AstList


def symbol(name: str) -> AstAtom:
    return AstAtom(AtomKind.SYMBOL, name)


def number(value: int | float | Fraction) -> AstAtom:
    return AstAtom(AtomKind.NUMBER, value)


def string(value: str) -> AstAtom:
    return AstAtom(AtomKind.STRING, value)


def keyword(name: str) -> AstAtom:
    return AstAtom(AtomKind.KEYWORD, name)


def form(*children: Node, shape: ListShape = ListShape.PAREN) -> AstList:
    return AstList(tuple(children), shape)


__all__ = [
    "AstAtom",
    "AstList",
    "AtomKind",
    "AtomValue",
    "ListShape",
    "Node",
    "form",
    "keyword",
    "number",
    "string",
    "symbol",
]
