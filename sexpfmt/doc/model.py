"""Document algebra: immutable layout values."""

from __future__ import annotations

from typing import TypeAlias

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Text:
    """A single line of literal text."""

    s: str

    def __post_init__(self) -> None:
        if "\n" in self.s:
            raise ValueError("Text cannot contain line breaks; use vconcat")


@dataclass(frozen=True, slots=True)
class Concat:
    """Horizontal concatenation: no breaks inserted between parts."""

    parts: tuple[Doc, ...]


@dataclass(frozen=True, slots=True)
class VConcat:
    """Vertical concatenation: a hard line break between each adjacent pair."""

    parts: tuple[Doc, ...]


@dataclass(frozen=True, slots=True)
class Align:
    """Continuation lines of `child` start at the column where it starts."""

    child: Doc


@dataclass(frozen=True, slots=True)
class Nest:
    """Continuation lines of `child` are indented `by` more columns."""

    by: int
    child: Doc

    def __post_init__(self) -> None:
        if self.by < 0:
            raise ValueError(f"Nest amount cannot be negative, got {self.by}")


@dataclass(frozen=True, slots=True)
class Alt:
    """Ordered, equivalent renderings; the renderer picks the first that fits."""

    alternatives: tuple[Doc, ...]

    def __post_init__(self) -> None:
        if not self.alternatives:
            raise ValueError("Alt needs at least one alternative")


Doc: TypeAlias = Text | Concat | VConcat | Align | Nest | Alt


def text(s: str) -> Doc:
    return Text(s)


def concat(*parts: Doc) -> Doc:
    flat: list[Doc] = []
    for p in parts:
        if isinstance(p, Concat):
            flat.extend(p.parts)
        else:
            flat.append(p)
    if len(flat) == 1:
        return flat[0]
    return Concat(tuple(flat))


def vconcat(*parts: Doc) -> Doc:
    if len(parts) == 1:
        return parts[0]
    return VConcat(tuple(parts))


def align(d: Doc) -> Doc:
    return Align(d)


def nest(by: int, d: Doc) -> Doc:
    return Nest(by, d)


def alt(*alternatives: Doc) -> Doc:
    if len(alternatives) == 1:
        return alternatives[0]
    return Alt(tuple(alternatives))


__all__ = [
    "Align",
    "Alt",
    "Concat",
    "Doc",
    "Nest",
    "Text",
    "VConcat",
    "align",
    "alt",
    "concat",
    "nest",
    "text",
    "vconcat",
]
