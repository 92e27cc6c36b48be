"""Partial formats: one layout of a node with its children still unresolved."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, TypeAlias

from sexpfmt.ast import AstAtom, AstList, Node
from sexpfmt.format.errors import MalformedRuleOutputError


@dataclass(frozen=True, slots=True)
class AlignIndent:
    """Continuation lines start at the column where the subform starts."""


@dataclass(frozen=True, slots=True)
class NestIndent:
    """Continuation lines are indented `amount` columns past the enclosing indentation."""

    amount: int

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise MalformedRuleOutputError(f"Nest amount must be an int, got {self.amount!r}")
        if self.amount < 0:
            raise MalformedRuleOutputError(f"Nest amount cannot be negative, got {self.amount}")


Indentation: TypeAlias = AlignIndent | NestIndent

ALIGN: Final[AlignIndent] = AlignIndent()


def nest_by(amount: int) -> NestIndent:
    return NestIndent(amount)


@dataclass(frozen=True, slots=True)
class DeferredSubform:
    """A child node to be formatted later, in place, with decoration.

    `prefix` and `suffix` are plain text placed around the child's rendering and
    are covered by `indentation`. With `flatten`, only the child's layouts without
    a forced line break are acceptable.
    """

    node: Node
    prefix: str = ""
    suffix: str = ""
    indentation: Indentation = ALIGN
    flatten: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.node, (AstAtom, AstList)):
            raise MalformedRuleOutputError(f"Deferred subform needs a node, got {type(self.node).__name__}")
        if not isinstance(self.prefix, str) or not isinstance(self.suffix, str):
            raise MalformedRuleOutputError("Deferred subform prefix and suffix must be plain strings")
        if not isinstance(self.indentation, (AlignIndent, NestIndent)):
            raise MalformedRuleOutputError(f"Unknown indentation {self.indentation!r}")


Piece: TypeAlias = str | DeferredSubform


@dataclass(frozen=True, slots=True)
class PartialFormat:
    """Ordered pieces in output order.

    Literal pieces are normalized on construction: adjacent literals are merged
    and empty literals dropped, so the text content is preserved.
    """

    pieces: tuple[Piece, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "pieces", _normalize_pieces(self.pieces))

    @staticmethod
    def of(*pieces: Piece) -> "PartialFormat":
        return PartialFormat(pieces)

    @property
    def subforms(self) -> tuple[DeferredSubform, ...]:
        return tuple(piece for piece in self.pieces if isinstance(piece, DeferredSubform))

    @property
    def is_literal(self) -> bool:
        return all(isinstance(piece, str) for piece in self.pieces)


def _normalize_pieces(pieces: object) -> tuple[Piece, ...]:
    if isinstance(pieces, str) or not isinstance(pieces, (tuple, list)):
        raise MalformedRuleOutputError(f"Partial format pieces must be a sequence of pieces, got {pieces!r}")

    normalized: list[Piece] = []
    for piece in pieces:
        if isinstance(piece, str):
            if not piece:
                continue
            if normalized and isinstance(normalized[-1], str):
                normalized[-1] = normalized[-1] + piece
            else:
                normalized.append(piece)
        elif isinstance(piece, DeferredSubform):
            normalized.append(piece)
        else:
            raise MalformedRuleOutputError(f"Unknown partial format piece {piece!r}")
    return tuple(normalized)


__all__ = [
    "ALIGN",
    "AlignIndent",
    "DeferredSubform",
    "Indentation",
    "NestIndent",
    "PartialFormat",
    "Piece",
    "nest_by",
]
