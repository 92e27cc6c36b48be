"""Formatter failures."""

from __future__ import annotations

from sexpfmt.ast import AstAtom, Node, atom_text


class FormatError(Exception):
    """Base class for formatter failures."""


class NoApplicableRuleError(FormatError):
    """No rule produced a usable layout for `node`."""

    def __init__(self, node: Node, message: str | None = None) -> None:
        self.node = node
        super().__init__(message or f"No formatting rule applies to {describe_node(node)}")


class FlattenUnsatisfiableError(NoApplicableRuleError):
    """Every candidate of `node` needed a line break inside an inline-only subform."""

    def __init__(self, node: Node) -> None:
        super().__init__(
            node,
            f"Every layout of {describe_node(node)} needs a line break inside an inline-only subform",
        )


class MalformedRuleOutputError(FormatError, ValueError):
    """A rule produced a value that violates the partial format invariants."""


def describe_node(node: Node, limit: int = 40) -> str:
    """Short human-readable description of a node for messages."""
    if isinstance(node, AstAtom):
        return f"{node.kind} `{_truncate(atom_text(node), limit)}`"
    head = node.head
    if isinstance(head, AstAtom):
        return f"form `{node.shape.opener}{_truncate(atom_text(head), limit)} ...{node.shape.closer}` ({node.length} children)"
    return f"list with {node.length} children"


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."
