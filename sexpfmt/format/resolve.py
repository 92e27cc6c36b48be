"""Recursive resolution of partial formats into documents."""

from __future__ import annotations

import logging

from sexpfmt.ast import Node
from sexpfmt.doc import Doc, align, alt, concat, nest
from sexpfmt.format.adapter import flatten_doc, literal_doc
from sexpfmt.format.defaults import default_registry
from sexpfmt.format.errors import FlattenUnsatisfiableError, NoApplicableRuleError, describe_node
from sexpfmt.format.model import DeferredSubform, NestIndent, PartialFormat
from sexpfmt.format.rules import RuleRegistry

logger = logging.getLogger(__name__)


def resolve(node: Node, registry: RuleRegistry | None = None) -> Doc:
    """Resolve `node` into a document holding every admissible layout in preference order.

    Raises `NoApplicableRuleError` when no rule formats `node` or one of the
    children every candidate depends on.
    """
    return _Resolver(registry if registry is not None else default_registry()).resolve(node)


class _Resolver:
    def __init__(self, registry: RuleRegistry) -> None:
        self._registry = registry
        self._flat: dict[int, tuple[Doc, Doc | None]] = {}

    def resolve(self, node: Node) -> Doc:
        candidates = self._registry.dispatch(node)
        if not candidates:
            raise NoApplicableRuleError(node)

        # Children are resolved once per node and shared by all candidates.
        children: dict[int, Doc | NoApplicableRuleError] = {}
        docs: list[Doc] = []
        child_error: NoApplicableRuleError | None = None
        for index, candidate in enumerate(candidates):
            try:
                doc = self._build(candidate, children)
            except NoApplicableRuleError as error:
                child_error = child_error or error
                continue
            if doc is None:
                logger.debug("Dropped candidate %d of %s: inline-only subform must break", index, describe_node(node))
                continue
            docs.append(doc)

        if not docs:
            if child_error is not None:
                raise child_error
            raise FlattenUnsatisfiableError(node)
        return alt(*docs)

    def _build(self, candidate: PartialFormat, children: dict[int, Doc | NoApplicableRuleError]) -> Doc | None:
        parts: list[Doc] = []
        for piece in candidate.pieces:
            if isinstance(piece, str):
                parts.append(literal_doc(piece))
                continue
            wrapped = self._subform(piece, children)
            if wrapped is None:
                return None
            parts.append(wrapped)
        return concat(*parts)

    def _subform(self, piece: DeferredSubform, children: dict[int, Doc | NoApplicableRuleError]) -> Doc | None:
        key = id(piece.node)
        if key not in children:
            try:
                children[key] = self.resolve(piece.node)
            except NoApplicableRuleError as error:
                children[key] = error
        inner = children[key]
        if isinstance(inner, NoApplicableRuleError):
            raise inner

        if piece.flatten:
            flat = flatten_doc(inner, self._flat)
            if flat is None:
                return None
            inner = flat

        decorated: list[Doc] = []
        if piece.prefix:
            decorated.append(literal_doc(piece.prefix))
        decorated.append(inner)
        if piece.suffix:
            decorated.append(literal_doc(piece.suffix))
        wrapped = concat(*decorated)

        if isinstance(piece.indentation, NestIndent):
            return nest(piece.indentation.amount, wrapped)
        return align(wrapped)
