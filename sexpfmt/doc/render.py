"""Width-constrained renderer for the document algebra.

Every `Alt` is resolved to its first alternative whose layout fits the page
width on every line, including the text that has to follow the alternative on
its last line. That trailing text is measured by its narrowest possible layout.
When no alternative fits, the last one is used.
"""

from __future__ import annotations

import math
from typing import Final, TypeAlias

from sexpfmt.doc.model import Align, Alt, Concat, Doc, Nest, Text, VConcat

DEFAULT_WIDTH: Final[int] = 100

# First element continues the line the layout starts on; the rest are full
# lines including their indentation.
Layout: TypeAlias = tuple[str, ...]


def render(doc: Doc, width: int = DEFAULT_WIDTH) -> str:
    """Render `doc` into a string for the given page width."""
    if width <= 0:
        raise ValueError(f"Page width must be positive, got {width}")
    lines = _Renderer(width).layout(doc, 0, 0, 0)
    return "\n".join(line.rstrip() for line in lines)


class _Renderer:
    def __init__(self, width: int) -> None:
        self._width = width
        self._layouts: dict[tuple[int, int, int, int], Layout] = {}
        self._bounds: dict[int, tuple[float, float]] = {}

    def layout(self, doc: Doc, col: int, indent: int, trailing: int) -> Layout:
        key = (id(doc), col, indent, trailing)
        cached = self._layouts.get(key)
        if cached is None:
            cached = self._layout(doc, col, indent, trailing)
            self._layouts[key] = cached
        return cached

    def _layout(self, doc: Doc, col: int, indent: int, trailing: int) -> Layout:
        match doc:
            case Text(s):
                return (s,)
            case Concat(parts):
                return self._layout_concat(parts, col, indent, trailing)
            case VConcat(parts):
                return self._layout_vconcat(parts, col, indent, trailing)
            case Align(child):
                return self.layout(child, col, col, trailing)
            case Nest(by, child):
                return self.layout(child, col, indent + by, trailing)
            case Alt(alternatives):
                for alternative in alternatives[:-1]:
                    candidate = self.layout(alternative, col, indent, trailing)
                    if self._fits(candidate, col, trailing):
                        return candidate
                return self.layout(alternatives[-1], col, indent, trailing)
        raise TypeError(f"Not a document: {doc!r}")

    def _layout_concat(self, parts: tuple[Doc, ...], col: int, indent: int, trailing: int) -> Layout:
        follows = [0] * len(parts)
        follow: float = trailing
        for index in range(len(parts) - 1, -1, -1):
            follows[index] = int(follow)
            broken, flat = self.bounds(parts[index])
            follow = min(broken, flat + follow)

        lines = [""]
        current = col
        for part, part_trailing in zip(parts, follows):
            sub = self.layout(part, current, indent, part_trailing)
            lines[-1] += sub[0]
            lines.extend(sub[1:])
            current = _end_column(sub, current)
        return tuple(lines)

    def _layout_vconcat(self, parts: tuple[Doc, ...], col: int, indent: int, trailing: int) -> Layout:
        if not parts:
            return ("",)
        last = len(parts) - 1
        lines = list(self.layout(parts[0], col, indent, trailing if last == 0 else 0))
        for index in range(1, len(parts)):
            sub = self.layout(parts[index], indent, indent, trailing if index == last else 0)
            lines.append(" " * indent + sub[0])
            lines.extend(sub[1:])
        return tuple(lines)

    def bounds(self, doc: Doc) -> tuple[float, float]:
        """Narrowest first line among breaking layouts, narrowest single-line layout."""
        key = id(doc)
        cached = self._bounds.get(key)
        if cached is None:
            cached = self._compute_bounds(doc)
            self._bounds[key] = cached
        return cached

    def _compute_bounds(self, doc: Doc) -> tuple[float, float]:
        match doc:
            case Text(s):
                return (math.inf, len(s))
            case Concat(parts):
                broken: float = math.inf
                flat: float = 0
                for part in parts:
                    part_broken, part_flat = self.bounds(part)
                    broken = min(broken, flat + part_broken)
                    flat += part_flat
                return (broken, flat)
            case VConcat(parts):
                if not parts:
                    return (math.inf, 0)
                first_broken, first_flat = self.bounds(parts[0])
                if len(parts) == 1:
                    return (first_broken, first_flat)
                return (min(first_broken, first_flat), math.inf)
            case Align(child) | Nest(_, child):
                return self.bounds(child)
            case Alt(alternatives):
                pairs = [self.bounds(alternative) for alternative in alternatives]
                return (min(p[0] for p in pairs), min(p[1] for p in pairs))
        raise TypeError(f"Not a document: {doc!r}")

    def _fits(self, layout: Layout, col: int, trailing: int) -> bool:
        width = self._width
        if len(layout) == 1:
            return col + len(layout[0]) + trailing <= width
        if col + len(layout[0]) > width:
            return False
        if any(len(line) > width for line in layout[1:-1]):
            return False
        return len(layout[-1]) + trailing <= width


def _end_column(layout: Layout, col: int) -> int:
    if len(layout) == 1:
        return col + len(layout[0])
    return len(layout[-1])
