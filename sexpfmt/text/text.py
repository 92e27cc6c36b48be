"""Source offsets shared by the lexer, reader and diagnostics."""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True, order=True)
class TextSize:
    """Character offset into source text."""

    value: int

    def __post_init__(self):
        if self.value < 0:
            raise ValueError("TextSize cannot be negative")

    @staticmethod
    def of(text: str) -> "TextSize":
        return TextSize(len(text))

    @staticmethod
    def from_int(value: int) -> "TextSize":
        return TextSize(value)

    def __repr__(self) -> str:
        return f"TextSize({self.value})"


ZERO: Final[TextSize] = TextSize(0)


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """Half-open character range [start, end) of a token, form or diagnostic."""

    _start: int
    _end: int

    def __post_init__(self):
        if self._start < 0 or self._end < 0:
            raise ValueError("TextRange positions cannot be negative")
        if self._start > self._end:
            raise ValueError("TextRange invariant violated: start > end")

    @staticmethod
    def new(start: TextSize, end: TextSize) -> "TextRange":
        return TextRange(start.value, end.value)

    @staticmethod
    def empty(offset: TextSize) -> "TextRange":
        return TextRange(offset.value, offset.value)

    @property
    def start(self) -> TextSize:
        return TextSize(self._start)

    @property
    def end(self) -> TextSize:
        return TextSize(self._end)

    def as_tuple(self) -> tuple[int, int]:
        return (self._start, self._end)

    def cover(self, other: "TextRange") -> "TextRange":
        """Smallest range covering both ranges."""
        return TextRange(min(self._start, other._start), max(self._end, other._end))

    def __repr__(self) -> str:
        return f"TextRange({self._start}, {self._end})"


def slice_text_range(source: str, range: TextRange) -> str:
    return source[range.start.value : range.end.value]


def line_col(source: str, offset: TextSize) -> tuple[int, int]:
    """1-based line and column of `offset`, for messages."""
    before = source[: offset.value]
    line = before.count("\n") + 1
    return line, offset.value - (before.rfind("\n") + 1) + 1
