"""Text offsets and ranges."""

from sexpfmt.text.text import ZERO, TextRange, TextSize, line_col, slice_text_range

__all__ = [
    "ZERO",
    "TextRange",
    "TextSize",
    "line_col",
    "slice_text_range",
]
