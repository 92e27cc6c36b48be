"""Document algebra and renderer."""

from sexpfmt.doc.model import (
    Align,
    Alt,
    Concat,
    Doc,
    Nest,
    Text,
    VConcat,
    align,
    alt,
    concat,
    nest,
    text,
    vconcat,
)
from sexpfmt.doc.render import DEFAULT_WIDTH, render

__all__ = [
    "DEFAULT_WIDTH",
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
    "render",
    "text",
    "vconcat",
]
