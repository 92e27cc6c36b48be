"""Reader: source text to immutable nodes."""

from sexpfmt.reader.options import ReaderOptions, ReadMode
from sexpfmt.reader.read import read_node, read_source
from sexpfmt.reader.reader import Reader
from sexpfmt.reader.result import ReadResult

__all__ = [
    "ReadMode",
    "ReadResult",
    "Reader",
    "ReaderOptions",
    "read_node",
    "read_source",
]
