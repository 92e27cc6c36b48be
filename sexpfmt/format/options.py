"""Formatter configuration."""

from dataclasses import dataclass

from sexpfmt.doc import DEFAULT_WIDTH


@dataclass(frozen=True, slots=True)
class FormatOptions:
    """Page width and top-level layout settings."""

    width: int = DEFAULT_WIDTH
    blank_line_between_forms: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.width, bool) or not isinstance(self.width, int) or self.width <= 0:
            raise ValueError(f"Format width must be a positive int, got {self.width!r}")

    @property
    def form_separator(self) -> str:
        return "\n\n" if self.blank_line_between_forms else "\n"
