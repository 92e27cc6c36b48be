"""Reader modes and configuration options."""

from dataclasses import dataclass
from enum import StrEnum


class ReadMode(StrEnum):
    """Top-level reader behavior profile."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


@dataclass(frozen=True, slots=True)
class ReaderOptions:
    """Feature flags controlling accepted syntax and recovery severity."""

    mode: ReadMode = ReadMode.STRICT
    allow_brackets: bool = True
    tolerate_missing_closer: bool = False

    @staticmethod
    def for_mode(mode: ReadMode) -> "ReaderOptions":
        if mode == ReadMode.PERMISSIVE:
            return ReaderOptions(
                mode=mode,
                allow_brackets=True,
                tolerate_missing_closer=True,
            )

        return ReaderOptions(
            mode=mode,
            allow_brackets=True,
            tolerate_missing_closer=False,
        )
