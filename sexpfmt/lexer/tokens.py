"""Lexer tokens."""

from dataclasses import dataclass
from enum import IntEnum, IntFlag

from sexpfmt.text import TextRange


class TokenKind(IntEnum):
    # -------------------------
    # Special / sentinels
    # -------------------------
    EOF = 1

    # -------------------------
    # Trivia tokens (skipped by the reader)
    # -------------------------
    WHITESPACE = 10
    NEWLINE = 11
    COMMENT = 12  # ; line comment
    BLOCK_COMMENT = 13  # #| ... |#
    SKIPPED = 14  # invalid bytes, already reported by the lexer

    # -------------------------
    # Datum tokens
    # -------------------------
    ATOM = 20  # symbol or number, classified by the reader
    STRING = 21
    KEYWORD = 22  # #:name
    BOOLEAN = 23  # #t #f #true #false
    CHARACTER = 24  # #\a #\space
    LANG_LINE = 25  # #lang racket/base

    # -------------------------
    # Delimiters
    # -------------------------
    LPAREN = 40  # (
    RPAREN = 41  # )
    LBRACKET = 42  # [
    RBRACKET = 43  # ]
    LBRACE = 44  # {
    RBRACE = 45  # }

    # -------------------------
    # Prefixes
    # -------------------------
    QUOTE = 50  # '
    QUASIQUOTE = 51  # `
    UNQUOTE = 52  # ,
    UNQUOTE_SPLICING = 53  # ,@
    DATUM_COMMENT = 54  # #;

    @property
    def is_trivia(self) -> bool:
        return self in (
            TokenKind.WHITESPACE,
            TokenKind.NEWLINE,
            TokenKind.COMMENT,
            TokenKind.BLOCK_COMMENT,
            TokenKind.SKIPPED,
        )

    @property
    def is_opener(self) -> bool:
        return self in (TokenKind.LPAREN, TokenKind.LBRACKET, TokenKind.LBRACE)

    @property
    def is_closer(self) -> bool:
        return self in (TokenKind.RPAREN, TokenKind.RBRACKET, TokenKind.RBRACE)

    @property
    def is_prefix(self) -> bool:
        return self in (
            TokenKind.QUOTE,
            TokenKind.QUASIQUOTE,
            TokenKind.UNQUOTE,
            TokenKind.UNQUOTE_SPLICING,
        )


CLOSER_FOR: dict[TokenKind, TokenKind] = {
    TokenKind.LPAREN: TokenKind.RPAREN,
    TokenKind.LBRACKET: TokenKind.RBRACKET,
    TokenKind.LBRACE: TokenKind.RBRACE,
}


class TokenFlags(IntFlag):
    """Token metadata flags."""

    NONE = 0
    HAS_ESCAPE = 1 << 0
    UNTERMINATED = 1 << 1


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token (trivia or datum)."""

    kind: TokenKind
    range: TextRange
    flags: TokenFlags = TokenFlags.NONE

    @property
    def is_unterminated(self) -> bool:
        return bool(self.flags & TokenFlags.UNTERMINATED)
