"""Lexer."""

from sexpfmt.lexer.lexer import Lexer, lex, token_text
from sexpfmt.lexer.tokens import CLOSER_FOR, Token, TokenFlags, TokenKind

__all__ = [
    "CLOSER_FOR",
    "Lexer",
    "Token",
    "TokenFlags",
    "TokenKind",
    "lex",
    "token_text",
]
