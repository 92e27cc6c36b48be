"""Lexer."""

from sexpfmt.diagnostics import Diagnostic
from sexpfmt.diagnostics.codes import (
    LEXER_INVALID_HASH_LITERAL,
    LEXER_UNTERMINATED_BLOCK_COMMENT,
    LEXER_UNTERMINATED_STRING,
    DiagnosticSpec,
)
from sexpfmt.lexer.tokens import Token, TokenFlags, TokenKind
from sexpfmt.text import TextRange, TextSize, slice_text_range

_DELIMITERS = frozenset(" \t\r\n\f\v()[]{}\",'`;")
_BOOLEANS = frozenset({"t", "f", "true", "false", "T", "F"})


class Lexer:
    """Lexer that emits trivia and datum tokens for S-expression source."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._current_start = TextSize.from_int(0)
        self._current_flags = TokenFlags.NONE
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> str:
        """Original source text."""
        return self._source

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """List of diagnostics emitted during lexing."""
        return self._diagnostics

    @property
    def current_range(self) -> TextRange:
        return TextRange.new(self._current_start, TextSize.from_int(self._position))

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    @property
    def next_token(self) -> Token:
        self._current_start = TextSize.from_int(self._position)
        self._current_flags = TokenFlags.NONE

        if self.is_eof:
            return Token(TokenKind.EOF, TextRange.empty(self._current_start), self._current_flags)

        kind = self._lex_token()
        return Token(kind, self.current_range, self._current_flags)

    def lex(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            token = self.next_token
            tokens.append(token)
            if token.kind == TokenKind.EOF:
                break
        return tokens

    def _lex_token(self) -> TokenKind:
        ch = self._current_char()

        if ch == "\n" or ch == "\r":
            self._consume_newline()
            return TokenKind.NEWLINE

        if ch.isspace():
            self._consume_whitespaces()
            return TokenKind.WHITESPACE

        if ch == ";":
            return self._lex_line_comment()

        if ch == '"':
            return self._lex_string()

        if ch == "#":
            return self._lex_hash()

        match ch:
            case "(":
                self._advance(1)
                return TokenKind.LPAREN
            case ")":
                self._advance(1)
                return TokenKind.RPAREN
            case "[":
                self._advance(1)
                return TokenKind.LBRACKET
            case "]":
                self._advance(1)
                return TokenKind.RBRACKET
            case "{":
                self._advance(1)
                return TokenKind.LBRACE
            case "}":
                self._advance(1)
                return TokenKind.RBRACE
            case "'":
                self._advance(1)
                return TokenKind.QUOTE
            case "`":
                self._advance(1)
                return TokenKind.QUASIQUOTE
            case ",":
                if self._peek_char() == "@":
                    self._advance(2)
                    return TokenKind.UNQUOTE_SPLICING
                self._advance(1)
                return TokenKind.UNQUOTE

        self._consume_atom_chars()
        return TokenKind.ATOM

    def _lex_line_comment(self) -> TokenKind:
        # Consume until end of line, do not consume the newline itself.
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if ch == "\n" or ch == "\r":
                break
            self._advance(1)
        return TokenKind.COMMENT

    def _lex_block_comment(self) -> TokenKind:
        # `#|` already at the cursor; block comments nest.
        self._advance(2)
        depth = 1
        while not self.is_eof:
            ch = self._current_char()
            if ch == "|" and self._peek_char() == "#":
                self._advance(2)
                depth -= 1
                if depth == 0:
                    return TokenKind.BLOCK_COMMENT
                continue
            if ch == "#" and self._peek_char() == "|":
                self._advance(2)
                depth += 1
                continue
            self._advance(1)

        self._current_flags |= TokenFlags.UNTERMINATED
        self._report(LEXER_UNTERMINATED_BLOCK_COMMENT)
        return TokenKind.BLOCK_COMMENT

    def _lex_string(self) -> TokenKind:
        # Consume opening quote
        self._advance(1)
        escaped = False
        closed = False

        while not self.is_eof:
            ch = self._current_char()
            if ch == '"':
                self._advance(1)
                closed = True
                break
            if ch == "\\":
                escaped = True
                self._advance(1)
                if not self.is_eof:
                    self._advance(1)
                continue
            self._advance(1)

        if escaped:
            self._current_flags |= TokenFlags.HAS_ESCAPE

        if not closed:
            self._current_flags |= TokenFlags.UNTERMINATED
            self._report(LEXER_UNTERMINATED_STRING)

        return TokenKind.STRING

    def _lex_hash(self) -> TokenKind:
        next_ch = self._peek_char()

        if next_ch == "|":
            return self._lex_block_comment()

        if next_ch == ";":
            self._advance(2)
            return TokenKind.DATUM_COMMENT

        if next_ch == ":":
            self._advance(2)
            if self._consume_atom_chars() == 0:
                return self._invalid_hash()
            return TokenKind.KEYWORD

        if next_ch == "\\":
            self._advance(2)
            if self.is_eof:
                return self._invalid_hash()
            first = self._current_char()
            self._advance(1)
            if first.isalpha():
                while not self.is_eof and self._current_char().isalnum():
                    self._advance(1)
            return TokenKind.CHARACTER

        if self._source.startswith("#lang", self._position) and self._peek_char(5) in (" ", "\t"):
            while not self.is_eof and self._current_char() not in ("\n", "\r"):
                self._advance(1)
            return TokenKind.LANG_LINE

        self._advance(1)
        start = self._position
        self._consume_atom_chars()
        if self._source[start : self._position] in _BOOLEANS:
            return TokenKind.BOOLEAN
        return self._invalid_hash()

    def _invalid_hash(self) -> TokenKind:
        self._report(LEXER_INVALID_HASH_LITERAL)
        return TokenKind.SKIPPED

    def _report(self, spec: DiagnosticSpec) -> None:
        self._diagnostics.append(
            Diagnostic.from_spec(
                spec,
                TextRange.new(self._current_start, TextSize.from_int(self._position)),
            )
        )

    def _consume_atom_chars(self) -> int:
        start = self._position
        while not self.is_eof:
            ch = self._current_char()
            if ch in _DELIMITERS:
                break
            if ch == "\\":
                # Escaped character belongs to the atom.
                self._current_flags |= TokenFlags.HAS_ESCAPE
                self._advance(2 if self._position + 1 < len(self._source) else 1)
                continue
            self._advance(1)
        return self._position - start

    def _consume_whitespaces(self) -> None:
        while not self.is_eof:
            ch = self._current_char()
            if ch.isspace() and ch not in ("\n", "\r"):
                self._advance(1)
                continue
            break

    def _consume_newline(self) -> None:
        if self._current_char() == "\r" and self._peek_char() == "\n":
            self._advance(2)
            return
        self._advance(1)

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position += steps


def token_text(source: str, token: Token) -> str:
    """Get the text of a token from the source string based on its range."""
    if token.kind == TokenKind.EOF:
        return ""
    return slice_text_range(source, token.range)


def lex(source: str) -> tuple[list[Token], list[Diagnostic]]:
    lexer = Lexer(source)
    tokens = lexer.lex()
    return tokens, lexer.diagnostics
