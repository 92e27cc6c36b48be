"""Recursive-descent reader from tokens to nodes."""

from __future__ import annotations

from sexpfmt.ast import (
    AstAtom,
    AstList,
    AtomKind,
    ListShape,
    Node,
    decode_character,
    decode_string,
    interpret_atom,
    symbol,
)
from sexpfmt.diagnostics import Diagnostic, DiagnosticSpec, Severity
from sexpfmt.diagnostics.codes import (
    LEXER_INVALID_HASH_LITERAL,
    READER_EXPECTED_DATUM,
    READER_MISMATCHED_CLOSER,
    READER_MISSING_CLOSER,
    READER_NESTING_TOO_DEEP,
    READER_UNEXPECTED_CLOSER,
    READER_UNEXPECTED_TOKEN,
    READER_UNSUPPORTED_BRACKETS,
)
from sexpfmt.lexer import CLOSER_FOR, Token, TokenFlags, TokenKind, token_text
from sexpfmt.reader.options import ReaderOptions
from sexpfmt.text import TextRange, TextSize

_SHAPE_FOR: dict[TokenKind, ListShape] = {
    TokenKind.LPAREN: ListShape.PAREN,
    TokenKind.LBRACKET: ListShape.BRACKET,
    TokenKind.LBRACE: ListShape.BRACE,
}

_PREFIX_SYMBOLS: dict[TokenKind, str] = {
    TokenKind.QUOTE: "quote",
    TokenKind.QUASIQUOTE: "quasiquote",
    TokenKind.UNQUOTE: "unquote",
    TokenKind.UNQUOTE_SPLICING: "unquote-splicing",
}


class Reader:
    """Reads every datum in a token stream, recovering from malformed input."""

    def __init__(self, source: str, tokens: list[Token], options: ReaderOptions | None = None) -> None:
        self._source = source
        self._tokens = [token for token in tokens if not token.kind.is_trivia]
        if not self._tokens or self._tokens[-1].kind != TokenKind.EOF:
            end = TextSize.of(source)
            self._tokens.append(Token(TokenKind.EOF, TextRange.empty(end)))
        self._index = 0
        self._options = options or ReaderOptions()
        self._diagnostics: list[Diagnostic] = []
        self._form_ranges: list[TextRange] = []

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    @property
    def form_ranges(self) -> tuple[TextRange, ...]:
        """Source ranges of the forms returned by `read_forms`, in order."""
        return tuple(self._form_ranges)

    @property
    def current(self) -> Token:
        return self._tokens[self._index]

    @property
    def at_end(self) -> bool:
        return self.current.kind == TokenKind.EOF

    def read_forms(self) -> tuple[Node, ...]:
        forms: list[Node] = []
        while not self.at_end:
            if self.current.kind.is_closer:
                self._error(READER_UNEXPECTED_CLOSER, self.current.range)
                self._bump()
                continue
            start = self.current.range
            try:
                node = self._read_datum()
            except RecursionError:
                eof = self._tokens[-1]
                self._error(READER_NESTING_TOO_DEEP, start.cover(eof.range))
                self._index = len(self._tokens) - 1
                break
            if node is not None:
                forms.append(node)
                self._form_ranges.append(start.cover(self._tokens[self._index - 1].range))
        return tuple(forms)

    def _read_datum(self) -> Node | None:
        """Read one datum; `None` when it was discarded or could not be read."""
        token = self.current
        kind = token.kind

        if kind.is_opener:
            return self._read_list()

        if kind.is_prefix:
            self._bump()
            inner = self._read_required(token.range)
            if inner is None:
                return None
            return AstList((symbol(_PREFIX_SYMBOLS[kind]), inner))

        if kind == TokenKind.DATUM_COMMENT:
            self._bump()
            self._read_required(token.range)
            return None

        self._bump()
        text = token_text(self._source, token)
        match kind:
            case TokenKind.ATOM:
                return interpret_atom(text, escaped=TokenFlags.HAS_ESCAPE in token.flags)
            case TokenKind.STRING:
                return AstAtom(AtomKind.STRING, decode_string(text))
            case TokenKind.KEYWORD:
                return AstAtom(AtomKind.KEYWORD, text[2:])
            case TokenKind.BOOLEAN:
                return AstAtom(AtomKind.BOOLEAN, text[1:].lower() in ("t", "true"))
            case TokenKind.CHARACTER:
                char = decode_character(text)
                if char is None:
                    self._error(LEXER_INVALID_HASH_LITERAL, token.range)
                    return None
                return AstAtom(AtomKind.CHARACTER, char)
            case TokenKind.LANG_LINE:
                return AstAtom(AtomKind.DIRECTIVE, " ".join(text.split()))

        self._error(READER_UNEXPECTED_TOKEN, token.range, message=f"Unexpected token {kind.name}")
        return None

    def _read_required(self, anchor: TextRange) -> Node | None:
        # Datum comments inside a required position are skipped.
        while True:
            if self.at_end or self.current.kind.is_closer:
                self._error(READER_EXPECTED_DATUM, anchor)
                return None
            was_comment = self.current.kind == TokenKind.DATUM_COMMENT
            node = self._read_datum()
            if node is not None or not was_comment:
                return node

    def _read_list(self) -> AstList:
        opener = self.current
        shape = _SHAPE_FOR[opener.kind]
        if shape != ListShape.PAREN and not self._options.allow_brackets:
            self._error(READER_UNSUPPORTED_BRACKETS, opener.range)
        self._bump()

        expected_closer = CLOSER_FOR[opener.kind]
        children: list[Node] = []
        while True:
            token = self.current
            if token.kind == TokenKind.EOF:
                self._error(
                    READER_MISSING_CLOSER,
                    opener.range,
                    message=f"{READER_MISSING_CLOSER.message}: expected `{shape.closer}`",
                    severity="warning" if self._options.tolerate_missing_closer else None,
                )
                break
            if token.kind.is_closer:
                if token.kind != expected_closer:
                    self._error(
                        READER_MISMATCHED_CLOSER,
                        token.range,
                        message=(
                            f"{READER_MISMATCHED_CLOSER.message}: expected `{shape.closer}`, "
                            f"got `{token_text(self._source, token)}`"
                        ),
                    )
                self._bump()
                break
            child = self._read_datum()
            if child is not None:
                children.append(child)

        return AstList(tuple(children), shape)

    def _bump(self) -> None:
        if not self.at_end:
            self._index += 1

    def _error(
        self,
        spec: DiagnosticSpec,
        range: TextRange,
        *,
        message: str | None = None,
        severity: Severity | None = None,
    ) -> None:
        self._diagnostics.append(Diagnostic.from_spec(spec, range, message=message, severity=severity))
