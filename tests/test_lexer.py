from sexpfmt.lexer import Lexer, TokenFlags, TokenKind, lex, token_text


def kinds(text: str, *, trivia: bool = False) -> list[TokenKind]:
    tokens, _ = lex(text)
    return [token.kind for token in tokens if trivia or not token.kind.is_trivia]


def test_delimiters_prefixes_and_atoms():
    assert kinds("(a 'b `[c ,d ,@e] {f})") == [
        TokenKind.LPAREN,
        TokenKind.ATOM,
        TokenKind.QUOTE,
        TokenKind.ATOM,
        TokenKind.QUASIQUOTE,
        TokenKind.LBRACKET,
        TokenKind.ATOM,
        TokenKind.UNQUOTE,
        TokenKind.ATOM,
        TokenKind.UNQUOTE_SPLICING,
        TokenKind.ATOM,
        TokenKind.RBRACKET,
        TokenKind.LBRACE,
        TokenKind.ATOM,
        TokenKind.RBRACE,
        TokenKind.RPAREN,
        TokenKind.EOF,
    ]


def test_trivia_tokens_are_kept_in_the_stream():
    assert kinds("a ; note\n#| outer #| inner |# |# b", trivia=True) == [
        TokenKind.ATOM,
        TokenKind.WHITESPACE,
        TokenKind.COMMENT,
        TokenKind.NEWLINE,
        TokenKind.BLOCK_COMMENT,
        TokenKind.WHITESPACE,
        TokenKind.ATOM,
        TokenKind.EOF,
    ]


def test_hash_literals():
    source = "#t #false #:kw #\\a #\\space #;x"
    tokens, diagnostics = lex(source)
    datums = [token for token in tokens if not token.kind.is_trivia]

    assert diagnostics == []
    assert [token.kind for token in datums] == [
        TokenKind.BOOLEAN,
        TokenKind.BOOLEAN,
        TokenKind.KEYWORD,
        TokenKind.CHARACTER,
        TokenKind.CHARACTER,
        TokenKind.DATUM_COMMENT,
        TokenKind.ATOM,
        TokenKind.EOF,
    ]
    assert [token_text(source, token) for token in datums[:5]] == ["#t", "#false", "#:kw", "#\\a", "#\\space"]


def test_lang_line_runs_to_end_of_line():
    source = "#lang racket/base\n(x)"
    tokens, _ = lex(source)

    assert tokens[0].kind == TokenKind.LANG_LINE
    assert token_text(source, tokens[0]) == "#lang racket/base"
    assert tokens[1].kind == TokenKind.NEWLINE


def test_strings_with_escapes_keep_delimiters_inside():
    source = '"a \\"quoted\\" (paren) ; not a comment" b'
    tokens, diagnostics = lex(source)

    assert diagnostics == []
    assert tokens[0].kind == TokenKind.STRING
    assert tokens[0].flags & TokenFlags.HAS_ESCAPE
    assert token_text(source, tokens[0]) == '"a \\"quoted\\" (paren) ; not a comment"'
    assert tokens[-2].kind == TokenKind.ATOM


def test_unterminated_string_reports_diagnostic():
    tokens, diagnostics = lex('(a "oops')

    assert tokens[3].kind == TokenKind.STRING
    assert tokens[3].is_unterminated
    assert [d.code for d in diagnostics] == ["LEXER_UNTERMINATED_STRING"]


def test_unterminated_block_comment_reports_diagnostic():
    _, diagnostics = lex("a #| never closed")

    assert [d.code for d in diagnostics] == ["LEXER_UNTERMINATED_BLOCK_COMMENT"]


def test_invalid_hash_literal_is_skipped():
    tokens, diagnostics = lex("#zap b")

    assert tokens[0].kind == TokenKind.SKIPPED
    assert tokens[0].kind.is_trivia
    assert [d.code for d in diagnostics] == ["LEXER_INVALID_HASH_LITERAL"]
    assert diagnostics[0].range.as_tuple() == (0, 4)


def test_escaped_atoms_are_flagged():
    lexer = Lexer("a\\ b c")
    tokens = [token for token in lexer.lex() if not token.kind.is_trivia]

    assert lexer.source == "a\\ b c"
    assert lexer.diagnostics == []
    assert [token_text(lexer.source, token) for token in tokens[:2]] == ["a\\ b", "c"]
    assert tokens[0].flags & TokenFlags.HAS_ESCAPE
    assert not tokens[1].flags & TokenFlags.HAS_ESCAPE


def test_token_ranges_cover_the_source():
    source = "(define (f x)\r\n  x)"
    tokens, _ = lex(source)

    assert "".join(token_text(source, token) for token in tokens) == source
