"""Atom interpretation and canonical atom text."""

from __future__ import annotations

from fractions import Fraction
import math
import re

from sexpfmt.ast.model import AstAtom, AtomKind

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_FRACTION_RE = re.compile(r"^([+-]?\d+)/(\d+)$")
_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?$")
_HEX_DIGITS = "0123456789abcdefABCDEF"
_SYMBOL_DELIMITERS = frozenset("()[]{}\",'`;\\")

_STRING_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "v": "\v",
    "f": "\f",
    "r": "\r",
    "e": "\x1b",
    '"': '"',
    "'": "'",
    "\\": "\\",
}
_STRING_WRITE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\a": "\\a",
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\v": "\\v",
    "\f": "\\f",
    "\r": "\\r",
    "\x1b": "\\e",
}

CHARACTER_NAMES: dict[str, str] = {
    "space": " ",
    "newline": "\n",
    "linefeed": "\n",
    "tab": "\t",
    "nul": "\0",
    "null": "\0",
    "return": "\r",
    "backspace": "\b",
    "vtab": "\v",
    "page": "\f",
    "rubout": "\x7f",
    "delete": "\x7f",
}
_CHARACTER_WRITE_NAMES = {
    " ": "space",
    "\n": "newline",
    "\t": "tab",
    "\0": "nul",
    "\r": "return",
    "\b": "backspace",
    "\v": "vtab",
    "\f": "page",
    "\x7f": "rubout",
}


def parse_number(text: str) -> int | float | Fraction | None:
    if _INTEGER_RE.fullmatch(text):
        return int(text)

    match = _FRACTION_RE.fullmatch(text)
    if match is not None:
        denominator = int(match.group(2))
        if denominator == 0:
            return None
        value = Fraction(int(match.group(1)), denominator)
        return value.numerator if value.denominator == 1 else value

    if _DECIMAL_RE.fullmatch(text) and any(ch.isdigit() for ch in text):
        return float(text)

    return None


def interpret_atom(text: str, *, escaped: bool = False) -> AstAtom:
    """Classify bare atom text as a number or a symbol.

    Atoms written with backslash escapes are always symbols.
    """
    if escaped:
        return AstAtom(AtomKind.SYMBOL, decode_symbol(text))
    value = parse_number(text)
    if value is not None:
        return AstAtom(AtomKind.NUMBER, value)
    return AstAtom(AtomKind.SYMBOL, text)


def decode_symbol(raw: str) -> str:
    """Drop the backslash of every `\\c` escape in symbol text."""
    out: list[str] = []
    index = 0
    while index < len(raw):
        if raw[index] == "\\" and index + 1 < len(raw):
            index += 1
        out.append(raw[index])
        index += 1
    return "".join(out)


def decode_string(raw: str) -> str:
    """Decode a string token (including its quotes) into its contents.

    Unknown escapes keep the escaped character; an unterminated token is decoded
    up to the end of input.
    """
    body = raw[1:-1] if len(raw) >= 2 and raw.endswith('"') else raw[1:]
    out: list[str] = []
    index = 0
    while index < len(body):
        ch = body[index]
        if ch != "\\" or index + 1 >= len(body):
            out.append(ch)
            index += 1
            continue

        escape = body[index + 1]
        index += 2
        if escape in _STRING_ESCAPES:
            out.append(_STRING_ESCAPES[escape])
        elif escape in ("x", "u", "U"):
            limit = {"x": 2, "u": 4, "U": 8}[escape]
            digits = _take_while(body, index, limit, _HEX_DIGITS)
            if digits:
                out.append(chr(int(digits, 16)))
                index += len(digits)
            else:
                out.append(escape)
        elif escape in "01234567":
            digits = escape + _take_while(body, index, 2, "01234567")
            out.append(chr(int(digits, 8)))
            index += len(digits) - 1
        elif escape == "\n":
            # Line continuation.
            pass
        else:
            out.append(escape)
    return "".join(out)


def decode_character(raw: str) -> str | None:
    """Decode `#\\a`, `#\\space` or `#\\x41` / `#\\u03BB` / `#\\U1F600`.

    Returns `None` for unknown names and invalid code points.
    """
    name = raw[2:]
    if len(name) == 1:
        return name
    named = CHARACTER_NAMES.get(name.lower())
    if named is not None or name[:1] not in ("x", "u", "U"):
        return named

    digits = name[1:]
    if len(digits) > 8 or _take_while(digits, 0, 8, _HEX_DIGITS) != digits:
        return None
    code_point = int(digits, 16)
    if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
        return None
    return chr(code_point)


def atom_text(atom: AstAtom) -> str:
    """Canonical textual representation of an atom."""
    match atom.kind:
        case AtomKind.SYMBOL:
            return _symbol_text(str(atom.value))
        case AtomKind.DIRECTIVE:
            return str(atom.value)
        case AtomKind.NUMBER:
            return _number_text(atom.value)
        case AtomKind.STRING:
            return _string_text(str(atom.value))
        case AtomKind.KEYWORD:
            return f"#:{atom.value}"
        case AtomKind.BOOLEAN:
            return "#t" if atom.value else "#f"
        case AtomKind.CHARACTER:
            return "#\\" + _character_name(str(atom.value))


def _symbol_text(value: str) -> str:
    # Whitespace and delimiters are escaped so the symbol reads back as one atom.
    out: list[str] = []
    for ch in value:
        if ch in _SYMBOL_DELIMITERS or ch.isspace():
            out.append("\\")
        out.append(ch)
    if value.startswith("#") or parse_number(value) is not None:
        out.insert(0, "\\")
    return "".join(out)


def _character_name(char: str) -> str:
    name = _CHARACTER_WRITE_NAMES.get(char)
    if name is not None:
        return name
    if ord(char) < 0x20 or char.isspace():
        return f"u{ord(char):04X}"
    return char


def _number_text(value: object) -> str:
    if isinstance(value, Fraction):
        return f"{value.numerator}/{value.denominator}"
    if isinstance(value, float):
        if math.isnan(value):
            return "+nan.0"
        if math.isinf(value):
            return "+inf.0" if value > 0 else "-inf.0"
        return repr(value).replace("e+", "e")
    return str(value)


def _string_text(value: str) -> str:
    out = ['"']
    for ch in value:
        escaped = _STRING_WRITE_ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def _take_while(text: str, start: int, limit: int, allowed: str) -> str:
    end = start
    while end < len(text) and end - start < limit and text[end] in allowed:
        end += 1
    return text[start:end]


__all__ = [
    "CHARACTER_NAMES",
    "atom_text",
    "decode_character",
    "decode_string",
    "decode_symbol",
    "interpret_atom",
    "parse_number",
]
