"""Bridges between partial-format pieces and the document algebra."""

from __future__ import annotations

from sexpfmt.doc import Align, Alt, Concat, Doc, Nest, Text, VConcat, alt, text, vconcat


def literal_doc(s: str) -> Doc:
    """Exactly `s`, with every embedded newline as a hard line break."""
    return vconcat(*(text(line) for line in s.split("\n")))


def flatten_doc(doc: Doc, memo: dict[int, tuple[Doc, Doc | None]] | None = None) -> Doc | None:
    """Restrict `doc` to its layouts without forced line breaks.

    Returns `None` when no such layout exists. Unchanged subdocuments are reused.
    """
    table = memo if memo is not None else {}
    # Entries keep their key document alive so ids are never reused.
    entry = table.get(id(doc))
    if entry is not None:
        return entry[1]

    result: Doc | None
    match doc:
        case Text():
            result = doc
        case VConcat(parts):
            if len(parts) > 1:
                result = None
            elif parts:
                result = flatten_doc(parts[0], table)
            else:
                result = doc
        case Concat(parts):
            flat_parts: list[Doc] = []
            for part in parts:
                flat = flatten_doc(part, table)
                if flat is None:
                    break
                flat_parts.append(flat)
            if len(flat_parts) != len(parts):
                result = None
            elif all(flat is part for flat, part in zip(flat_parts, parts)):
                result = doc
            else:
                result = Concat(tuple(flat_parts))
        case Align(child):
            flat = flatten_doc(child, table)
            result = None if flat is None else (doc if flat is child else Align(flat))
        case Nest(by, child):
            flat = flatten_doc(child, table)
            result = None if flat is None else (doc if flat is child else Nest(by, flat))
        case Alt(alternatives):
            flats = [flatten_doc(alternative, table) for alternative in alternatives]
            kept = [flat for flat in flats if flat is not None]
            if not kept:
                result = None
            elif all(flat is alternative for flat, alternative in zip(flats, alternatives)):
                result = doc
            else:
                result = alt(*kept)
        case _:
            raise TypeError(f"Not a document: {doc!r}")

    table[id(doc)] = (doc, result)
    return result
