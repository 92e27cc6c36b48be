import logging

import pytest

from sexpfmt import FormatOptions, format_source, run_format
from sexpfmt.format import RuleRegistry, compact_form_rule, expanded_form_rule
from sexpfmt.pipeline import run_format as pipeline_run_format
from sexpfmt.reader import ReaderOptions, ReadMode, read_node, read_source


def test_run_format_formats_every_top_level_form():
    source = "(define x   1)\n(display\n x)"

    result = run_format(source)

    assert result.formatted_text == "(define x 1)\n\n(display x)\n"
    assert result.changed is True
    assert result.diagnostics == []
    assert result.read.source_text == source


def test_formatted_output_is_unchanged_on_second_run():
    first = run_format("(+ 1 (+ 2 3 4) 5)  (f)", FormatOptions(width=15))
    second = run_format(first.formatted_text, FormatOptions(width=15))

    assert first.formatted_text == "(+ 1\n   (+ 2 3 4)\n   5)\n\n(f)\n"
    assert second.formatted_text == first.formatted_text
    assert second.changed is False


def test_blank_lines_between_forms_are_optional():
    result = run_format("(a) (b)", FormatOptions(blank_line_between_forms=False))

    assert result.formatted_text == "(a)\n(b)\n"


def test_comments_and_directives():
    result = run_format("#lang racket\n; comment\n(a b) ; trailing\n")

    assert result.formatted_text == "#lang racket\n\n(a b)\n"


def test_empty_source_formats_to_empty_text():
    result = run_format("  ; only a comment\n")

    assert result.formatted_text == ""
    assert result.changed is True


def test_read_errors_keep_the_original_source():
    source = "(a (b)"

    result = run_format(source)

    assert result.has_errors
    assert result.formatted_text == source
    assert result.changed is False
    assert [d.code for d in result.diagnostics] == ["READER_MISSING_CLOSER"]


def test_permissive_read_formats_despite_missing_closer():
    result = run_format("(a (b)", reader_options=ReaderOptions.for_mode(ReadMode.PERMISSIVE))

    assert not result.has_errors
    assert result.formatted_text == "(a (b))\n"
    assert [d.severity for d in result.diagnostics] == ["warning"]


def test_run_format_reuses_provided_read_result():
    read = read_source("(a   b)")

    result = run_format("ignored", read=read)

    assert result.read is read
    assert result.formatted_text == "(a b)\n"


def test_run_format_rejects_read_with_reader_options():
    read = read_source("(a)")

    with pytest.raises(ValueError, match="Pass either read or reader_options, not both"):
        run_format("(a)", read=read, reader_options=ReaderOptions())


def test_unformattable_forms_are_reported(caplog: pytest.LogCaptureFixture) -> None:
    registry = RuleRegistry((compact_form_rule, expanded_form_rule))

    with caplog.at_level(logging.WARNING, logger="sexpfmt.format.runner"):
        result = run_format("()\n(a)", registry=registry)

    assert result.formatted_text == "()\n\n(a)\n"
    assert [d.code for d in result.diagnostics] == ["FORMAT_NO_APPLICABLE_RULE"]
    assert result.diagnostics[0].range.as_tuple() == (3, 6)
    assert "Cannot format top-level form 1" in caplog.text


def test_format_source_raises_on_errors():
    assert format_source("(a\n b)") == "(a b)\n"

    with pytest.raises(ValueError, match="READER_UNEXPECTED_CLOSER"):
        format_source(")")
    with pytest.raises(ValueError, match="FORMAT_NO_APPLICABLE_RULE"):
        format_source("x", registry=RuleRegistry((compact_form_rule,)))


def test_pipeline_entrypoint_delegates_to_runner():
    assert pipeline_run_format("(a  b)").formatted_text == "(a b)\n"


@pytest.mark.parametrize("width", [0, -3, True])
def test_format_options_reject_invalid_width(width: int) -> None:
    with pytest.raises(ValueError, match="positive int"):
        FormatOptions(width=width)


def test_escaped_symbols_keep_their_meaning():
    source = "(f a\\ b   \\42 c\\(d)"

    formatted = format_source(source)

    assert formatted == "(f a\\ b \\42 c\\(d)\n"
    assert read_node(formatted) == read_node(source)


def test_symbols_with_escaped_line_breaks_are_kept_as_written():
    source = "(a b\\\nc)"

    result = run_format(source)

    assert result.formatted_text == "(a b\\\nc)\n"
    assert [d.code for d in result.diagnostics] == ["FORMAT_NO_APPLICABLE_RULE"]
    assert read_node(result.formatted_text) == read_node(source)


def test_hex_characters_format_in_canonical_form():
    assert format_source("(list #\\x41   #\\u03BB #\\x1)") == "(list #\\A #\\λ #\\u0001)\n"


def test_deeply_nested_forms_are_reported_and_kept(caplog: pytest.LogCaptureFixture) -> None:
    depth = 200
    deep = "(f " * depth + "x" + ")" * depth
    source = f"(a   b)\n{deep}"
    assert not read_source(source).has_errors

    with caplog.at_level(logging.WARNING, logger="sexpfmt.format.runner"):
        result = run_format(source)

    assert result.formatted_text == f"(a b)\n\n{deep}\n"
    assert [d.code for d in result.diagnostics] == ["FORMAT_TOO_DEEP"]
    assert result.diagnostics[0].range.as_tuple() == (8, len(source))
    assert "Top-level form 1 is nested too deeply" in caplog.text
    with pytest.raises(ValueError, match="FORMAT_TOO_DEEP"):
        format_source(deep)
