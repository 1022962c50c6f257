from mviewpy.diagnostics import (
    Diagnostic,
    collect_diagnostics,
    dedupe_diagnostics,
    has_errors,
    make_diagnostic,
)
from mviewpy.diagnostics.codes import PARSER_EXPECTED_VALUE, PARSER_EXTRA_SEMICOLON
from mviewpy.parser import parse
from mviewpy.text import TextRange, TextSize


def span(start: int, end: int) -> TextRange:
    return TextRange.new(TextSize(start), TextSize(end))


def test_make_diagnostic_uses_spec_defaults() -> None:
    diagnostic = make_diagnostic(PARSER_EXTRA_SEMICOLON, span(3, 4))

    assert diagnostic.code == "PARSER_EXTRA_SEMICOLON"
    assert diagnostic.message == PARSER_EXTRA_SEMICOLON.message
    assert diagnostic.hint == "Remove this semi-colon."
    assert diagnostic.severity == "error"
    assert diagnostic.category == "parser"


def test_make_diagnostic_overrides() -> None:
    diagnostic = make_diagnostic(
        PARSER_EXTRA_SEMICOLON,
        span(3, 4),
        message="custom",
        hint="other hint",
        severity="warning",
    )

    assert diagnostic.message == "custom"
    assert diagnostic.hint == "other hint"
    assert diagnostic.severity == "warning"
    assert diagnostic.code == "PARSER_EXTRA_SEMICOLON"


def test_collect_keeps_group_order() -> None:
    first = make_diagnostic(PARSER_EXPECTED_VALUE, span(5, 6))
    second = make_diagnostic(PARSER_EXTRA_SEMICOLON, span(0, 1))

    assert collect_diagnostics([first], [], [second]) == [first, second]


def test_dedupe_drops_exact_repeats_only() -> None:
    first = make_diagnostic(PARSER_EXPECTED_VALUE, span(5, 6))
    repeat = make_diagnostic(PARSER_EXPECTED_VALUE, span(5, 6))
    other_message = make_diagnostic(PARSER_EXPECTED_VALUE, span(5, 6), message="Expected a value for `x`")
    other_range = make_diagnostic(PARSER_EXPECTED_VALUE, span(6, 7))

    assert dedupe_diagnostics([first, repeat, other_message, other_range]) == [
        first,
        other_message,
        other_range,
    ]


def test_has_errors_ignores_warnings() -> None:
    warning = Diagnostic(code="X", message="x", range=span(0, 1), severity="warning")
    error = Diagnostic(code="Y", message="y", range=span(0, 1))

    assert not has_errors([])
    assert not has_errors([warning])
    assert has_errors([warning, error])


def test_independent_problems_at_one_offset_are_both_reported() -> None:
    parsed = parse('a::b "x"')

    assert [(d.code, d.range.as_tuple()) for d in parsed.diagnostics] == [
        ("PARSER_MALFORMED_IDENT", (0, 4)),
        ("PARSER_UNTERMINATED_ELEMENT", (0, 8)),
    ]
