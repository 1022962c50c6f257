from mviewpy.ast import (
    BlockValue,
    BoolAttr,
    BracketValue,
    Element,
    KvAttr,
    LiteralKind,
    LiteralValue,
    MissingValue,
)
from mviewpy.lexer import Lexer, TokenKind
from mviewpy.parser import Parser, TokenSource, parse, parse_value
from mviewpy.parser.values import WRAP_IN_BRACES_HINT


def parse_after_eq(text: str) -> tuple[object, Parser]:
    parser = Parser(TokenSource(Lexer(text)))
    assert parser.at(TokenKind.EQUAL)
    eq_range = parser.current_range
    parser.bump()
    return parse_value(parser, eq_range), parser


def kv_values(source: str) -> list[object]:
    parsed = parse(source)
    element = parsed.nodes[0]
    assert isinstance(element, Element)
    return [attribute.value for attribute in element.attributes if isinstance(attribute, KvAttr)]


def test_literal_kinds() -> None:
    values = kv_values("div a=1 b=1.5 c='x' d=true e=\"s\" f=false;")

    assert [value.kind for value in values if isinstance(value, LiteralValue)] == [
        LiteralKind.INT,
        LiteralKind.FLOAT,
        LiteralKind.CHAR,
        LiteralKind.BOOL,
        LiteralKind.STRING,
        LiteralKind.BOOL,
    ]


def test_block_value_keeps_expression_verbatim() -> None:
    value, parser = parse_after_eq("= { a.b(c, { d }) } rest")

    assert isinstance(value, BlockValue)
    assert value.expr == "a.b(c, { d })"
    assert value.range.as_tuple() == (2, 19)
    assert parser.current_text == "rest"
    assert parser.diagnostics == []


def test_bracket_value_and_format_prefix() -> None:
    plain, _ = parse_after_eq("=[count()]")
    prefixed, _ = parse_after_eq('=f["{}", n]')

    assert isinstance(plain, BracketValue)
    assert plain.prefix is None
    assert plain.expr == "count()"
    assert plain.range.as_tuple() == (1, 10)

    assert isinstance(prefixed, BracketValue)
    assert prefixed.prefix == "f"
    assert prefixed.prefix_range is not None
    assert prefixed.prefix_range.as_tuple() == (1, 2)
    assert prefixed.expr == '"{}", n'
    assert prefixed.range.as_tuple() == (1, 11)


def test_prefix_must_touch_bracket() -> None:
    value, parser = parse_after_eq("= f [x]")

    assert isinstance(value, MissingValue)
    assert [d.code for d in parser.diagnostics] == ["PARSER_EXPECTED_VALUE"]
    assert parser.diagnostics[0].hint == WRAP_IN_BRACES_HINT
    assert parser.current_text == "f"


def test_missing_value_at_semicolon_points_after_equals() -> None:
    value, parser = parse_after_eq("=;")

    assert isinstance(value, MissingValue)
    assert value.range.as_tuple() == (1, 1)
    assert parser.diagnostics[0].code == "PARSER_EXPECTED_VALUE"
    assert parser.diagnostics[0].range.as_tuple() == (1, 2)
    assert parser.diagnostics[0].hint is None
    assert parser.at(TokenKind.SEMICOLON)


def test_missing_value_at_end_of_input_is_empty_range_after_equals() -> None:
    value, parser = parse_after_eq("=")

    assert isinstance(value, MissingValue)
    assert value.range.as_tuple() == (1, 1)
    assert parser.diagnostics[0].code == "PARSER_EXPECTED_VALUE"
    assert parser.diagnostics[0].range.as_tuple() == (1, 1)


def test_empty_block_and_bracket_are_missing_values() -> None:
    block, block_parser = parse_after_eq("={} next")
    bracket, bracket_parser = parse_after_eq("=[ ] next")

    assert isinstance(block, MissingValue)
    assert block.range.as_tuple() == (1, 3)
    assert block_parser.diagnostics[0].range.as_tuple() == (1, 3)
    assert block_parser.current_text == "next"

    assert isinstance(bracket, MissingValue)
    assert bracket.range.as_tuple() == (1, 4)
    assert bracket_parser.current_text == "next"


def test_bare_identifier_gets_brace_hint_and_parsing_continues() -> None:
    parsed = parse("div a=b c=1;")

    assert [d.code for d in parsed.diagnostics] == ["PARSER_EXPECTED_VALUE"]
    assert parsed.diagnostics[0].hint == WRAP_IN_BRACES_HINT

    element = parsed.nodes[0]
    assert isinstance(element, Element)
    assert isinstance(element.attributes[0], KvAttr)
    assert isinstance(element.attributes[0].value, MissingValue)
    assert isinstance(element.attributes[1], BoolAttr)
    assert element.attributes[1].key.text == "b"
    assert isinstance(element.attributes[2], KvAttr)
    assert element.attributes[2].key.text == "c"
    assert element.children is None


def test_string_value_helpers() -> None:
    values = kv_values('div a="x y" b=r#"raw"# c=true;')

    first, second, third = values
    assert isinstance(first, LiteralValue)
    assert first.string_value == "x y"
    assert isinstance(second, LiteralValue)
    assert second.kind == LiteralKind.STRING
    assert second.string_value is None
    assert isinstance(third, LiteralValue)
    assert third.is_true
    assert not third.is_false
