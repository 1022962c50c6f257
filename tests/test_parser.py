import pytest

from mviewpy.ast import (
    Block,
    BracketClosure,
    ChildDelimiter,
    ClassSelector,
    Component,
    Doctype,
    Element,
    ErrorNode,
    IdSelector,
    Slot,
    TagKind,
    Text,
)
from mviewpy.diagnostics import has_errors
from mviewpy.parser import ParsedView, ParseMode, ParserOptions, parse
from tests._debug import debug_dump_ast, debug_dump_diagnostics, debug_print_source
from tests._shared_cases import VALID_CASES, ViewCase, case_id, case_source


def parse_and_debug(test_name: str, source: str, options: ParserOptions | None = None) -> ParsedView:
    debug_print_source(test_name, source)
    parsed = parse(source, options=options)
    debug_dump_ast(test_name, parsed.nodes, source)
    debug_dump_diagnostics(test_name, parsed.diagnostics)
    return parsed


def codes(parsed: ParsedView) -> list[str]:
    return [diagnostic.code for diagnostic in parsed.diagnostics]


@pytest.mark.parametrize("case", VALID_CASES, ids=case_id)
def test_valid_cases_parse_without_diagnostics(case: ViewCase) -> None:
    parsed = parse_and_debug(case.name, case.source)
    assert parsed.diagnostics == []
    assert parsed.nodes


def test_selectors_attributes_and_children() -> None:
    parsed = parse_and_debug("selectors", case_source("nested_elements"))

    (container,) = parsed.nodes
    assert isinstance(container, Element)
    assert container.tag.name == "div"
    assert container.tag.kind == TagKind.HTML
    class_selector, id_selector = container.selectors
    assert isinstance(class_selector, ClassSelector)
    assert class_selector.name.text == "container"
    assert isinstance(id_selector, IdSelector)
    assert id_selector.name.text == "main"

    assert container.children is not None
    assert container.children.delimiter == ChildDelimiter.BRACE
    heading, paragraph, line_break = container.children.children
    assert isinstance(heading, Element) and heading.tag.name == "h1"
    assert isinstance(paragraph, Element)
    assert paragraph.children is not None
    text, block = paragraph.children.children
    assert isinstance(text, Text)
    assert text.literal.string_value == "Body "
    assert isinstance(block, Block)
    assert block.expr == "count"
    assert isinstance(line_break, Element)
    assert line_break.children is None


def test_paren_children_and_bracket_child() -> None:
    parsed = parse_and_debug("paren", case_source("paren_children"))
    (span,) = parsed.nodes
    assert isinstance(span, Element)
    assert span.children is not None
    assert span.children.delimiter == ChildDelimiter.PAREN
    assert len(span.children.children) == 2

    parsed = parse_and_debug("format", case_source("format_bracket_child"))
    (paragraph,) = parsed.nodes
    assert isinstance(paragraph, Element)
    assert paragraph.children is not None
    (closure,) = paragraph.children.children
    assert isinstance(closure, BracketClosure)
    assert closure.prefix == "f"
    assert closure.expr == '"{} items", count'


def test_paren_children_can_be_disabled() -> None:
    options = ParserOptions(allow_paren_children=False)
    parsed = parse_and_debug("no_paren", 'span("a")', options)

    assert codes(parsed)[0] == "PARSER_UNTERMINATED_ELEMENT"
    assert isinstance(parsed.nodes[0], Element)
    assert parsed.nodes[0].children is None


def test_tag_classification() -> None:
    parsed = parse_and_debug(
        "tags",
        'svg { circle; } math { mi; } my-element; Comp; icons::Star; slot::Foo;',
    )

    svg, math, web, component, path_component, slot_path = parsed.nodes
    assert isinstance(svg, Element) and svg.tag.kind == TagKind.SVG
    assert isinstance(math, Element) and math.tag.kind == TagKind.MATH
    assert isinstance(web, Element) and web.tag.kind == TagKind.WEB_COMPONENT
    assert isinstance(component, Component) and component.path.segments == ("Comp",)
    assert isinstance(path_component, Component) and path_component.path.text == "icons::Star"
    # `slot::Foo` is a path, not the `slot:` prefix.
    assert isinstance(slot_path, Component) and slot_path.path.segments == ("slot", "Foo")
    assert parsed.diagnostics == []


def test_path_on_lowercase_tag_is_malformed() -> None:
    parsed = parse_and_debug("malformed", "a::b;")

    assert codes(parsed) == ["PARSER_MALFORMED_IDENT"]
    assert parsed.diagnostics[0].range.as_tuple() == (0, 4)
    assert isinstance(parsed.nodes[0], Element)


def test_generics_and_turbofish() -> None:
    parsed = parse_and_debug("generics", case_source("generic_component"))
    (component,) = parsed.nodes
    assert isinstance(component, Component)
    assert component.generics is not None
    assert component.generics.text == "String"

    parsed = parse_and_debug("nested_generics", "Map<K, Vec<V>>;")
    (component,) = parsed.nodes
    assert isinstance(component, Component)
    assert component.generics is not None
    assert component.generics.text == "K, Vec<V>"
    assert parsed.diagnostics == []

    parsed = parse_and_debug("turbofish", "Comp::<T>;")
    assert codes(parsed) == ["PARSER_TURBOFISH_GENERICS"]
    assert parsed.diagnostics[0].range.as_tuple() == (4, 6)
    (component,) = parsed.nodes
    assert isinstance(component, Component)
    assert component.generics is not None
    assert component.generics.text == "T"


def test_closure_args_need_children_block() -> None:
    parsed = parse_and_debug("closure_args", case_source("closure_children"))
    (component,) = parsed.nodes
    assert isinstance(component, Component)
    assert component.children_args is not None
    assert component.children_args.text == "value"
    assert component.children is not None

    parsed = parse_and_debug("closure_args_without_block", "Show |x|;")
    assert codes(parsed) == ["PARSER_EXPECTED_CHILDREN_BLOCK"]
    assert parsed.diagnostics[0].range.as_tuple() == (8, 9)
    (component,) = parsed.nodes
    assert isinstance(component, Component)
    assert component.children is None


def test_slot_node() -> None:
    parsed = parse_and_debug("slot", case_source("component_with_slot"))
    (show,) = parsed.nodes
    assert isinstance(show, Component)
    assert show.children is not None
    slot, text = show.children.children
    assert isinstance(slot, Slot)
    assert slot.name.text == "Fallback"
    assert isinstance(text, Text)


def test_doctype() -> None:
    parsed = parse_and_debug("doctype", case_source("doctype_then_document"))
    doctype, html = parsed.nodes
    assert isinstance(doctype, Doctype)
    assert doctype.range.as_tuple() == (0, 14)
    assert isinstance(html, Element)


@pytest.mark.parametrize(
    ("source", "message", "range"),
    [
        ("!html;", "Expected `DOCTYPE` after `!`", (1, 5)),
        ("!DOCTYPE;", "Expected `html` after `!DOCTYPE`", (8, 9)),
        ("!DOCTYPE html div;", "Expected `;` after `!DOCTYPE html`", (14, 17)),
    ],
)
def test_invalid_doctype(source: str, message: str, range: tuple[int, int]) -> None:
    parsed = parse_and_debug("invalid_doctype", source)

    assert codes(parsed) == ["PARSER_INVALID_DOCTYPE"]
    assert parsed.diagnostics[0].message == message
    assert parsed.diagnostics[0].range.as_tuple() == range
    assert isinstance(parsed.nodes[0], Doctype)


def test_extra_semicolon_depends_on_mode() -> None:
    strict = parse("br;;")
    assert codes(strict) == ["PARSER_EXTRA_SEMICOLON"]
    assert strict.diagnostics[0].range.as_tuple() == (3, 4)
    assert has_errors(strict.diagnostics)

    permissive = parse("br;;", mode=ParseMode.PERMISSIVE)
    assert [d.severity for d in permissive.diagnostics] == ["warning"]
    assert not has_errors(permissive.diagnostics)
    assert len(permissive.nodes) == 1


def test_unterminated_element_resumes_at_offending_token() -> None:
    parsed = parse_and_debug("unterminated", case_source("unterminated_element"))

    assert codes(parsed) == ["PARSER_UNTERMINATED_ELEMENT"]
    assert parsed.diagnostics[0].range.as_tuple() == (0, 7)
    assert '"x"' in parsed.diagnostics[0].message
    element, text = parsed.nodes
    assert isinstance(element, Element)
    assert element.range.as_tuple() == (0, 3)
    assert isinstance(text, Text)


def test_implicit_termination() -> None:
    parsed = parse_and_debug("implicit", case_source("implicit_last_node"))
    div, br = parsed.nodes
    assert isinstance(div, Element)
    assert isinstance(br, Element)
    assert parsed.diagnostics == []

    parsed = parse_and_debug("explicit", "div", ParserOptions(allow_implicit_termination=False))
    assert codes(parsed) == ["PARSER_UNTERMINATED_ELEMENT"]
    assert parsed.diagnostics[0].range.as_tuple() == (0, 3)


def test_invalid_children_become_error_nodes() -> None:
    parsed = parse_and_debug("stray_token", case_source("stray_token_child"))
    assert codes(parsed) == ["PARSER_INVALID_CHILD"]
    assert parsed.diagnostics[0].range.as_tuple() == (6, 7)
    (div,) = parsed.nodes
    assert isinstance(div, Element)
    assert div.children is not None
    (error,) = div.children.children
    assert isinstance(error, ErrorNode)
    assert error.raw_text == "="

    parsed = parse_and_debug("number_child", case_source("number_child"))
    assert codes(parsed) == ["PARSER_INVALID_CHILD"]
    assert parsed.diagnostics[0].message == "Only string literals are allowed in children"


def test_mismatched_closer_in_children() -> None:
    parsed = parse_and_debug("mismatched", "div { ) }")

    assert codes(parsed) == ["PARSER_MISMATCHED_DELIMITER"]
    assert parsed.diagnostics[0].range.as_tuple() == (6, 7)
    (div,) = parsed.nodes
    assert isinstance(div, Element)
    assert div.children is not None
    assert div.children.children == ()


def test_unclosed_children_report_unexpected_end() -> None:
    parsed = parse_and_debug("unclosed", 'div { "a"')

    assert codes(parsed) == ["PARSER_UNEXPECTED_END"]
    (div,) = parsed.nodes
    assert isinstance(div, Element)
    assert div.children is not None
    assert div.children.range.as_tuple() == (4, 9)


def test_lexer_diagnostics_come_first() -> None:
    parsed = parse_and_debug("unterminated_string", case_source("unterminated_string"))
    assert codes(parsed)[0] == "LEXER_UNTERMINATED_STRING"


def test_options_and_mode_are_exclusive() -> None:
    with pytest.raises(ValueError, match="Pass either options or mode, not both"):
        parse("div;", ParserOptions(), mode=ParseMode.STRICT)
