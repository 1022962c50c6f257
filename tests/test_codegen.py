from dataclasses import replace

import pytest

from mviewpy.ast import DirectiveAttr, Element, Modifier
from mviewpy.codegen import (
    UNIT,
    Call,
    Closure,
    Generator,
    GeneratorOptions,
    Lit,
    Path,
    Tuple,
    generate,
    render,
    upper_camel_to_snake,
)
from mviewpy.codegen.generator import element_ident
from mviewpy.diagnostics import Diagnostic
from mviewpy.parser import parse
from mviewpy.text import TextRange, TextSize
from tests._debug import debug_dump_diagnostics, debug_dump_output, debug_print_source
from tests._shared_cases import CaseName, case_source


def compile_source(source: str, options: GeneratorOptions | None = None) -> tuple[str, list[Diagnostic]]:
    debug_print_source(source, source)
    parsed = parse(source)
    assert parsed.diagnostics == []
    expr, diagnostics = generate(parsed.nodes, options)
    code = render(expr)
    debug_dump_output(source, code)
    debug_dump_diagnostics(source, diagnostics)
    return code, diagnostics


def compile_clean(source: str, options: GeneratorOptions | None = None) -> str:
    code, diagnostics = compile_source(source, options)
    assert diagnostics == []
    return code


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("static_selector_classes", 'html::div::new().classes("a b").child("x")'),
        ("input_kv_and_bool", 'html::input::new().attr("type", "text").attr("checked").self_closing()'),
        ("component_kv", "Comp::builder().some_attr(5).build()"),
        ("undelegated_event", "html::div::new().on(ev::undelegated(ev::click), handler).self_closing()"),
        (
            "component_clone",
            'Comp::builder().children({ let name = name.clone(); ToChildren::to_children(move || "x") }).build()',
        ),
        ("paren_children", 'html::span::new().child("a").child("b")'),
        ("closure_children", 'Show::builder().when(move || ready()).children(move |value| "ok").build()'),
        (
            "doctype_then_document",
            'View::new((html::doctype("html"), html::html::new().child(html::body::new())))',
        ),
        (
            "spread_and_shorthand",
            'html::input::new().attrs(attrs).attr("value", value).attr("disabled").self_closing()',
        ),
        ("web_component", 'html::custom("my-element").attr("data-id", "1").self_closing()'),
        (
            "svg_children",
            'svg::svg::new().attr("viewBox", "0 0 10 10")'
            '.child(svg::circle::new().attr("cx", 5).attr("cy", 5).attr("r", 4).self_closing())',
        ),
        ("format_bracket_child", 'html::p::new().child(move || format!("{} items", count))'),
        ("implicit_last_node", "View::new((html::div::new().child(html::span::new().self_closing()), html::br::new().self_closing()))"),
        ("string_class_key", 'html::div::new().class("w-[10px]", move || wide()).self_closing()'),
        ("use_directives", "html::div::new().directive(tooltip, ()).directive(focus, true).self_closing()"),
        ("generic_component", "List::<String>::builder().items(move || items()).build()"),
        ("node_reference", "html::input::new().node_ref(input_ref).self_closing()"),
    ],
)
def test_shared_cases_render(name: CaseName, expected: str) -> None:
    assert compile_clean(case_source(name)) == expected


def test_reactive_class_collision_keeps_both_calls() -> None:
    assert (
        compile_clean("div.a class:a=[on()];")
        == 'html::div::new().class("a", true).class("a", move || on()).self_closing()'
    )


def test_static_class_directives_fold_with_selectors() -> None:
    assert (
        compile_clean("div.a class:b=[on()] class:c class:d=false;")
        == 'html::div::new().classes("a c").class("b", move || on()).self_closing()'
    )


def test_class_folding_can_be_disabled() -> None:
    options = GeneratorOptions(fold_static_classes=False)
    assert (
        compile_clean("div.a.b;", options)
        == 'html::div::new().class("a", true).class("b", true).self_closing()'
    )


def test_styles_and_id() -> None:
    assert (
        compile_clean('div#main.a style:color="red" style:width=[w()];')
        == 'html::div::new().classes("a").id("main").styles("color: red;").style("width", move || w()).self_closing()'
    )

    options = GeneratorOptions(fold_static_styles=False)
    assert (
        compile_clean('div style:color="red";', options)
        == 'html::div::new().style("color", "red").self_closing()'
    )


def test_boolean_literal_attributes() -> None:
    assert (
        compile_clean("input disabled=false readonly=true;")
        == 'html::input::new().attr("readonly").self_closing()'
    )


def test_prop_attr_and_use_directives() -> None:
    source = "input prop:value=[v()] attr:hidden attr:aria-busy=false attr:data-x={x} use:tooltip;"
    assert compile_clean(source) == (
        'html::input::new().prop("value", move || v()).attr("hidden")'
        '.attr("data-x", x).directive(tooltip, ()).self_closing()'
    )


def test_shorthand_node_ref() -> None:
    assert compile_clean("input {node-ref};") == "html::input::new().node_ref(node_ref).self_closing()"


def test_element_clones_wrap_the_element() -> None:
    assert (
        compile_clean("div clone:a clone:b;")
        == "{ let a = a.clone(); let b = b.clone(); html::div::new().self_closing() }"
    )


def test_repeated_clone_is_reported_once_and_dropped() -> None:
    code, diagnostics = compile_source("div clone:a clone:a;")

    assert code == "{ let a = a.clone(); html::div::new().self_closing() }"
    assert [d.code for d in diagnostics] == ["CODEGEN_DUPLICATE_CLONE"]
    assert diagnostics[0].severity == "warning"
    assert diagnostics[0].message == "`a` is already cloned on this node"
    assert diagnostics[0].range.as_tuple() == (12, 19)


def test_namespaced_and_keyword_elements() -> None:
    assert element_ident("type") == "r#type"
    assert element_ident("font-face") == "font_face"
    assert compile_clean("svg { use; }") == "svg::svg::new().child(svg::r#use::new().self_closing())"
    assert compile_clean('math { mi { "x" } }') == 'math::math::new().child(math::mi::new().child("x"))'


def test_value_children() -> None:
    assert compile_clean("p { {count} {} }") == "html::p::new().child(count).child(())"
    assert compile_clean("p { { let x = 1; x } }") == "html::p::new().child({ let x = 1; x })"
    assert compile_clean("p { [count.get()] }") == "html::p::new().child(move || count.get())"


def test_unsupported_bracket_prefix() -> None:
    code, diagnostics = compile_source("p { g[x] }")

    assert code == "html::p::new().child(move || x)"
    assert [d.code for d in diagnostics] == ["CODEGEN_UNSUPPORTED_PREFIX"]
    assert diagnostics[0].range.as_tuple() == (4, 5)


def test_element_generics_and_closure_args_are_reported() -> None:
    _, diagnostics = compile_source("div<T>;")
    assert [d.code for d in diagnostics] == ["CODEGEN_GENERICS_ON_ELEMENT"]

    code, diagnostics = compile_source('div |x| { "a" }')
    assert [d.code for d in diagnostics] == ["CODEGEN_CHILDREN_ARGS_ON_ELEMENT"]
    assert code == 'html::div::new().child("a")'


def test_component_classes() -> None:
    assert compile_clean("Comp.a#x class:b;") == 'Comp::builder().class("a b").id("x").build()'
    assert compile_clean("Comp.a class:b=[on()];") == (
        "Comp::builder().class(move || ["
        '::std::primitive::bool::then_some(true, "a"), '
        '::std::primitive::bool::then_some((move || on())(), "b")'
        '].iter().flatten().cloned().collect::<::std::vec::Vec<&str>>().join(" ")).build()'
    )


def test_component_attributes() -> None:
    assert compile_clean("Dialog open {on-close} {..rest};") == (
        "Dialog::builder().open(true).on_close(on_close).attrs(rest).build()"
    )
    assert compile_clean("Comp on:click={h} use:tooltip;") == (
        "Comp::builder().on(ev::click, h).directive(tooltip, ()).build()"
    )
    assert compile_clean("icons::Star;") == "icons::Star::builder().build()"


def test_component_style_directive_is_unsupported() -> None:
    code, diagnostics = compile_source('Comp style:color="red";')

    assert code == "Comp::builder().build()"
    assert [d.code for d in diagnostics] == ["CODEGEN_UNSUPPORTED_DIRECTIVE"]
    assert diagnostics[0].message == "`style:` is not supported on components"


def test_component_children() -> None:
    assert compile_clean('Comp { "a" "b" }') == 'Comp::builder().children(ToChildren::to_children(move || ("a", "b"))).build()'
    assert compile_clean("Comp {}") == "Comp::builder().build()"
    # Clones without children have nothing to bind into.
    assert compile_clean("Comp clone:a;") == "Comp::builder().build()"


def test_root_shapes() -> None:
    assert compile_clean('"a" "b"') == 'View::new(("a", "b"))'
    assert compile_clean("") == "View::new(())"
    assert compile_clean("!DOCTYPE html;") == 'html::doctype("html")'


def test_missing_value_placeholder() -> None:
    parsed = parse("div class=;")
    expr, diagnostics = generate(parsed.nodes)

    assert render(expr) == 'html::div::new().attr("class", ::mview::MissingValueAfterEq).self_closing()'
    assert diagnostics == []
    assert parsed.diagnostics[0].range.as_tuple() == (10, 11)

    options = GeneratorOptions(runtime_prefix="crate::rt")
    expr, _ = generate(parsed.nodes, options)
    assert render(expr) == 'html::div::new().attr("class", crate::rt::MissingValueAfterEq).self_closing()'


def test_modifiers_are_rechecked_on_built_trees() -> None:
    (element,) = parse("div class:a;").nodes
    assert isinstance(element, Element)
    (directive,) = element.attributes
    assert isinstance(directive, DirectiveAttr)

    modifier = Modifier(name="undelegated", range=TextRange.new(TextSize(11), TextSize(22)))
    element = replace(element, attributes=(replace(directive, modifiers=(modifier,)),))

    generator = Generator()
    generator.generate_node(element)
    diagnostics = generator.finish()
    assert [d.code for d in diagnostics] == ["CODEGEN_MODIFIER_NOT_SUPPORTED"]
    assert generator.diagnostics == []


def test_render_shapes() -> None:
    assert render(UNIT) == "()"
    assert render(Tuple((Lit("1"),))) == "(1,)"
    assert render(Call(Path("f"), (Lit.string('a"b'),))) == 'f("a\\"b")'
    assert render(Closure(Lit("1"), params="x", is_move=False)) == "|x| 1"


def test_upper_camel_to_snake() -> None:
    assert upper_camel_to_snake("ElseIf") == "else_if"
    assert upper_camel_to_snake("Fallback") == "fallback"
