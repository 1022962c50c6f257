"""Centralized template cases used across lexer/parser/codegen tests."""

from __future__ import annotations

from dataclasses import dataclass
import textwrap
from typing import Literal, cast


@dataclass(frozen=True, slots=True)
class ViewCase:
    name: str
    source: str
    should_compile_cleanly: bool = True


def _dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip()


VALID_CASES: tuple[ViewCase, ...] = (
    ViewCase(name="static_selector_classes", source='div.a.b { "x" }'),
    ViewCase(name="input_kv_and_bool", source='input type="text" checked;'),
    ViewCase(name="component_kv", source="Comp some-attr=5;"),
    ViewCase(name="undelegated_event", source="div on:click:undelegated={handler};"),
    ViewCase(name="component_clone", source='Comp clone:name { "x" }'),
    ViewCase(
        name="nested_elements",
        source=_dedent(
            """
            div.container #main {
                h1 { "Title" }
                p class:active=[is_active()] { "Body " {count} }
                br;
            }
            """
        ),
    ),
    ViewCase(name="paren_children", source='span("a" "b")'),
    ViewCase(name="closure_children", source='Show when=[ready()] |value| { "ok" }'),
    ViewCase(
        name="doctype_then_document",
        source=_dedent(
            """
            !DOCTYPE html;
            html { body {} }
            """
        ),
    ),
    ViewCase(name="spread_and_shorthand", source="input {..attrs} {value} disabled;"),
    ViewCase(name="web_component", source='my-element data-id="1";'),
    ViewCase(name="svg_children", source='svg viewBox="0 0 10 10" { circle cx=5 cy=5 r=4; }'),
    ViewCase(
        name="component_with_slot",
        source=_dedent(
            """
            Show when=[ready()] {
                slot:Fallback { "loading" }
                "ready"
            }
            """
        ),
    ),
    ViewCase(name="format_bracket_child", source='p { f["{} items", count] }'),
    ViewCase(
        name="comments_are_trivia",
        source=_dedent(
            """
            // heading
            div /* inline */ { "x" } // trailing
            """
        ),
    ),
    ViewCase(name="implicit_last_node", source="div { span }\nbr"),
    ViewCase(name="string_class_key", source='div class:"w-[10px]"=[wide()];'),
    ViewCase(name="use_directives", source="div use:tooltip use:focus={true};"),
    ViewCase(name="generic_component", source="List<String> items=[items()];"),
    ViewCase(name="node_reference", source="input ref={input_ref};"),
)

INVALID_CASES: tuple[ViewCase, ...] = (
    ViewCase(name="missing_value", source="div class=;", should_compile_cleanly=False),
    ViewCase(name="unknown_directive", source="div foo:bar;", should_compile_cleanly=False),
    ViewCase(name="unknown_modifier", source="div on:click:once={h};", should_compile_cleanly=False),
    ViewCase(name="unterminated_element", source='div "x"', should_compile_cleanly=False),
    ViewCase(name="number_child", source="div { 5 }", should_compile_cleanly=False),
    ViewCase(name="stray_token_child", source="div { = }", should_compile_cleanly=False),
    ViewCase(name="unterminated_string", source='p { "abc }', should_compile_cleanly=False),
    ViewCase(name="slot_outside_component", source="div { slot:Foo; }", should_compile_cleanly=False),
    ViewCase(name="clone_with_value", source='Comp clone:name={x} { "x" }', should_compile_cleanly=False),
)

ALL_VIEW_CASES: tuple[ViewCase, ...] = VALID_CASES + INVALID_CASES

type CaseName = Literal[
    "static_selector_classes",
    "input_kv_and_bool",
    "component_kv",
    "undelegated_event",
    "component_clone",
    "nested_elements",
    "paren_children",
    "closure_children",
    "doctype_then_document",
    "spread_and_shorthand",
    "web_component",
    "svg_children",
    "component_with_slot",
    "format_bracket_child",
    "comments_are_trivia",
    "implicit_last_node",
    "string_class_key",
    "use_directives",
    "generic_component",
    "node_reference",
    "missing_value",
    "unknown_directive",
    "unknown_modifier",
    "unterminated_element",
    "number_child",
    "stray_token_child",
    "unterminated_string",
    "slot_outside_component",
    "clone_with_value",
]

CASE_BY_NAME: dict[CaseName, ViewCase] = cast(
    dict[CaseName, ViewCase],
    {case.name: case for case in ALL_VIEW_CASES},
)


def case_source(name: CaseName) -> str:
    return CASE_BY_NAME[name].source


def case_id(case: ViewCase) -> str:
    return case.name
