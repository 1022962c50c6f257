"""Lower the view AST into a builder-call tree.

The generator never fails: every node produces either an expression or a
diagnostic (or both), so a partially broken template still yields output
that points the host compiler at the right places.
"""

from __future__ import annotations

import re

from mviewpy.ast import (
    Attribute,
    Block,
    BlockValue,
    BoolAttr,
    BracketClosure,
    BracketValue,
    ChildList,
    Component,
    DirectiveAttr,
    DirectiveNamespace,
    Doctype,
    Element,
    ErrorNode,
    KvAttr,
    LiteralKind,
    LiteralValue,
    MissingValue,
    Node,
    Selector,
    ShorthandAttr,
    Slot,
    SpreadAttr,
    Tag,
    TagKind,
    Text,
    Value,
    selector_classes,
    selector_id,
)
from mviewpy.codegen import calltree as ct
from mviewpy.codegen.options import GeneratorOptions
from mviewpy.codegen.render import render
from mviewpy.diagnostics import Diagnostic, DiagnosticSpec, make_diagnostic
from mviewpy.diagnostics.codes import (
    CODEGEN_CHILDREN_ARGS_ON_ELEMENT,
    CODEGEN_CLONES_TAKE_NO_VALUE,
    CODEGEN_DUPLICATE_CLONE,
    CODEGEN_DUPLICATE_SLOT,
    CODEGEN_GENERICS_ON_ELEMENT,
    CODEGEN_INVALID_SLOT_NAME,
    CODEGEN_MODIFIER_NOT_SUPPORTED,
    CODEGEN_SELECTOR_ON_SLOT,
    CODEGEN_SLOT_OUTSIDE_COMPONENT,
    CODEGEN_UNSUPPORTED_DIRECTIVE,
    CODEGEN_UNSUPPORTED_PREFIX,
)
from mviewpy.text import TextRange

type MethodCalls = list[tuple[str, tuple[ct.Expr, ...]]]

REFERENCE_KEYS: frozenset[str] = frozenset({"ref", "node_ref", "node-ref"})

RUST_KEYWORDS: frozenset[str] = frozenset(
    {
        "as", "async", "await", "break", "const", "continue", "crate", "dyn", "else",
        "enum", "extern", "false", "fn", "for", "if", "impl", "in", "let", "loop",
        "match", "mod", "move", "mut", "pub", "ref", "return", "static", "struct",
        "super", "trait", "true", "type", "unsafe", "use", "where", "while",
    }
)  # fmt: skip

_ELEMENT_NAMESPACES: dict[TagKind, str] = {
    TagKind.HTML: "html",
    TagKind.SVG: "svg",
    TagKind.MATH: "math",
}

_UPPER_CAMEL = re.compile(r"[A-Z][A-Za-z0-9]*")


def upper_camel_to_snake(name: str) -> str:
    """`ElseIf` -> `else_if`; every uppercase letter after the first starts a word."""
    out: list[str] = []
    for char in name:
        if char.isascii() and char.isupper() and out:
            out.append("_")
        out.append(char.lower())
    return "".join(out)


def element_ident(name: str) -> str:
    ident = name.replace("-", "_")
    return f"r#{ident}" if ident in RUST_KEYWORDS else ident


class Generator:
    def __init__(self, options: GeneratorOptions | None = None) -> None:
        self._options = options or GeneratorOptions()
        self._diagnostics: list[Diagnostic] = []

    @property
    def options(self) -> GeneratorOptions:
        return self._options

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    def finish(self) -> list[Diagnostic]:
        diagnostics = self._diagnostics
        self._diagnostics = []
        return diagnostics

    def generate_root(self, nodes: tuple[Node, ...]) -> ct.Expr:
        """A single root node is emitted as-is; several become one `View::new((..))`."""
        items = self._generate_nodes(nodes)
        if len(items) == 1:
            return items[0]
        return ct.Call(ct.Path("View::new"), (ct.Tuple(tuple(items)),))

    def generate_node(self, node: Node) -> ct.Expr | None:
        match node:
            case Element():
                return self._element(node)
            case Component():
                return self._component(node)
            case Slot():
                self._report(CODEGEN_SLOT_OUTSIDE_COMPONENT, _slot_head_range(node))
                return None
            case Text(literal=literal):
                return ct.Lit(literal.text)
            case Block(value=value):
                return self._block(value)
            case BracketClosure(value=value):
                return self._bracket(value)
            case Doctype():
                return ct.Call(ct.Path("html::doctype"), (ct.Lit.string("html"),))
            case ErrorNode():
                return None

    def _generate_nodes(self, nodes: tuple[Node, ...]) -> list[ct.Expr]:
        items: list[ct.Expr] = []
        for node in nodes:
            expr = self.generate_node(node)
            if expr is not None:
                items.append(expr)
        return items

    # -------------------------
    # Values
    # -------------------------

    def _value(self, value: Value | None) -> ct.Expr:
        match value:
            case LiteralValue(text=text):
                return ct.Lit(text)
            case BlockValue():
                return self._block(value)
            case BracketValue():
                return self._bracket(value)
            case MissingValue() | None:
                return ct.Raw(self._options.missing_value_path)

    def _block(self, value: BlockValue) -> ct.Expr:
        if not value.expr:
            return ct.UNIT
        if ";" in value.expr:
            return ct.Raw(f"{{ {value.expr} }}")
        return ct.Raw(value.expr)

    def _bracket(self, value: BracketValue) -> ct.Expr:
        body: ct.Expr = ct.Raw(value.expr)
        if value.prefix == "f":
            body = ct.Macro("format", (ct.Raw(value.expr),))
        elif value.prefix is not None:
            self._report(
                CODEGEN_UNSUPPORTED_PREFIX,
                value.prefix_range or value.range,
                message=f"Unsupported prefix `{value.prefix}`: only `f` is supported.",
            )
        return ct.Closure(body)

    # -------------------------
    # Elements
    # -------------------------

    def _element(self, element: Element) -> ct.Expr:
        if element.generics is not None:
            self._report(CODEGEN_GENERICS_ON_ELEMENT, element.generics.range)
        if element.children_args is not None:
            self._report(CODEGEN_CHILDREN_ARGS_ON_ELEMENT, element.children_args.range)

        directives = _directives(element.attributes)
        self._check_modifiers(directives)

        calls: MethodCalls = []
        calls.extend(self._element_classes(element.selectors, directives))
        id_value = selector_id(element.selectors)
        if id_value is not None:
            calls.append(("id", (ct.Lit.string(id_value),)))
        calls.extend(self._element_static_styles(directives))

        lets: list[ct.Let] = []
        seen: set[str] = set()
        for attribute in element.attributes:
            calls.extend(self._element_attribute(attribute, lets, seen))

        if element.children is None:
            calls.append(("self_closing", ()))
        else:
            for child in element.children.children:
                expr = self.generate_node(child)
                if expr is not None:
                    calls.append(("child", (expr,)))

        return _with_lets(lets, ct.method_chain(self._element_constructor(element.tag), calls))

    def _element_constructor(self, tag: Tag) -> ct.Expr:
        if tag.kind == TagKind.WEB_COMPONENT:
            return ct.Call(ct.Path("html::custom"), (ct.Lit.string(tag.name),))
        namespace = _ELEMENT_NAMESPACES.get(tag.kind, "html")
        return ct.Call(ct.Path(f"{namespace}::{element_ident(tag.name)}::new"))

    def _element_classes(self, selectors: tuple[Selector, ...], directives: list[DirectiveAttr]) -> MethodCalls:
        static: list[str] = list(selector_classes(selectors))
        reactive: set[str] = set()
        for directive in directives:
            if directive.namespace != DirectiveNamespace.CLASS:
                continue
            if _is_static_true(directive.value):
                static.append(directive.key_text)
            elif not _is_static_false(directive.value):
                reactive.add(directive.key_text)

        static = list(dict.fromkeys(static))
        if not static:
            return []
        if self._options.fold_static_classes and not reactive.intersection(static):
            return [("classes", (ct.Lit.string(" ".join(static)),))]
        return [("class", (ct.Lit.string(name), ct.Lit("true"))) for name in static]

    def _element_static_styles(self, directives: list[DirectiveAttr]) -> MethodCalls:
        if not self._options.fold_static_styles:
            return []
        parts: list[str] = []
        for directive in directives:
            if _is_static_style(directive) and isinstance(directive.value, LiteralValue):
                parts.append(f"{directive.key_text}: {directive.value.string_value};")
        if not parts:
            return []
        return [("styles", (ct.Lit.string(" ".join(parts)),))]

    def _element_attribute(self, attribute: Attribute, lets: list[ct.Let], seen: set[str]) -> MethodCalls:
        match attribute:
            case KvAttr(key=key, value=value):
                if key.text in REFERENCE_KEYS:
                    return [("node_ref", (self._value(value),))]
                if _is_static_true(value):
                    return [("attr", (ct.Lit.string(key.text),))]
                if _is_static_false(value):
                    return []
                return [("attr", (ct.Lit.string(key.text), self._value(value)))]
            case BoolAttr(key=key):
                return [("attr", (ct.Lit.string(key.text),))]
            case ShorthandAttr(key=key):
                if key.text in REFERENCE_KEYS:
                    return [("node_ref", (ct.Raw(key.snake),))]
                return [("attr", (ct.Lit.string(key.text), ct.Raw(key.snake)))]
            case SpreadAttr(expr=expr):
                return [("attrs", (ct.Raw(expr),))]
            case DirectiveAttr():
                return self._element_directive(attribute, lets, seen)

    def _element_directive(self, directive: DirectiveAttr, lets: list[ct.Let], seen: set[str]) -> MethodCalls:
        name = ct.Lit.string(directive.key_text)
        match directive.namespace:
            case DirectiveNamespace.CLASS:
                # Static classes were folded into the selector call already.
                if _is_static_true(directive.value) or _is_static_false(directive.value):
                    return []
                return [("class", (name, self._value(directive.value)))]
            case DirectiveNamespace.STYLE:
                if self._options.fold_static_styles and _is_static_style(directive):
                    return []
                return [("style", (name, self._value(directive.value)))]
            case DirectiveNamespace.ON:
                return [("on", (self._event(directive), self._value(directive.value)))]
            case DirectiveNamespace.PROP:
                return [("prop", (name, self._value(directive.value)))]
            case DirectiveNamespace.ATTR:
                if directive.value is None or _is_static_true(directive.value):
                    return [("attr", (name,))]
                if _is_static_false(directive.value):
                    return []
                return [("attr", (name, self._value(directive.value)))]
            case DirectiveNamespace.USE:
                return [("directive", self._use_args(directive))]
            case DirectiveNamespace.CLONE:
                self._clone(directive, lets, seen)
                return []

    # -------------------------
    # Components and slots
    # -------------------------

    def _component(self, node: Component | Slot) -> ct.Expr:
        is_slot = isinstance(node, Slot)
        path = node.name if isinstance(node, Slot) else node.path
        if node.generics is not None:
            constructor = f"{path.text}::<{node.generics.text}>::builder"
        else:
            constructor = f"{path.text}::builder"

        directives = _directives(node.attributes)
        self._check_modifiers(directives)

        calls: MethodCalls = []
        if is_slot:
            if node.selectors:
                self._report(CODEGEN_SELECTOR_ON_SLOT, node.selectors[0].range.cover(node.selectors[-1].range))
        else:
            calls.extend(self._component_selectors(node.selectors, directives))

        lets: list[ct.Let] = []
        seen: set[str] = set()
        for attribute in node.attributes:
            calls.extend(self._component_attribute(attribute, is_slot, lets, seen))

        # Clones bind ahead of each slot and of the children closure.
        if node.children is not None:
            calls.extend(self._component_children(node.children, node, lets))

        calls.append(("build", ()))
        return ct.method_chain(ct.Call(ct.Path(constructor)), calls)

    def _component_selectors(self, selectors: tuple[Selector, ...], directives: list[DirectiveAttr]) -> MethodCalls:
        entries: list[tuple[str, Value | None]] = [(name, None) for name in selector_classes(selectors)]
        for directive in directives:
            if directive.namespace == DirectiveNamespace.CLASS and not _is_static_false(directive.value):
                entries.append((directive.key_text, directive.value))

        calls: MethodCalls = []
        if entries:
            if all(_is_static_true(value) for _, value in entries):
                names = dict.fromkeys(name for name, _ in entries)
                calls.append(("class", (ct.Lit.string(" ".join(names)),)))
            else:
                calls.append(("class", (self._reactive_class_list(entries),)))

        id_value = selector_id(selectors)
        if id_value is not None:
            calls.append(("id", (ct.Lit.string(id_value),)))
        return calls

    def _reactive_class_list(self, entries: list[tuple[str, Value | None]]) -> ct.Expr:
        """`move || [bool::then_some(cond, "a"), ..]` joined into one class string."""
        items: list[ct.Expr] = []
        for name, value in entries:
            if _is_static_true(value):
                condition: ct.Expr = ct.Lit("true")
            else:
                condition = ct.Call(ct.Raw(f"({render(self._value(value))})"))
            items.append(
                ct.Call(ct.Path("::std::primitive::bool::then_some"), (condition, ct.Lit.string(name)))
            )
        joined = ct.method_chain(
            ct.Array(tuple(items)),
            [
                ("iter", ()),
                ("flatten", ()),
                ("cloned", ()),
                ("collect::<::std::vec::Vec<&str>>", ()),
                ("join", (ct.Lit.string(" "),)),
            ],
        )
        return ct.Closure(joined)

    def _component_attribute(
        self, attribute: Attribute, is_slot: bool, lets: list[ct.Let], seen: set[str]
    ) -> MethodCalls:
        match attribute:
            case KvAttr(key=key, value=value):
                return [(key.snake, (self._value(value),))]
            case BoolAttr(key=key):
                return [(key.snake, (ct.Lit("true"),))]
            case ShorthandAttr(key=key):
                return [(key.snake, (ct.Raw(key.snake),))]
            case SpreadAttr(expr=expr, range=range):
                if is_slot:
                    self._report(
                        CODEGEN_UNSUPPORTED_DIRECTIVE,
                        range,
                        message="Spread syntax is not supported on slots",
                    )
                    return []
                return [("attrs", (ct.Raw(expr),))]
            case DirectiveAttr():
                return self._component_directive(attribute, is_slot, lets, seen)

    def _component_directive(
        self, directive: DirectiveAttr, is_slot: bool, lets: list[ct.Let], seen: set[str]
    ) -> MethodCalls:
        namespace = directive.namespace
        if namespace == DirectiveNamespace.CLONE:
            self._clone(directive, lets, seen)
            return []

        owner = "slots" if is_slot else "components"
        if is_slot or namespace in (DirectiveNamespace.STYLE, DirectiveNamespace.PROP, DirectiveNamespace.ATTR):
            self._report(
                CODEGEN_UNSUPPORTED_DIRECTIVE,
                directive.range,
                message=f"`{namespace}:` is not supported on {owner}",
            )
            return []

        match namespace:
            case DirectiveNamespace.ON:
                return [("on", (self._event(directive), self._value(directive.value)))]
            case DirectiveNamespace.USE:
                return [("directive", self._use_args(directive))]
            case _:
                # `class:` is merged with the selectors.
                return []

    def _component_children(self, children: ChildList, owner: Component | Slot, lets: list[ct.Let]) -> MethodCalls:
        calls: MethodCalls = []
        slots = [child for child in children.children if isinstance(child, Slot)]
        calls.extend(self._slot_setters(slots, lets))

        rest = tuple(child for child in children.children if not isinstance(child, Slot))
        items = self._generate_nodes(rest)
        if not items:
            return calls

        fragment: ct.Expr = items[0] if len(items) == 1 else ct.Tuple(tuple(items))
        if owner.children_args is not None:
            wrapped: ct.Expr = ct.Closure(fragment, params=owner.children_args.text)
        else:
            wrapped = ct.Call(ct.Path("ToChildren::to_children"), (ct.Closure(fragment),))
        calls.append(("children", (_with_lets(lets, wrapped),)))
        return calls

    def _slot_setters(self, slots: list[Slot], lets: list[ct.Let]) -> MethodCalls:
        groups: dict[str, list[Slot]] = {}
        for slot in slots:
            groups.setdefault(slot.name.text, []).append(slot)

        calls: MethodCalls = []
        for name, group in groups.items():
            head = group[0].name
            if len(head.segments) > 1 or _UPPER_CAMEL.fullmatch(head.last) is None:
                self._report(CODEGEN_INVALID_SLOT_NAME, head.range)

            is_sequence = name in self._options.sequence_slots or head.last in self._options.sequence_slots
            if not is_sequence:
                for duplicate in group[1:]:
                    self._report(
                        CODEGEN_DUPLICATE_SLOT,
                        duplicate.name.range,
                        message=f"Slot `{name}` is given more than once",
                    )

            built = [self._component(slot) for slot in group]
            if is_sequence or len(built) > 1:
                arg: ct.Expr = ct.Macro("vec", tuple(built), bracket=True)
            else:
                arg = built[0]
            calls.append((upper_camel_to_snake(head.last), (_with_lets(lets, arg),)))
        return calls

    # -------------------------
    # Shared directive pieces
    # -------------------------

    def _event(self, directive: DirectiveAttr) -> ct.Expr:
        event: ct.Expr = ct.Path(f"ev::{directive.key_text.replace('-', '_')}")
        if any(modifier.name == "undelegated" for modifier in directive.modifiers):
            event = ct.Call(ct.Path("ev::undelegated"), (event,))
        return event

    def _use_args(self, directive: DirectiveAttr) -> tuple[ct.Expr, ...]:
        handler = ct.Path(directive.key_text.replace("-", "_"))
        if directive.value is None:
            return (handler, ct.UNIT)
        return (handler, self._value(directive.value))

    def _clone(self, directive: DirectiveAttr, lets: list[ct.Let], seen: set[str]) -> None:
        if directive.value is not None:
            self._report(CODEGEN_CLONES_TAKE_NO_VALUE, directive.value.range)
        name = directive.key_text.replace("-", "_")
        if name in seen:
            self._report(
                CODEGEN_DUPLICATE_CLONE,
                directive.range,
                message=f"`{name}` is already cloned on this node",
            )
            return
        seen.add(name)
        lets.append(ct.Let(name, ct.MethodCall(ct.Raw(name), "clone")))

    def _check_modifiers(self, directives: list[DirectiveAttr]) -> None:
        """Re-check modifiers on hand-built trees; the parser already drops invalid ones."""
        for directive in directives:
            for modifier in directive.modifiers:
                if directive.namespace != DirectiveNamespace.ON:
                    self._report(
                        CODEGEN_MODIFIER_NOT_SUPPORTED,
                        modifier.range,
                        message=f"Modifiers are only supported on `on:` directives, not `{directive.namespace}:`",
                    )
                elif modifier.name != "undelegated":
                    self._report(
                        CODEGEN_MODIFIER_NOT_SUPPORTED,
                        modifier.range,
                        message=f"Unknown modifier `:{modifier.name}`",
                        hint="`:undelegated` is the only known modifier.",
                    )

    def _report(
        self,
        spec: DiagnosticSpec,
        range: TextRange,
        *,
        message: str | None = None,
        hint: str | None = None,
    ) -> None:
        self._diagnostics.append(make_diagnostic(spec, range, message=message, hint=hint))


def generate(nodes: tuple[Node, ...], options: GeneratorOptions | None = None) -> tuple[ct.Expr, list[Diagnostic]]:
    generator = Generator(options)
    expr = generator.generate_root(nodes)
    return expr, generator.finish()


def _with_lets(lets: list[ct.Let], expr: ct.Expr) -> ct.Expr:
    if not lets:
        return expr
    return ct.BlockExpr(tuple(lets), expr)


def _directives(attributes: tuple[Attribute, ...]) -> list[DirectiveAttr]:
    return [attribute for attribute in attributes if isinstance(attribute, DirectiveAttr)]


def _is_static_true(value: Value | None) -> bool:
    return value is None or (isinstance(value, LiteralValue) and value.is_true)


def _is_static_false(value: Value | None) -> bool:
    return isinstance(value, LiteralValue) and value.is_false


def _is_static_style(directive: DirectiveAttr) -> bool:
    return (
        directive.namespace == DirectiveNamespace.STYLE
        and isinstance(directive.value, LiteralValue)
        and directive.value.kind == LiteralKind.STRING
        and directive.value.string_value is not None
    )


def _slot_head_range(slot: Slot) -> TextRange:
    return TextRange.new(slot.range.start, slot.name.range.end)

