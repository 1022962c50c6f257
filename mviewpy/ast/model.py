"""AST data model for view templates.

Every class is a frozen dataclass carrying the exact source range it was
parsed from. The variant sets (`Node`, `Attribute`, `Value`, `Selector`) are
closed; the generator matches on them exhaustively.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from mviewpy.ast.tags import TagKind
from mviewpy.text import TextRange

# -------------------------
# Identifiers
# -------------------------


@dataclass(frozen=True, slots=True)
class KebabIdent:
    """Identifier that may contain `-`, e.g. `data-id` or `--css-var`."""

    text: str
    range: TextRange

    @property
    def snake(self) -> str:
        return self.text.replace("-", "_")


@dataclass(frozen=True, slots=True)
class Path:
    """`::`-separated path such as `leptos_router::Route`."""

    segments: tuple[str, ...]
    range: TextRange

    @property
    def text(self) -> str:
        return "::".join(self.segments)

    @property
    def last(self) -> str:
        return self.segments[-1]


@dataclass(frozen=True, slots=True)
class Tag:
    name: str
    kind: TagKind
    range: TextRange


@dataclass(frozen=True, slots=True)
class Generics:
    """Raw text between `<` and `>` after a tag, e.g. `T, U`."""

    text: str
    range: TextRange


@dataclass(frozen=True, slots=True)
class ClosureArgs:
    """Raw text between the pipes of `|args|` before a children block."""

    text: str
    range: TextRange


# -------------------------
# Values
# -------------------------


class LiteralKind(StrEnum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    CHAR = "char"
    BOOL = "bool"


@dataclass(frozen=True, slots=True)
class LiteralValue:
    """Literal as written in source (quotes and escapes preserved)."""

    text: str
    kind: LiteralKind
    range: TextRange

    @property
    def is_true(self) -> bool:
        return self.kind == LiteralKind.BOOL and self.text == "true"

    @property
    def is_false(self) -> bool:
        return self.kind == LiteralKind.BOOL and self.text == "false"

    @property
    def string_value(self) -> str | None:
        """Contents of a plain (non-raw) string literal, escapes left as written."""
        if self.kind != LiteralKind.STRING or not self.text.startswith('"'):
            return None
        return self.text[1:-1] if len(self.text) >= 2 and self.text.endswith('"') else self.text[1:]


@dataclass(frozen=True, slots=True)
class BlockValue:
    """`{ expr }`; `expr` is the verbatim host expression between the braces."""

    expr: str
    range: TextRange


@dataclass(frozen=True, slots=True)
class BracketValue:
    """`[expr]` or `f[expr]`, a zero-argument reactive closure."""

    prefix: str | None
    prefix_range: TextRange | None
    expr: str
    range: TextRange


@dataclass(frozen=True, slots=True)
class MissingValue:
    """Placeholder for a value that was required but absent."""

    range: TextRange


type Value = LiteralValue | BlockValue | BracketValue | MissingValue


# -------------------------
# Attributes
# -------------------------


class DirectiveNamespace(StrEnum):
    CLASS = "class"
    STYLE = "style"
    ON = "on"
    PROP = "prop"
    ATTR = "attr"
    USE = "use"
    CLONE = "clone"


@dataclass(frozen=True, slots=True)
class Modifier:
    name: str
    range: TextRange


@dataclass(frozen=True, slots=True)
class KvAttr:
    key: KebabIdent
    value: Value
    range: TextRange


@dataclass(frozen=True, slots=True)
class DirectiveAttr:
    """`namespace:key[:modifier]*[=value]`.

    `key` is a string literal only for `class:` and `style:`, where names such
    as `"w-[10px]"` cannot be written as identifiers.
    """

    namespace: DirectiveNamespace
    key: KebabIdent | LiteralValue
    modifiers: tuple[Modifier, ...]
    value: Value | None
    range: TextRange

    @property
    def key_text(self) -> str:
        match self.key:
            case KebabIdent(text=text):
                return text
            case LiteralValue() as literal:
                string_value = literal.string_value
                return string_value if string_value is not None else literal.text


@dataclass(frozen=True, slots=True)
class BoolAttr:
    key: KebabIdent
    range: TextRange


@dataclass(frozen=True, slots=True)
class ShorthandAttr:
    """`{key}`, equivalent to `key={key}`."""

    key: KebabIdent
    range: TextRange


@dataclass(frozen=True, slots=True)
class SpreadAttr:
    """`{..expr}`."""

    expr: str
    range: TextRange


type Attribute = KvAttr | DirectiveAttr | BoolAttr | ShorthandAttr | SpreadAttr


# -------------------------
# Selectors
# -------------------------


@dataclass(frozen=True, slots=True)
class ClassSelector:
    name: KebabIdent
    range: TextRange


@dataclass(frozen=True, slots=True)
class IdSelector:
    name: KebabIdent
    range: TextRange


type Selector = ClassSelector | IdSelector


def selector_classes(selectors: tuple[Selector, ...]) -> list[str]:
    return [selector.name.text for selector in selectors if isinstance(selector, ClassSelector)]


def selector_id(selectors: tuple[Selector, ...]) -> str | None:
    ids = [selector.name.text for selector in selectors if isinstance(selector, IdSelector)]
    return " ".join(ids) if ids else None


# -------------------------
# Nodes
# -------------------------


class ChildDelimiter(StrEnum):
    BRACE = "brace"
    PAREN = "paren"


@dataclass(frozen=True, slots=True)
class ChildList:
    children: tuple[Node, ...]
    delimiter: ChildDelimiter
    range: TextRange


@dataclass(frozen=True, slots=True)
class Element:
    tag: Tag
    generics: Generics | None
    selectors: tuple[Selector, ...]
    attributes: tuple[Attribute, ...]
    children_args: ClosureArgs | None
    children: ChildList | None
    range: TextRange


@dataclass(frozen=True, slots=True)
class Component:
    path: Path
    generics: Generics | None
    selectors: tuple[Selector, ...]
    attributes: tuple[Attribute, ...]
    children_args: ClosureArgs | None
    children: ChildList | None
    range: TextRange


@dataclass(frozen=True, slots=True)
class Slot:
    """`slot:Name ...`, routed to the `name` field of the parent component."""

    name: Path
    generics: Generics | None
    selectors: tuple[Selector, ...]
    attributes: tuple[Attribute, ...]
    children_args: ClosureArgs | None
    children: ChildList | None
    range: TextRange


@dataclass(frozen=True, slots=True)
class Text:
    literal: LiteralValue
    range: TextRange


@dataclass(frozen=True, slots=True)
class Block:
    value: BlockValue
    range: TextRange

    @property
    def expr(self) -> str:
        return self.value.expr


@dataclass(frozen=True, slots=True)
class BracketClosure:
    value: BracketValue
    range: TextRange

    @property
    def prefix(self) -> str | None:
        return self.value.prefix

    @property
    def expr(self) -> str:
        return self.value.expr


@dataclass(frozen=True, slots=True)
class Doctype:
    """`!DOCTYPE html;`"""

    range: TextRange


@dataclass(frozen=True, slots=True)
class ErrorNode:
    """Input skipped during recovery."""

    raw_text: str
    range: TextRange


type TagNode = Element | Component | Slot
type Node = Element | Component | Slot | Text | Block | BracketClosure | Doctype | ErrorNode


__all__ = [
    "Attribute",
    "Block",
    "BlockValue",
    "BoolAttr",
    "BracketClosure",
    "BracketValue",
    "ChildDelimiter",
    "ChildList",
    "ClassSelector",
    "ClosureArgs",
    "Component",
    "DirectiveAttr",
    "DirectiveNamespace",
    "Doctype",
    "Element",
    "ErrorNode",
    "Generics",
    "IdSelector",
    "KebabIdent",
    "KvAttr",
    "LiteralKind",
    "LiteralValue",
    "MissingValue",
    "Modifier",
    "Node",
    "Path",
    "Selector",
    "ShorthandAttr",
    "Slot",
    "SpreadAttr",
    "Tag",
    "TagNode",
    "Text",
    "Value",
    "selector_classes",
    "selector_id",
]
