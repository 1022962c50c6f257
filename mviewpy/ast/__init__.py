"""Typed AST for view templates."""

from mviewpy.ast.model import (
    Attribute,
    Block,
    BlockValue,
    BoolAttr,
    BracketClosure,
    BracketValue,
    ChildDelimiter,
    ChildList,
    ClassSelector,
    ClosureArgs,
    Component,
    DirectiveAttr,
    DirectiveNamespace,
    Doctype,
    Element,
    ErrorNode,
    Generics,
    IdSelector,
    KebabIdent,
    KvAttr,
    LiteralKind,
    LiteralValue,
    MissingValue,
    Modifier,
    Node,
    Path,
    Selector,
    ShorthandAttr,
    Slot,
    SpreadAttr,
    Tag,
    TagNode,
    Text,
    Value,
    selector_classes,
    selector_id,
)
from mviewpy.ast.tags import MATHML_ELEMENTS, SVG_ELEMENTS, TagKind, classify_tag, is_component_name

__all__ = [
    "MATHML_ELEMENTS",
    "SVG_ELEMENTS",
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
    "TagKind",
    "TagNode",
    "Text",
    "Value",
    "classify_tag",
    "is_component_name",
    "selector_classes",
    "selector_id",
]
