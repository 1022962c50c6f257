"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


LEXER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_STRING",
    message="Unterminated string literal.",
    hint="Close the string with a double quote.",
    severity="error",
    category="lexer",
)

LEXER_UNTERMINATED_COMMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_COMMENT",
    message="Unterminated block comment.",
    hint="Close the comment with `*/`.",
    severity="error",
    category="lexer",
)

PARSER_UNEXPECTED_END: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNEXPECTED_END",
    message="Unexpected end of input",
    severity="error",
    category="parser",
)

PARSER_UNTERMINATED_ELEMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNTERMINATED_ELEMENT",
    message="Unterminated element",
    hint="Add a `;` to terminate the element with no children.",
    severity="error",
    category="parser",
)

PARSER_MALFORMED_IDENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MALFORMED_IDENT",
    message="Malformed identifier",
    severity="error",
    category="parser",
)

PARSER_EXPECTED_IDENTIFIER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_IDENTIFIER",
    message="Expected identifier",
    severity="error",
    category="parser",
)

PARSER_UNKNOWN_DIRECTIVE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNKNOWN_DIRECTIVE",
    message="Unknown directive",
    hint="Known directives are `class:`, `style:`, `on:`, `prop:`, `attr:`, `use:` and `clone:`.",
    severity="error",
    category="parser",
)

PARSER_UNKNOWN_MODIFIER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNKNOWN_MODIFIER",
    message="Unknown modifier",
    hint="`:undelegated` is the only known modifier.",
    severity="error",
    category="parser",
)

PARSER_MODIFIER_NOT_SUPPORTED: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MODIFIER_NOT_SUPPORTED",
    message="Modifiers are only supported on `on:` directives",
    severity="error",
    category="parser",
)

PARSER_EXPECTED_VALUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_VALUE",
    message="Expected value after =",
    severity="error",
    category="parser",
)

PARSER_INVALID_CHILD: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_INVALID_CHILD",
    message="Invalid child: expected literal, block, bracket or element",
    severity="error",
    category="parser",
)

PARSER_EXTRA_SEMICOLON: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXTRA_SEMICOLON",
    message="Extra semi-colon found",
    hint="Remove this semi-colon.",
    severity="error",
    category="parser",
)

PARSER_UNSUPPORTED_DIRECTIVE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNSUPPORTED_DIRECTIVE",
    message="Directive is not supported on this node",
    severity="error",
    category="parser",
)

PARSER_CLONES_TAKE_NO_VALUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_CLONES_TAKE_NO_VALUE",
    message="`clone:` does not take any values",
    severity="error",
    category="parser",
)

PARSER_MISMATCHED_DELIMITER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MISMATCHED_DELIMITER",
    message="Mismatched closing delimiter",
    severity="error",
    category="parser",
)

PARSER_EXPECTED_CHILDREN_BLOCK: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_CHILDREN_BLOCK",
    message="Expected children block after closure arguments",
    severity="error",
    category="parser",
)

PARSER_TURBOFISH_GENERICS: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_TURBOFISH_GENERICS",
    message="Unexpected token `::`",
    hint="Turbofish syntax is not used for component generics, place angle brackets directly after the component name.",
    severity="error",
    category="parser",
)

PARSER_INVALID_DOCTYPE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_INVALID_DOCTYPE",
    message="Invalid doctype",
    hint="Add `!DOCTYPE html;`",
    severity="error",
    category="parser",
)

CODEGEN_UNSUPPORTED_DIRECTIVE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CODEGEN_UNSUPPORTED_DIRECTIVE",
    message="Directive is not supported on this node",
    severity="error",
    category="codegen",
)

CODEGEN_MODIFIER_NOT_SUPPORTED: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CODEGEN_MODIFIER_NOT_SUPPORTED",
    message="Modifiers are only supported on `on:` directives",
    severity="error",
    category="codegen",
)

CODEGEN_SLOT_OUTSIDE_COMPONENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CODEGEN_SLOT_OUTSIDE_COMPONENT",
    message="Slots should be inside a parent that supports slots",
    severity="error",
    category="codegen",
)

CODEGEN_CLONES_TAKE_NO_VALUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CODEGEN_CLONES_TAKE_NO_VALUE",
    message="`clone:` does not take any values",
    severity="error",
    category="codegen",
)

CODEGEN_DUPLICATE_CLONE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CODEGEN_DUPLICATE_CLONE",
    message="Variable is already cloned on this node",
    hint="Remove the repeated `clone:`.",
    severity="warning",
    category="codegen",
)

CODEGEN_UNSUPPORTED_PREFIX: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CODEGEN_UNSUPPORTED_PREFIX",
    message="Unsupported prefix: only `f` is supported.",
    severity="error",
    category="codegen",
)

CODEGEN_DUPLICATE_SLOT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CODEGEN_DUPLICATE_SLOT",
    message="Slot is given more than once",
    hint="Only slot fields that accept a sequence can be repeated.",
    severity="error",
    category="codegen",
)

CODEGEN_SELECTOR_ON_SLOT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CODEGEN_SELECTOR_ON_SLOT",
    message="Selector shorthands are not supported on slots",
    severity="error",
    category="codegen",
)

CODEGEN_CHILDREN_ARGS_ON_ELEMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CODEGEN_CHILDREN_ARGS_ON_ELEMENT",
    message="Closure arguments for children are only supported on components and slots",
    severity="error",
    category="codegen",
)

CODEGEN_GENERICS_ON_ELEMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CODEGEN_GENERICS_ON_ELEMENT",
    message="Generics are only supported on components",
    severity="error",
    category="codegen",
)

CODEGEN_INVALID_SLOT_NAME: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CODEGEN_INVALID_SLOT_NAME",
    message="Slot name must be a single UpperCamelCase identifier, not a path",
    severity="error",
    category="codegen",
)
