"""Attribute and directive parsing."""

from enum import StrEnum

from mviewpy.ast import (
    Attribute,
    BlockValue,
    BoolAttr,
    DirectiveAttr,
    DirectiveNamespace,
    KebabIdent,
    KvAttr,
    LiteralKind,
    LiteralValue,
    MissingValue,
    Modifier,
    ShorthandAttr,
    SpreadAttr,
    Value,
)
from mviewpy.diagnostics import make_diagnostic
from mviewpy.diagnostics.codes import (
    PARSER_CLONES_TAKE_NO_VALUE,
    PARSER_EXPECTED_IDENTIFIER,
    PARSER_EXPECTED_VALUE,
    PARSER_MODIFIER_NOT_SUPPORTED,
    PARSER_UNKNOWN_DIRECTIVE,
    PARSER_UNKNOWN_MODIFIER,
    PARSER_UNSUPPORTED_DIRECTIVE,
)
from mviewpy.lexer import TokenKind
from mviewpy.parser.idents import KEBAB_CONTINUE, KEBAB_START, at_kebab_ident, expect_kebab_ident, parse_kebab_ident
from mviewpy.parser.parser import Parser, ParserProgress
from mviewpy.parser.values import parse_value
from mviewpy.text import TextRange


class AttributeOwner(StrEnum):
    ELEMENT = "element"
    COMPONENT = "component"
    SLOT = "slot"


KNOWN_MODIFIERS: frozenset[str] = frozenset({"undelegated"})

# `class:` and `style:` target CSS names, which may need quoting.
STRING_KEY_NAMESPACES: frozenset[DirectiveNamespace] = frozenset(
    {DirectiveNamespace.CLASS, DirectiveNamespace.STYLE}
)

VALUE_REQUIRED_NAMESPACES: frozenset[DirectiveNamespace] = frozenset(
    {DirectiveNamespace.STYLE, DirectiveNamespace.ON, DirectiveNamespace.PROP}
)


def at_attribute_start(parser: Parser) -> bool:
    if at_kebab_ident(parser):
        return True
    return parser.at(TokenKind.LBRACE) and (_at_spread(parser) or _at_braced_ident(parser))


def parse_attributes(parser: Parser, owner: AttributeOwner) -> tuple[Attribute, ...]:
    attributes: list[Attribute] = []
    progress = ParserProgress()
    while at_attribute_start(parser):
        progress.assert_progressing(parser)
        attribute = parse_attribute(parser, owner)
        if attribute is not None:
            attributes.append(attribute)
    return tuple(attributes)


def parse_attribute(parser: Parser, owner: AttributeOwner) -> Attribute | None:
    """Parse one attribute entry; `None` when it was malformed and skipped."""
    if parser.at(TokenKind.LBRACE):
        if _at_spread(parser):
            return _parse_spread(parser)
        return _parse_shorthand(parser)

    key = parse_kebab_ident(parser)
    if key is None:
        return None

    if parser.at(TokenKind.COLON):
        return _parse_directive(parser, key, owner)

    if parser.at(TokenKind.EQUAL):
        eq_range = parser.current_range
        parser.bump()
        value = parse_value(parser, eq_range)
        return KvAttr(key=key, value=value, range=key.range.cover(value.range))

    return BoolAttr(key=key, range=key.range)


def _parse_directive(parser: Parser, namespace_ident: KebabIdent, owner: AttributeOwner) -> DirectiveAttr | None:
    start = namespace_ident.range
    parser.bump()  # `:`

    try:
        namespace = DirectiveNamespace(namespace_ident.text)
    except ValueError:
        parser.error(
            make_diagnostic(
                PARSER_UNKNOWN_DIRECTIVE,
                namespace_ident.range,
                message=f"Unknown directive `{namespace_ident.text}:`",
            )
        )
        _skip_directive_rest(parser, key_consumed=False)
        return None

    key, braced_value = _parse_directive_key(parser, namespace)
    if key is None:
        _skip_directive_rest(parser, key_consumed=True)
        return None

    modifiers = _parse_modifiers(parser, namespace)

    value: Value | None = braced_value
    if parser.at(TokenKind.EQUAL):
        eq_range = parser.current_range
        parser.bump()
        value = parse_value(parser, eq_range)
    elif value is None and namespace in VALUE_REQUIRED_NAMESPACES:
        expected_at = parser.current_range if not parser.at(TokenKind.EOF) else TextRange.empty(parser.last_range.end)
        parser.error(
            make_diagnostic(
                PARSER_EXPECTED_VALUE,
                expected_at,
                message=f"Expected a value for `{namespace}:{key.text}`",
            )
        )
        value = MissingValue(range=TextRange.empty(parser.last_range.end))

    range = start.cover(parser.last_range)

    if namespace == DirectiveNamespace.CLONE and value is not None:
        parser.error(make_diagnostic(PARSER_CLONES_TAKE_NO_VALUE, TextRange.new(key.range.end, range.end)))
        value = None

    if namespace == DirectiveNamespace.ATTR and owner != AttributeOwner.ELEMENT:
        parser.error(
            make_diagnostic(
                PARSER_UNSUPPORTED_DIRECTIVE,
                range,
                message=f"`attr:` is not supported on {owner}s",
                hint="Pass the attribute as a regular prop, or use a spread.",
            )
        )
        return None

    return DirectiveAttr(
        namespace=namespace,
        key=key,
        modifiers=modifiers,
        value=value,
        range=range,
    )


def _parse_directive_key(
    parser: Parser, namespace: DirectiveNamespace
) -> tuple[KebabIdent | LiteralValue | None, Value | None]:
    if at_kebab_ident(parser):
        return parse_kebab_ident(parser), None

    if parser.at(TokenKind.STRING):
        literal = LiteralValue(text=parser.current_text, kind=LiteralKind.STRING, range=parser.current_range)
        parser.bump()
        if namespace not in STRING_KEY_NAMESPACES:
            parser.error(
                make_diagnostic(
                    PARSER_EXPECTED_IDENTIFIER,
                    literal.range,
                    message=f"Expected an identifier after `{namespace}:`",
                    hint="Only `class:` and `style:` accept string keys.",
                )
            )
            return None, None
        return literal, None

    if _at_braced_ident(parser):
        # `class:{active}` binds the class `active` to the variable `active`.
        open_range = parser.current_range
        parser.bump()
        key = expect_kebab_ident(parser)
        parser.bump()  # `}`
        return key, BlockValue(expr=key.snake, range=open_range.cover(parser.last_range))

    if parser.at(TokenKind.EOF):
        parser.error_unexpected_end()
    else:
        parser.error(
            make_diagnostic(
                PARSER_EXPECTED_IDENTIFIER,
                parser.current_range,
                message=f"Expected an identifier after `{namespace}:`",
            )
        )
    return None, None


def _parse_modifiers(parser: Parser, namespace: DirectiveNamespace) -> tuple[Modifier, ...]:
    modifiers: list[Modifier] = []
    while parser.at(TokenKind.COLON) and parser.nth(1) in KEBAB_START:
        parser.bump()
        ident = expect_kebab_ident(parser)
        modifier = Modifier(name=ident.text, range=ident.range)

        if namespace != DirectiveNamespace.ON:
            parser.error(
                make_diagnostic(
                    PARSER_MODIFIER_NOT_SUPPORTED,
                    modifier.range,
                    message=f"Modifiers are only supported on `on:` directives, not `{namespace}:`",
                )
            )
            continue
        if modifier.name not in KNOWN_MODIFIERS:
            parser.error(
                make_diagnostic(
                    PARSER_UNKNOWN_MODIFIER,
                    modifier.range,
                    message=f"Unknown modifier `:{modifier.name}`",
                )
            )
            continue
        modifiers.append(modifier)
    return tuple(modifiers)


def _skip_directive_rest(parser: Parser, *, key_consumed: bool) -> None:
    """Consume the remains of a directive that could not be used."""
    if not key_consumed and (at_kebab_ident(parser) or parser.at(TokenKind.STRING)):
        parser.bump()
        while parser.at_set(KEBAB_CONTINUE) and not parser.has_preceding_trivia:
            parser.bump()
    while parser.at(TokenKind.COLON) and parser.nth(1) in KEBAB_START:
        parser.bump()
        parse_kebab_ident(parser)
    if parser.at(TokenKind.EQUAL):
        eq_range = parser.current_range
        parser.bump()
        parse_value(parser, eq_range)


def _parse_shorthand(parser: Parser) -> ShorthandAttr:
    open_range = parser.current_range
    parser.bump()
    key = expect_kebab_ident(parser)
    parser.bump()  # `}`
    return ShorthandAttr(key=key, range=open_range.cover(parser.last_range))


def _parse_spread(parser: Parser) -> SpreadAttr:
    group = parser.bump_delimited()
    inner = parser.slice(group.inner).strip()
    return SpreadAttr(expr=inner.removeprefix("..").strip(), range=group.range)


def _at_spread(parser: Parser) -> bool:
    return parser.at(TokenKind.LBRACE) and parser.nth_at(1, TokenKind.DOT2)


def _at_braced_ident(parser: Parser) -> bool:
    """`{` kebab-ident `}` with nothing else inside the braces."""
    if not parser.at(TokenKind.LBRACE) or parser.nth(1) not in KEBAB_START:
        return False
    n = 2
    while parser.nth(n) in KEBAB_CONTINUE and not parser.has_nth_preceding_trivia(n):
        n += 1
    return parser.nth_at(n, TokenKind.RBRACE)


