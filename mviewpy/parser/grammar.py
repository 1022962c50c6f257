"""View grammar routines that build AST nodes."""

from dataclasses import dataclass

from mviewpy.ast import (
    Attribute,
    Block,
    BracketClosure,
    ChildDelimiter,
    ChildList,
    ClassSelector,
    ClosureArgs,
    Component,
    Doctype,
    Element,
    ErrorNode,
    Generics,
    IdSelector,
    LiteralKind,
    LiteralValue,
    Node,
    Path,
    Selector,
    Slot,
    Tag,
    TagKind,
    Text,
    classify_tag,
)
from mviewpy.diagnostics import make_diagnostic
from mviewpy.diagnostics.codes import (
    PARSER_EXPECTED_CHILDREN_BLOCK,
    PARSER_EXPECTED_IDENTIFIER,
    PARSER_EXTRA_SEMICOLON,
    PARSER_INVALID_CHILD,
    PARSER_INVALID_DOCTYPE,
    PARSER_MALFORMED_IDENT,
    PARSER_MISMATCHED_DELIMITER,
    PARSER_TURBOFISH_GENERICS,
    PARSER_UNTERMINATED_ELEMENT,
)
from mviewpy.lexer import TokenKind
from mviewpy.parser.attributes import AttributeOwner, parse_attributes
from mviewpy.parser.idents import at_kebab_ident, expect_kebab_ident, parse_kebab_ident, parse_path_tail
from mviewpy.parser.parse_lists import ParseNodeList
from mviewpy.parser.parse_recovery import ParseRecoveryTokenSet
from mviewpy.parser.parsed_syntax import ParsedSyntax
from mviewpy.parser.parser import Parser
from mviewpy.parser.values import at_bracket_value, at_literal, parse_block_value, parse_bracket_value, parse_literal
from mviewpy.text import TextRange

CHILD_RECOVERY_SET: frozenset[TokenKind] = frozenset(
    {
        TokenKind.SEMICOLON,
        TokenKind.RBRACE,
        TokenKind.RPAREN,
        TokenKind.RBRACKET,
        TokenKind.EOF,
    }
)

CHILD_RECOVERY = ParseRecoveryTokenSet(recovery_set=CHILD_RECOVERY_SET).enable_recovery_on_line_break()


@dataclass(frozen=True, slots=True)
class _TagBody:
    generics: Generics | None
    selectors: tuple[Selector, ...]
    attributes: tuple[Attribute, ...]
    children_args: ClosureArgs | None
    children: ChildList | None


def parse_root(parser: Parser) -> tuple[Node, ...]:
    """Parse top-level nodes until input is exhausted."""
    return tuple(parse_children(parser, closer=TokenKind.EOF))


def parse_children(parser: Parser, closer: TokenKind) -> list[Node]:
    start_position = parser.position

    def parse_element(current: Parser) -> ParsedSyntax[Node]:
        nonlocal start_position
        start_position = current.position
        return parse_child(current, closer)

    def recover_element(current: Parser, parsed: ParsedSyntax[Node]) -> ParsedSyntax[Node] | None:
        if parsed.is_present() or current.position > start_position:
            return parsed

        current.error(make_diagnostic(PARSER_INVALID_CHILD, current.current_range))
        skipped, recovery_error = CHILD_RECOVERY.recover(current)
        if recovery_error is not None or skipped is None:
            return None
        if current.at(TokenKind.SEMICOLON):
            skipped = skipped.cover(current.current_range)
            current.bump()
        return ParsedSyntax.present(ErrorNode(raw_text=current.slice(skipped), range=skipped))

    return ParseNodeList[Node](
        is_at_list_end=lambda current: current.at(closer),
        parse_element=parse_element,
        recover=recover_element,
    ).parse_list(parser)


def parse_child(parser: Parser, closer: TokenKind) -> ParsedSyntax[Node]:
    """Parse one child.

    Returns an absent result without consuming anything when the current
    token cannot start a child; the list loop then reports and recovers.
    """
    if parser.at(TokenKind.STRING):
        literal = parse_literal(parser)
        return ParsedSyntax.present(Text(literal=literal, range=literal.range))

    if at_literal(parser):
        literal = parse_literal(parser)
        parser.error(
            make_diagnostic(
                PARSER_INVALID_CHILD,
                literal.range,
                message="Only string literals are allowed in children",
            )
        )
        placeholder = LiteralValue(text='""', kind=LiteralKind.STRING, range=literal.range)
        return ParsedSyntax.present(Text(literal=placeholder, range=literal.range))

    if parser.at(TokenKind.LBRACE):
        value, _ = parse_block_value(parser)
        return ParsedSyntax.present(Block(value=value, range=value.range))

    if at_bracket_value(parser):
        value, _ = parse_bracket_value(parser)
        return ParsedSyntax.present(BracketClosure(value=value, range=value.range))

    if _at_slot(parser):
        return ParsedSyntax.present(parse_slot(parser))

    if parser.at(TokenKind.BANG):
        return ParsedSyntax.present(parse_doctype(parser))

    if at_kebab_ident(parser):
        return ParsedSyntax.present(parse_tag_node(parser))

    if parser.at(TokenKind.SEMICOLON):
        _extra_semicolon(parser)
        return ParsedSyntax.absent()

    if parser.current.is_closing_delimiter and not parser.at(closer):
        parser.error(
            make_diagnostic(
                PARSER_MISMATCHED_DELIMITER,
                parser.current_range,
                message=f"Unexpected closing delimiter `{parser.current_text}`",
            )
        )
        parser.bump()
        return ParsedSyntax.absent()

    return ParsedSyntax.absent()


def parse_tag_node(parser: Parser) -> Element | Component:
    start = parser.current_range
    first = expect_kebab_ident(parser)
    path = parse_path_tail(parser, first)

    kind = classify_tag(path.text)
    if kind != TagKind.COMPONENT and len(path.segments) > 1:
        parser.error(
            make_diagnostic(
                PARSER_MALFORMED_IDENT,
                path.range,
                message=f"`{path.text}` is not a valid element name",
                hint="Paths are only allowed for components, which must start with an uppercase letter.",
            )
        )

    owner = AttributeOwner.COMPONENT if kind == TagKind.COMPONENT else AttributeOwner.ELEMENT
    body = _parse_tag_body(parser, start, owner)
    range = start.cover(parser.last_range)

    if kind == TagKind.COMPONENT:
        return Component(
            path=path,
            generics=body.generics,
            selectors=body.selectors,
            attributes=body.attributes,
            children_args=body.children_args,
            children=body.children,
            range=range,
        )
    return Element(
        tag=Tag(name=path.text, kind=kind, range=path.range),
        generics=body.generics,
        selectors=body.selectors,
        attributes=body.attributes,
        children_args=body.children_args,
        children=body.children,
        range=range,
    )


def parse_slot(parser: Parser) -> Slot:
    """`slot:Name ...`; the rest of the node parses like a component."""
    start = parser.current_range
    parser.bump()  # `slot`
    parser.bump()  # `:`

    first = parse_kebab_ident(parser)
    if first is None:
        parser.error(
            make_diagnostic(
                PARSER_EXPECTED_IDENTIFIER,
                parser.current_range,
                message="Expected a slot name after `slot:`",
            )
        )
        name = Path(segments=("",), range=TextRange.empty(parser.last_range.end))
    else:
        name = parse_path_tail(parser, first)

    body = _parse_tag_body(parser, start, AttributeOwner.SLOT)
    return Slot(
        name=name,
        generics=body.generics,
        selectors=body.selectors,
        attributes=body.attributes,
        children_args=body.children_args,
        children=body.children,
        range=start.cover(parser.last_range),
    )


def parse_doctype(parser: Parser) -> Doctype:
    start = parser.current_range
    parser.bump()  # `!`

    parts = (
        ("DOCTYPE", "Expected `DOCTYPE` after `!`"),
        ("html", "Expected `html` after `!DOCTYPE`"),
    )
    for word, message in parts:
        if parser.at(TokenKind.IDENTIFIER) and parser.current_text == word:
            parser.bump()
            continue
        parser.error(make_diagnostic(PARSER_INVALID_DOCTYPE, _expected_at(parser), message=message))
        parser.eat(TokenKind.SEMICOLON)
        return Doctype(range=start.cover(parser.last_range))

    if not parser.eat(TokenKind.SEMICOLON) and not _at_scope_end(parser):
        parser.error(
            make_diagnostic(
                PARSER_INVALID_DOCTYPE,
                _expected_at(parser),
                message="Expected `;` after `!DOCTYPE html`",
            )
        )
    return Doctype(range=start.cover(parser.last_range))


def parse_child_list(parser: Parser) -> ChildList:
    open_kind = parser.current
    open_range = parser.current_range
    closer = TokenKind.RBRACE if open_kind == TokenKind.LBRACE else TokenKind.RPAREN
    delimiter = ChildDelimiter.BRACE if open_kind == TokenKind.LBRACE else ChildDelimiter.PAREN
    parser.bump()

    children = parse_children(parser, closer)

    if parser.eat(closer):
        range = open_range.cover(parser.last_range)
    else:
        parser.error_unexpected_end()
        range = open_range.cover(parser.end_range)
    return ChildList(children=tuple(children), delimiter=delimiter, range=range)


def _parse_tag_body(parser: Parser, start: TextRange, owner: AttributeOwner) -> _TagBody:
    if parser.at(TokenKind.COLON2) and parser.nth_at(1, TokenKind.LESS_THAN):
        parser.error(make_diagnostic(PARSER_TURBOFISH_GENERICS, parser.current_range))
        parser.bump()

    generics = _parse_generics(parser) if parser.at(TokenKind.LESS_THAN) else None
    selectors = _parse_selectors(parser)
    attributes = parse_attributes(parser, owner)

    children_args: ClosureArgs | None = None
    if parser.at(TokenKind.PIPE):
        children_args = _parse_closure_args(parser)
        if not _at_children_block(parser):
            parser.error(make_diagnostic(PARSER_EXPECTED_CHILDREN_BLOCK, _expected_at(parser)))

    children = _parse_termination(parser, start)
    return _TagBody(
        generics=generics,
        selectors=selectors,
        attributes=attributes,
        children_args=children_args,
        children=children,
    )


def _parse_termination(parser: Parser, start: TextRange) -> ChildList | None:
    if parser.eat(TokenKind.SEMICOLON):
        return None

    if _at_children_block(parser):
        return parse_child_list(parser)

    if _at_scope_end(parser) and parser.options.allow_implicit_termination:
        return None

    if parser.at(TokenKind.EOF):
        parser.error(
            make_diagnostic(PARSER_UNTERMINATED_ELEMENT, TextRange.new(start.start, parser.last_range.end))
        )
        return None

    # Treat the node as self-closing and resume at the offending token.
    parser.error(
        make_diagnostic(
            PARSER_UNTERMINATED_ELEMENT,
            start.cover(parser.current_range),
            message=f"Unknown attribute or child elements not found before `{parser.current_text}`",
        )
    )
    return None


def _parse_generics(parser: Parser) -> Generics:
    open_range = parser.current_range
    parser.bump()
    depth = 1
    while depth > 0:
        if parser.at(TokenKind.EOF):
            parser.error_unexpected_end()
            return Generics(
                text=parser.slice(TextRange.new(open_range.end, parser.end_range.end)).strip(),
                range=open_range.cover(parser.end_range),
            )
        if parser.current.is_opening_delimiter:
            parser.bump_delimited()
            continue
        if parser.at(TokenKind.LESS_THAN):
            depth += 1
        elif parser.at(TokenKind.GREATER_THAN):
            depth -= 1
        parser.bump()

    close_range = parser.last_range
    return Generics(
        text=parser.slice(TextRange.new(open_range.end, close_range.start)).strip(),
        range=open_range.cover(close_range),
    )


def _parse_selectors(parser: Parser) -> tuple[Selector, ...]:
    selectors: list[Selector] = []
    while parser.at(TokenKind.DOT) or parser.at(TokenKind.HASH):
        prefix_range = parser.current_range
        is_class = parser.at(TokenKind.DOT)
        if not _at_selector_name(parser):
            parser.error(
                make_diagnostic(
                    PARSER_EXPECTED_IDENTIFIER,
                    prefix_range,
                    message=f"Expected a {'class' if is_class else 'id'} name directly after `{parser.current_text}`",
                )
            )
            parser.bump()
            continue

        parser.bump()
        name = expect_kebab_ident(parser)
        range = prefix_range.cover(name.range)
        selectors.append(ClassSelector(name=name, range=range) if is_class else IdSelector(name=name, range=range))
    return tuple(selectors)


def _parse_closure_args(parser: Parser) -> ClosureArgs:
    open_range = parser.current_range
    parser.bump()
    while not parser.at(TokenKind.PIPE):
        if parser.at(TokenKind.EOF):
            parser.error_unexpected_end()
            return ClosureArgs(
                text=parser.slice(TextRange.new(open_range.end, parser.end_range.end)).strip(),
                range=open_range.cover(parser.end_range),
            )
        if parser.current.is_opening_delimiter:
            parser.bump_delimited()
        else:
            parser.bump()
    parser.bump()
    close_range = parser.last_range
    return ClosureArgs(
        text=parser.slice(TextRange.new(open_range.end, close_range.start)).strip(),
        range=open_range.cover(close_range),
    )


def _extra_semicolon(parser: Parser) -> None:
    severity = "warning" if parser.options.allow_extra_semicolons else "error"
    parser.error(make_diagnostic(PARSER_EXTRA_SEMICOLON, parser.current_range, severity=severity))
    parser.bump()


def _at_slot(parser: Parser) -> bool:
    return (
        parser.at(TokenKind.IDENTIFIER)
        and parser.current_text == "slot"
        and parser.nth_at(1, TokenKind.COLON)
        and parser.nth(2) in (TokenKind.IDENTIFIER, TokenKind.MINUS)
    )


def _at_selector_name(parser: Parser) -> bool:
    return parser.nth(1) in (TokenKind.IDENTIFIER, TokenKind.MINUS) and not parser.has_nth_preceding_trivia(1)


def _at_children_block(parser: Parser) -> bool:
    if parser.at(TokenKind.LBRACE):
        return True
    return parser.at(TokenKind.LPAREN) and parser.options.allow_paren_children


def _at_scope_end(parser: Parser) -> bool:
    return parser.at(TokenKind.EOF) or parser.current.is_closing_delimiter


def _expected_at(parser: Parser) -> TextRange:
    if parser.at(TokenKind.EOF):
        return TextRange.empty(parser.last_range.end)
    return parser.current_range
