"""Parser infrastructure (token source + recursive-descent grammar producing the AST)."""

from mviewpy.parser.attributes import AttributeOwner, parse_attribute, parse_attributes
from mviewpy.parser.grammar import parse_child, parse_children, parse_root
from mviewpy.parser.mview import ParsedView, parse, parse_result
from mviewpy.parser.options import ParseMode, ParserOptions
from mviewpy.parser.parse_lists import ParseNodeList
from mviewpy.parser.parse_recovery import ParseRecoveryTokenSet, RecoveryError
from mviewpy.parser.parsed_syntax import ParsedSyntax
from mviewpy.parser.parser import DelimitedGroup, Parser, ParserCheckpoint, ParserProgress
from mviewpy.parser.token_source import SourceToken, TokenSource, TokenSourceCheckpoint
from mviewpy.parser.values import parse_value

__all__ = [
    "AttributeOwner",
    "DelimitedGroup",
    "ParseMode",
    "ParseNodeList",
    "ParseRecoveryTokenSet",
    "ParsedSyntax",
    "ParsedView",
    "Parser",
    "ParserCheckpoint",
    "ParserOptions",
    "ParserProgress",
    "RecoveryError",
    "SourceToken",
    "TokenSource",
    "TokenSourceCheckpoint",
    "parse",
    "parse_attribute",
    "parse_attributes",
    "parse_child",
    "parse_children",
    "parse_result",
    "parse_root",
    "parse_value",
]
