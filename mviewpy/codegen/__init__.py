"""Builder-call generation for parsed view templates."""

from mviewpy.codegen.calltree import (
    UNIT,
    Array,
    BlockExpr,
    Call,
    Closure,
    Expr,
    Let,
    Lit,
    Macro,
    MethodCall,
    Path,
    Raw,
    Tuple,
    method_chain,
)
from mviewpy.codegen.generator import Generator, generate, upper_camel_to_snake
from mviewpy.codegen.options import GeneratorOptions
from mviewpy.codegen.render import render

__all__ = [
    "UNIT",
    "Array",
    "BlockExpr",
    "Call",
    "Closure",
    "Expr",
    "Generator",
    "GeneratorOptions",
    "Let",
    "Lit",
    "Macro",
    "MethodCall",
    "Path",
    "Raw",
    "Tuple",
    "generate",
    "method_chain",
    "render",
    "upper_camel_to_snake",
]
