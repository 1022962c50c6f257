"""Tag classification."""

from enum import StrEnum
from typing import Final


class TagKind(StrEnum):
    HTML = "html"
    SVG = "svg"
    MATH = "math"
    WEB_COMPONENT = "web_component"
    COMPONENT = "component"


SVG_ELEMENTS: Final[frozenset[str]] = frozenset(
    {
        "animate",
        "animateMotion",
        "animateTransform",
        "circle",
        "clipPath",
        "defs",
        "desc",
        "discard",
        "ellipse",
        "feBlend",
        "feColorMatrix",
        "feComponentTransfer",
        "feComposite",
        "feConvolveMatrix",
        "feDiffuseLighting",
        "feDisplacementMap",
        "feDistantLight",
        "feDropShadow",
        "feFlood",
        "feFuncA",
        "feFuncB",
        "feFuncG",
        "feFuncR",
        "feGaussianBlur",
        "feImage",
        "feMerge",
        "feMergeNode",
        "feMorphology",
        "feOffset",
        "fePointLight",
        "feSpecularLighting",
        "feSpotLight",
        "feTile",
        "feTurbulence",
        "filter",
        "foreignObject",
        "g",
        "hatch",
        "hatchpath",
        "image",
        "line",
        "linearGradient",
        "marker",
        "mask",
        "metadata",
        "mpath",
        "path",
        "pattern",
        "polygon",
        "polyline",
        "radialGradient",
        "rect",
        "set",
        "stop",
        "svg",
        "switch",
        "symbol",
        "text",
        "textPath",
        "tspan",
        "use",
        "use_",
        "view",
    }
)

MATHML_ELEMENTS: Final[frozenset[str]] = frozenset(
    {
        "annotation",
        "maction",
        "math",
        "menclose",
        "merror",
        "mfenced",
        "mfrac",
        "mi",
        "mmultiscripts",
        "mn",
        "mo",
        "mover",
        "mpadded",
        "mphantom",
        "mprescripts",
        "mroot",
        "mrow",
        "ms",
        "mspace",
        "msqrt",
        "mstyle",
        "msub",
        "msubsup",
        "msup",
        "mtable",
        "mtd",
        "mtext",
        "mtr",
        "munder",
        "munderover",
        "semantics",
    }
)


def is_component_name(name: str) -> bool:
    """Components are UpperCamelCase; only the last path segment counts."""
    last = name.rsplit("::", 1)[-1]
    return last[:1].isascii() and last[:1].isupper()


def classify_tag(name: str) -> TagKind:
    """Decide what kind of node a tag name produces."""
    if is_component_name(name):
        return TagKind.COMPONENT
    if name in SVG_ELEMENTS:
        return TagKind.SVG
    if "-" in name:
        return TagKind.WEB_COMPONENT
    if name in MATHML_ELEMENTS:
        return TagKind.MATH
    return TagKind.HTML
