"""Source positions and spans."""

from mviewpy.text.text import TextRange, TextSize, cover_all, line_col, slice_text_range

__all__ = [
    "TextRange",
    "TextSize",
    "cover_all",
    "line_col",
    "slice_text_range",
]
