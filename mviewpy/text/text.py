from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class TextSize:
    """Offset into template source, counted in Python string indices."""

    value: int

    def __post_init__(self):
        if self.value < 0:
            raise ValueError("TextSize cannot be negative")

    @staticmethod
    def of(text: str) -> "TextSize":
        """Offset just past the end of `text`."""
        return TextSize(len(text))

    @staticmethod
    def from_int(value: int) -> "TextSize":
        return TextSize(value)

    def __repr__(self) -> str:
        return f"TextSize({self.value})"


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """Half-open `[start, end)` span of template source.

    Tokens, AST nodes and diagnostics all carry one. A parent's range is the
    `cover` of its parts, so slicing it yields exactly the text it was
    parsed from.
    """

    _start: int
    _end: int

    def __post_init__(self):
        if self._start < 0 or self._end < 0:
            raise ValueError("TextRange positions cannot be negative")
        if self._start > self._end:
            raise ValueError("TextRange invariant violated: start > end")

    @staticmethod
    def new(start: TextSize, end: TextSize) -> "TextRange":
        return TextRange(start.value, end.value)

    @staticmethod
    def empty(offset: TextSize) -> "TextRange":
        """Zero-width range, used for "expected something here" diagnostics."""
        return TextRange(offset.value, offset.value)

    @property
    def start(self) -> TextSize:
        return TextSize(self._start)

    @property
    def end(self) -> TextSize:
        return TextSize(self._end)

    def as_tuple(self) -> tuple[int, int]:
        return (self._start, self._end)

    def contains_range(self, other: "TextRange") -> bool:
        return self._start <= other._start and other._end <= self._end

    def cover(self, other: "TextRange") -> "TextRange":
        """Smallest range spanning both ranges (and any gap between them)."""
        return TextRange(min(self._start, other._start), max(self._end, other._end))

    def __repr__(self) -> str:
        return f"TextRange({self._start}, {self._end})"


def slice_text_range(source: str, range: TextRange) -> str:
    return source[range.start.value : range.end.value]


def cover_all(first: TextRange, *rest: TextRange | None) -> TextRange:
    """Union of several ranges, skipping missing ones."""
    result = first
    for item in rest:
        if item is not None:
            result = result.cover(item)
    return result


def line_col(source: str, offset: TextSize) -> tuple[int, int]:
    """1-based line and column of `offset`, for printing diagnostics."""
    line = source.count("\n", 0, offset.value) + 1
    column = offset.value - (source.rfind("\n", 0, offset.value) + 1) + 1
    return line, column
