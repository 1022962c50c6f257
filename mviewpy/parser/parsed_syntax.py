"""Parsed syntax wrapper."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParsedSyntax[T]:
    """Result of a parse routine: the node it built, or nothing."""

    node: T | None = None

    @staticmethod
    def present(node: T) -> "ParsedSyntax[T]":
        return ParsedSyntax(node)

    @staticmethod
    def absent() -> "ParsedSyntax[T]":
        return ParsedSyntax(None)

    def is_present(self) -> bool:
        return self.node is not None
