"""Parser modes and configuration options."""

from dataclasses import dataclass
from enum import StrEnum


class ParseMode(StrEnum):
    """Top-level parser behavior profile."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Feature flags controlling grammar compatibility and recovery behavior."""

    mode: ParseMode = ParseMode.STRICT
    allow_paren_children: bool = True
    allow_implicit_termination: bool = True
    allow_extra_semicolons: bool = False

    @staticmethod
    def for_mode(mode: ParseMode) -> "ParserOptions":
        if mode == ParseMode.PERMISSIVE:
            return ParserOptions(
                mode=mode,
                allow_paren_children=True,
                allow_implicit_termination=True,
                allow_extra_semicolons=True,
            )

        return ParserOptions(
            mode=mode,
            allow_paren_children=True,
            allow_implicit_termination=True,
            allow_extra_semicolons=False,
        )
