"""Code generator configuration."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class GeneratorOptions:
    """Knobs for lowering the AST into builder calls.

    `sequence_slots` names slot structs (as written after `slot:`) whose
    component field accepts several values; those are always passed as a
    `vec![...]` and may repeat without a duplicate-slot error.
    """

    sequence_slots: frozenset[str] = field(default_factory=frozenset)
    fold_static_classes: bool = True
    fold_static_styles: bool = True
    runtime_prefix: str = "::mview"

    @property
    def missing_value_path(self) -> str:
        return f"{self.runtime_prefix}::MissingValueAfterEq"
