"""Output call tree: the builder-call expression produced by the generator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Path:
    """Path expression such as `html::div::new` or `ev::click`."""

    text: str


@dataclass(frozen=True, slots=True)
class Raw:
    """Host code passed through verbatim."""

    text: str


@dataclass(frozen=True, slots=True)
class Lit:
    """Literal exactly as it should be printed, quotes included."""

    text: str

    @staticmethod
    def string(value: str) -> Lit:
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return Lit(f'"{escaped}"')


@dataclass(frozen=True, slots=True)
class Call:
    func: Expr
    args: tuple[Expr, ...] = ()


@dataclass(frozen=True, slots=True)
class MethodCall:
    receiver: Expr
    method: str
    args: tuple[Expr, ...] = ()


@dataclass(frozen=True, slots=True)
class Closure:
    """`move |params| body`; `params` is `None` for a zero-argument closure."""

    body: Expr
    params: str | None = None
    is_move: bool = True


@dataclass(frozen=True, slots=True)
class Tuple:
    items: tuple[Expr, ...]


@dataclass(frozen=True, slots=True)
class Array:
    items: tuple[Expr, ...]


@dataclass(frozen=True, slots=True)
class Macro:
    """`name!(args)` or, with `bracket`, `name![args]`."""

    name: str
    args: tuple[Expr, ...]
    bracket: bool = False


@dataclass(frozen=True, slots=True)
class Let:
    name: str
    value: Expr


@dataclass(frozen=True, slots=True)
class BlockExpr:
    """`{ stmt; stmt; tail }`"""

    statements: tuple[Let, ...]
    tail: Expr


type Expr = Path | Raw | Lit | Call | MethodCall | Closure | Tuple | Array | Macro | BlockExpr

UNIT: Tuple = Tuple(())


def method_chain(receiver: Expr, calls: list[tuple[str, tuple[Expr, ...]]]) -> Expr:
    """Apply `.method(args)` calls to `receiver` in order."""
    result = receiver
    for method, args in calls:
        result = MethodCall(result, method, args)
    return result
