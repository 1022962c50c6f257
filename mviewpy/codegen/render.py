"""Render a call tree as host-language source text."""

from mviewpy.codegen.calltree import (
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
)


def render(expr: Expr) -> str:
    """Print `expr` on one line, e.g. `html::div::new().classes("a b")`."""
    match expr:
        case Path(text=text) | Raw(text=text) | Lit(text=text):
            return text
        case Call(func=func, args=args):
            return f"{render(func)}({_join(args)})"
        case MethodCall(receiver=receiver, method=method, args=args):
            return f"{render(receiver)}.{method}({_join(args)})"
        case Closure(body=body, params=params, is_move=is_move):
            head = "move " if is_move else ""
            return f"{head}|{params or ''}| {render(body)}"
        case Tuple(items=items):
            if len(items) == 1:
                return f"({render(items[0])},)"
            return f"({_join(items)})"
        case Array(items=items):
            return f"[{_join(items)}]"
        case Macro(name=name, args=args, bracket=bracket):
            if bracket:
                return f"{name}![{_join(args)}]"
            return f"{name}!({_join(args)})"
        case BlockExpr(statements=statements, tail=tail):
            parts = [_render_let(statement) for statement in statements]
            parts.append(render(tail))
            return "{ " + " ".join(parts) + " }"
        case _:
            raise TypeError(f"Cannot render {expr!r}")


def _render_let(statement: Let) -> str:
    return f"let {statement.name} = {render(statement.value)};"


def _join(items: tuple[Expr, ...]) -> str:
    return ", ".join(render(item) for item in items)
