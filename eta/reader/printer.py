"""Printer: render Eta value trees back to their textual form."""

from __future__ import annotations

from typing import Optional

from eta.types.closure import Closure
from eta.types.values import Atom, Float, Integer, Pair, Primitive, Value, is_nil

NIL_TEXT = "()"


def format_float(value: float) -> str:
    text = f"{value:.7g}"
    # Keep floats distinguishable from integers when read back
    if any(c in text for c in ".eni"):
        return text
    return text + ".0"


def _unparse_list(pair: Pair) -> str:
    parts = []
    node: Optional[Value] = pair
    while isinstance(node, Pair) and not is_nil(node):
        parts.append(unparse(node.car) or NIL_TEXT)
        node = node.cdr
    if node is not None and not is_nil(node):
        parts.append(".")
        parts.append(unparse(node))
    return "(" + " ".join(parts) + ")"


def unparse(value: Optional[Value]) -> Optional[str]:
    """Textual form of `value`; None for the absent value."""
    match value:
        case None:
            return None
        case Atom():
            return value.name
        case Integer():
            return str(value.value)
        case Float():
            return format_float(value.value)
        case Primitive():
            return f"<primitive {value.name}>"
        case Closure():
            params = unparse(value.parameters) or NIL_TEXT
            return f"<closure {params} {unparse(value.body)}>"
        case Pair():
            if is_nil(value):
                return NIL_TEXT
            return _unparse_list(value)
    raise TypeError(f"Cannot print {value!r}")
