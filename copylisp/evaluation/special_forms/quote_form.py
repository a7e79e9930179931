from __future__ import annotations

from copylisp import Ref
from copylisp.evaluation.syntax import operand
from copylisp.memory.roots import Root


def quote_form(interp, expr: Root, env: Root) -> Ref:
    """(quote datum) returns datum unevaluated."""
    return operand(interp.heap, expr.value, 1, "quote")
