from __future__ import annotations

from copylisp import Ref
from copylisp.evaluation import environment
from copylisp.evaluation.evaluator import evaluate
from copylisp.evaluation.syntax import operand
from copylisp.memory.roots import Root
from copylisp.types.errors import LispSyntaxError


def define_form(interp, expr: Root, env: Root) -> Ref:
    """
    (define name value)
    Binds name in the innermost frame of the current environment and returns the value.
    """
    heap = interp.heap
    if not heap.is_atom(operand(heap, expr.value, 1, "define")):
        raise LispSyntaxError("define: name must be an atom")
    value = Root()
    with heap.protect(value):
        value.value = evaluate(interp, operand(heap, expr.value, 2, "define"), env.value)
        name = heap.first(heap.second(expr.value))
        environment.define(heap, env.value, name, value.value)
        return value.value
