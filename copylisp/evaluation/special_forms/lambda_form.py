from __future__ import annotations

from copylisp import Ref
from copylisp.evaluation.syntax import operand, proper_list
from copylisp.memory.roots import Root
from copylisp.types import lists
from copylisp.types.errors import LispSyntaxError
from copylisp.types.tags import Tag


def lambda_form(interp, expr: Root, env: Root) -> Ref:
    """
    (lambda (params ...) body ...)
    Builds a Closure whose first field is the parameter list and whose second
    is (body . env). Parameter list and body are shared with the form, not copied.
    """
    heap = interp.heap
    params = proper_list(heap, operand(heap, expr.value, 1, "lambda"), "lambda")
    if not all(heap.is_atom(param) for param in lists.items(heap, params)):
        raise LispSyntaxError("lambda: parameters must be atoms")
    proper_list(heap, heap.second(heap.second(expr.value)), "lambda")
    body_and_env = heap.cons(heap.second(heap.second(expr.value)), env.value)
    params = heap.first(heap.second(expr.value))
    return heap.allocate(Tag.CLOSURE, params, body_and_env)
