from __future__ import annotations

from copylisp import Ref
from copylisp.evaluation.evaluator import evaluate
from copylisp.evaluation.syntax import proper_list
from copylisp.memory.roots import Root


def or_form(interp, expr: Root, env: Root) -> Ref:
    """Short-circuiting logical OR special form.

    (or a b c ...) evaluates each operand left-to-right and returns the first
    value that is not (). If every operand is (), or there are none, returns ().
    """
    heap = interp.heap
    item = Root(proper_list(heap, heap.second(expr.value), "or"))
    with heap.protect(item):
        while item.value is not None:
            value = evaluate(interp, heap.first(item.value), env.value)
            if value is not None:
                return value
            item.value = heap.second(item.value)
    return None
