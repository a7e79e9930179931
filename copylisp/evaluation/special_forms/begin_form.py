from __future__ import annotations

from copylisp import Ref
from copylisp.evaluation.evaluator import evaluate
from copylisp.evaluation.syntax import proper_list
from copylisp.memory.roots import Root
from copylisp.types.tail_call import TailCall


def begin_form(interp, expr: Root, env: Root) -> Ref | TailCall:
    heap = interp.heap
    item = Root(proper_list(heap, heap.second(expr.value), "begin"))
    with heap.protect(item):
        while item.value is not None:
            if heap.second(item.value) is None:
                return TailCall(heap.first(item.value), env.value)
            evaluate(interp, heap.first(item.value), env.value)
            item.value = heap.second(item.value)
    return None
