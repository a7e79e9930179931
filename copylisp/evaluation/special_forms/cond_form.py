from __future__ import annotations

from copylisp.evaluation.evaluator import evaluate
from copylisp.evaluation.syntax import operand, proper_list
from copylisp.memory.roots import Root
from copylisp.types.errors import LispSyntaxError, NoMatchingClause
from copylisp.types.tail_call import TailCall


def cond_form(interp, expr: Root, env: Root) -> TailCall:
    """
    (cond (test consequent) ...)
    The consequent of the first clause whose test is not () is evaluated in
    tail position. Running out of clauses is fatal.
    """
    heap = interp.heap
    clause = Root(proper_list(heap, heap.second(expr.value), "cond"))
    with heap.protect(clause):
        while clause.value is not None:
            current = heap.first(clause.value)
            if not heap.is_pair(current):
                raise LispSyntaxError("cond: clause must be a list")
            operand(heap, current, 1, "cond")
            if evaluate(interp, heap.first(current), env.value) is not None:
                consequent = heap.first(heap.second(heap.first(clause.value)))
                return TailCall(consequent, env.value)
            clause.value = heap.second(clause.value)
    raise NoMatchingClause("cond: no clause matched")
