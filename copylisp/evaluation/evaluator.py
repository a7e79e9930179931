"""Core evaluator for copylisp.

`evaluate` is a loop rather than a recursion for tail positions: special
forms and closure application return a TailCall, and the loop restarts with
the new expression and environment. Only non-tail evaluation (predicates,
operator and operand positions, non-final body forms) recurses.

Every heap reference that has to outlive an allocation lives in a Root slot
registered with the heap. `expr` and `env` are registered once here and
handed to special forms as Root slots, so forms re-read them after any
call that may allocate.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from copylisp import Ref
from copylisp.evaluation.environment import lookup
from copylisp.memory.roots import Root
from copylisp.types.tags import Tag
from copylisp.types.tail_call import TailCall

if TYPE_CHECKING:
    from copylisp.interpreter import Interpreter

NUMBER_RE = re.compile(r"[+-]?[0-9]+")


def is_number(text: str) -> bool:
    return NUMBER_RE.fullmatch(text) is not None


def evaluate(interp: Interpreter, expr: Ref, env: Ref) -> Ref:
    from copylisp.evaluation.apply import apply_form

    heap = interp.heap
    special_forms = interp.special_forms
    expr_slot, env_slot = Root(expr), Root(env)
    with heap.protect(expr_slot, env_slot):
        while True:
            expr = expr_slot.value
            if expr is None:
                return None
            tag = heap.tag(expr)
            if tag is Tag.ATOM:
                # numbers are self-evaluating; anything else is a variable
                if is_number(heap.first(expr)):
                    return expr
                return lookup(heap, env_slot.value, expr)
            if tag is not Tag.CONS:
                return expr

            head = heap.first(expr)
            form = special_forms.get(heap.first(head)) if heap.is_atom(head) else None
            if form is not None:
                result = form(interp, expr_slot, env_slot)
            else:
                result = apply_form(interp, expr_slot, env_slot)

            if isinstance(result, TailCall):
                expr_slot.value, env_slot.value = result.expr, result.env
                continue
            return result
