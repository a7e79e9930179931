"""Function application for copylisp.

- Native functions receive their operands evaluated left to right, as a
  fresh list built in reverse and then reversed in place.
- Closures bind each parameter in a new frame extending their defining
  environment, evaluate all but the last body form, and hand the last body
  form back to the evaluator loop as a TailCall.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from copylisp import Ref
from copylisp.evaluation.environment import define, new_env
from copylisp.evaluation.evaluator import evaluate
from copylisp.evaluation.syntax import proper_list
from copylisp.memory.roots import Root
from copylisp.reader.printer import to_string
from copylisp.types import lists
from copylisp.types.errors import LispArityError, LispTypeError
from copylisp.types.tags import Tag
from copylisp.types.tail_call import TailCall

if TYPE_CHECKING:
    from copylisp.interpreter import Interpreter


def apply_form(interp: Interpreter, expr: Root, env: Root) -> Ref | TailCall:
    heap = interp.heap
    fn, args, item, call_env = Root(), Root(), Root(), Root()
    proper_list(heap, heap.second(expr.value), "application")
    with heap.protect(fn, args, item, call_env):
        fn.value = evaluate(interp, heap.first(expr.value), env.value)
        tag = heap.tag(fn.value) if fn.value is not None else None

        if tag is Tag.NATIVE:
            item.value = heap.second(expr.value)
            while item.value is not None:
                value = evaluate(interp, heap.first(item.value), env.value)
                args.value = heap.cons(value, args.value)
                item.value = heap.second(item.value)
            args.value = lists.reverse(heap, args.value)
            return heap.first(fn.value)(interp, args.value)

        if tag is Tag.CLOSURE:
            params = heap.first(fn.value)
            expected = lists.length(heap, params)
            supplied = lists.length(heap, heap.second(expr.value))
            if expected != supplied:
                raise LispArityError(
                    f"{to_string(heap, fn.value)} expects {expected} argument(s), got {supplied}"
                )
            # closure second is (body . defining-env)
            call_env.value = new_env(heap, heap.second(heap.second(fn.value)))
            args.value = heap.first(fn.value)
            item.value = heap.second(expr.value)
            while item.value is not None:
                value = evaluate(interp, heap.first(item.value), env.value)
                define(heap, call_env.value, heap.first(args.value), value)
                args.value = heap.second(args.value)
                item.value = heap.second(item.value)

            item.value = heap.first(heap.second(fn.value))
            while item.value is not None:
                if heap.second(item.value) is None:
                    return TailCall(heap.first(item.value), call_env.value)
                evaluate(interp, heap.first(item.value), call_env.value)
                item.value = heap.second(item.value)
            return None

        raise LispTypeError(f"Cannot apply {to_string(heap, fn.value)}")
