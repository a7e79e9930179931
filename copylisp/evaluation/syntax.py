"""Shape checks for forms read from source.

Special forms and calls walk their operands with these helpers instead of
indexing the heap directly, so `(quote)` or `(f . x)` is reported as a
LispSyntaxError rather than failing inside the store.
"""

from __future__ import annotations

from copylisp import Ref
from copylisp.memory.store import Heap
from copylisp.types.errors import LispSyntaxError


def operand(heap: Heap, expr: Ref, index: int, form: str) -> Ref:
    """Return element `index` of `expr` (0 is the head); it must be present."""
    cell = expr
    for _ in range(index):
        cell = heap.second(cell)
        if not heap.is_pair(cell):
            raise LispSyntaxError(f"{form}: missing operand {index}")
    return heap.first(cell)


def proper_list(heap: Heap, lst: Ref, form: str) -> Ref:
    """Check that `lst` is () or a chain of pairs ending in (); return it."""
    cell = lst
    while cell is not None:
        if not heap.is_pair(cell):
            raise LispSyntaxError(f"{form}: improper operand list")
        cell = heap.second(cell)
    return lst
