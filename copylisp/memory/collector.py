"""Cheney-style copying collection over the two semispaces of a Heap.

1. Swap the semispaces; allocation restarts at the base of the new one.
2. Evacuate the target of every registered root slot and redirect the slot.
3. Scan the new semispace breadth-first, evacuating the `first`/`second`
   fields of every Cons and Closure in place, until the scan cursor meets
   the allocation cursor.

Evacuating copies a cell into the next free cell of the new semispace and
overwrites the old cell with FORWARD plus the new index, so every later
reference to the old cell is redirected to the same copy.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from copylisp import Ref
from copylisp.types.tags import TRACED

if TYPE_CHECKING:
    from copylisp.memory.store import Heap

logger = logging.getLogger(__name__)


class _Forward:
    __slots__ = ()

    def __repr__(self):
        return "<forwarded>"


FORWARD = _Forward()


def collect(heap: Heap) -> int:
    tags, firsts, seconds = heap.tags, heap.firsts, heap.seconds

    heap.active_base, heap.reserve_base = heap.reserve_base, heap.active_base
    base = heap.active_base
    limit = base + heap.size
    free = base

    def evacuate(ref: Ref) -> Ref:
        nonlocal free
        if ref is None or base <= ref < limit:
            return ref
        if firsts[ref] is FORWARD:
            return seconds[ref]
        new = free
        free += 1
        tags[new] = tags[ref]
        firsts[new] = firsts[ref]
        seconds[new] = seconds[ref]
        firsts[ref] = FORWARD
        seconds[ref] = new
        return new

    for slot in heap.roots:
        slot.value = evacuate(slot.value)

    scan = base
    while scan < free:
        if tags[scan] in TRACED:
            firsts[scan] = evacuate(firsts[scan])
            seconds[scan] = evacuate(seconds[scan])
        scan += 1

    heap.cursor = free
    heap.limit = limit
    survivors = free - base
    logger.debug(
        "Collection %d: %d of %d cells survived",
        heap.collections + 1, survivors, heap.size,
    )
    return survivors
