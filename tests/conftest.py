import io

import pytest

from copylisp.config import Limits
from copylisp.interpreter import Interpreter
from copylisp.memory.roots import RootRegistry
from copylisp.memory.store import Heap
from copylisp.types.tags import TRACED


@pytest.fixture
def interp():
    """Fresh interpreter with default limits; output captured in interp.out."""
    return Interpreter(out=io.StringIO())


@pytest.fixture
def small_interp():
    """Interpreter whose heap is small enough that evaluation has to collect."""
    return Interpreter(Limits(heap_size=512), out=io.StringIO())


@pytest.fixture
def heap():
    return Heap(16, RootRegistry())


def shape(heap, refs):
    """Address-independent picture of everything reachable from `refs`.

    Objects are numbered in breadth-first discovery order, so two heaps have
    the same shape exactly when they hold the same values with the same sharing.
    """
    ids = {}
    order = []

    def visit(ref):
        if ref is None:
            return None
        if ref not in ids:
            ids[ref] = len(ids)
            order.append(ref)
        return ids[ref]

    entry = [visit(r) for r in refs]
    nodes = []
    i = 0
    while i < len(order):
        ref = order[i]
        tag = heap.tag(ref)
        if tag in TRACED:
            nodes.append((tag, visit(heap.first(ref)), visit(heap.second(ref))))
        else:
            nodes.append((tag, heap.first(ref)))
        i += 1
    return entry, nodes
