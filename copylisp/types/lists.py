"""Allocation-free helpers over cons lists in a Heap."""

from __future__ import annotations

from typing import Iterator

from copylisp import Ref
from copylisp.memory.store import Heap


def reverse(heap: Heap, lst: Ref, tail: Ref = None) -> Ref:
    """Reverse `lst` in place, ending the result in `tail`."""
    prev = tail
    while lst is not None:
        nxt = heap.second(lst)
        heap.set_second(lst, prev)
        prev, lst = lst, nxt
    return prev


def length(heap: Heap, lst: Ref) -> int:
    """Count the pairs along `lst`; an improper tail is not counted."""
    n = 0
    while heap.is_pair(lst):
        n += 1
        lst = heap.second(lst)
    return n


def items(heap: Heap, lst: Ref) -> Iterator[Ref]:
    """Yield the elements of `lst`. Do not allocate while iterating."""
    while heap.is_pair(lst):
        yield heap.first(lst)
        lst = heap.second(lst)
