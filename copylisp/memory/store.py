"""The object store: a fixed-capacity arena of tagged two-field cells.

The arena is split into two semispaces of `size` cells each. Allocation
bumps a cursor through the active semispace; when it is full the copying
collector evacuates everything reachable from the root registry into the
other semispace, which then becomes the active one.

A reference to an object is its cell index (`int`). The empty list is
`None` and is never a cell.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from copylisp import Ref
from copylisp.config import DEFAULT_HEAP_SIZE
from copylisp.memory import collector
from copylisp.memory.roots import Root, RootRegistry
from copylisp.types.errors import HeapExhausted
from copylisp.types.tags import TRACED, Tag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeapStats:
    capacity: int
    used: int
    collections: int
    last_survivors: int


class Heap:
    __slots__ = (
        "size",
        "roots",
        "tags",
        "firsts",
        "seconds",
        "active_base",
        "reserve_base",
        "cursor",
        "limit",
        "collections",
        "last_survivors",
    )

    def __init__(self, size: int = DEFAULT_HEAP_SIZE, roots: RootRegistry | None = None):
        self.size = size
        self.roots: RootRegistry = roots if roots is not None else RootRegistry()
        self.tags: list[Tag] = [Tag.ATOM] * (2 * size)
        self.firsts: list[Any] = [None] * (2 * size)
        self.seconds: list[Any] = [None] * (2 * size)
        self.active_base = 0
        self.reserve_base = size
        self.cursor = 0
        self.limit = size
        self.collections = 0
        self.last_survivors = 0

    # --- Allocation ---
    def allocate(self, tag: Tag, first: Any = None, second: Any = None) -> int:
        """Return a fresh cell, collecting first if the active semispace is full.

        Raises HeapExhausted if a collection does not free a single cell.
        """
        if self.cursor >= self.limit:
            logger.debug("Active semispace full (%d cells), collecting", self.size)
            if tag in TRACED:
                # The prospective fields are not reachable from any root yet.
                pending_first, pending_second = Root(first), Root(second)
                with self.roots.scope(pending_first, pending_second):
                    self.collect()
                first, second = pending_first.value, pending_second.value
            else:
                self.collect()
            if self.cursor >= self.limit:
                logger.error("Out of memory: %d live objects fill the heap", self.size)
                raise HeapExhausted(f"Out of memory: {self.size} live objects")
        ref = self.cursor
        self.cursor += 1
        self.tags[ref] = tag
        self.firsts[ref] = first
        self.seconds[ref] = second
        return ref

    def cons(self, first: Ref, second: Ref) -> int:
        return self.allocate(Tag.CONS, first, second)

    def collect(self) -> int:
        """Run one copying collection; returns the number of surviving objects."""
        survivors = collector.collect(self)
        self.collections += 1
        self.last_survivors = survivors
        return survivors

    def protect(self, *slots: Root):
        """Register `slots` as roots for the duration of a `with` block."""
        return self.roots.scope(*slots)

    # --- Field access ---
    def tag(self, ref: int) -> Tag:
        return self.tags[ref]

    def first(self, ref: int) -> Any:
        return self.firsts[ref]

    def second(self, ref: int) -> Any:
        return self.seconds[ref]

    def set_first(self, ref: int, value: Ref) -> None:
        self.firsts[ref] = value

    def set_second(self, ref: int, value: Ref) -> None:
        self.seconds[ref] = value

    def is_pair(self, ref: Ref) -> bool:
        return ref is not None and self.tags[ref] is Tag.CONS

    def is_atom(self, ref: Ref) -> bool:
        return ref is not None and self.tags[ref] is Tag.ATOM

    def in_active(self, ref: int) -> bool:
        return self.active_base <= ref < self.cursor

    def stats(self) -> HeapStats:
        return HeapStats(
            capacity=self.size,
            used=self.cursor - self.active_base,
            collections=self.collections,
            last_survivors=self.last_survivors,
        )
