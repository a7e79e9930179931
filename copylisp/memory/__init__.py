"""Managed memory for copylisp: interned atom text, the two-semispace
object store, the root registry and the copying collector."""

from copylisp.memory.interning import InternTable
from copylisp.memory.roots import Root, RootRegistry
from copylisp.memory.store import Heap, HeapStats

__all__ = ["Heap", "HeapStats", "InternTable", "Root", "RootRegistry"]
