"""Root registry: the stack of live reference slots the collector traces.

Python cannot hand out the address of a local variable, so a root slot is a
small mutable `Root` cell. Code that must keep a heap reference alive across
anything that may allocate stores it in a Root and registers the Root for
the duration of a scope:

    obj, tmp = Root(), Root()
    with heap.protect(obj, tmp):
        obj.value = ...
        tmp.value = heap.cons(obj.value, None)   # obj.value is updated if this collects

Scopes nest strictly (LIFO). Leaving a `with` block pops its scope even when
an exception unwinds through it.
"""

from __future__ import annotations

from typing import Iterator

from copylisp import Ref
from copylisp.config import DEFAULT_MAX_ROOTS, DEFAULT_MAX_SCOPES
from copylisp.types.errors import RootStackOverflow


class Root:
    """A registered slot holding one heap reference."""

    __slots__ = ("value",)

    def __init__(self, value: Ref = None):
        self.value: Ref = value

    def __repr__(self):
        return f"Root({self.value!r})"


class RootRegistry:
    __slots__ = ("max_roots", "max_scopes", "_slots", "_scopes")

    def __init__(self, max_roots: int = DEFAULT_MAX_ROOTS, max_scopes: int = DEFAULT_MAX_SCOPES):
        self.max_roots = max_roots
        self.max_scopes = max_scopes
        self._slots: list[Root] = []
        # slot count at the start of each open scope
        self._scopes: list[int] = []

    def push_scope(self, *slots: Root) -> None:
        if len(self._scopes) >= self.max_scopes:
            raise RootStackOverflow(f"Root registry nesting exceeds {self.max_scopes} scopes")
        if len(self._slots) + len(slots) > self.max_roots:
            raise RootStackOverflow(f"Root registry exceeds {self.max_roots} slots")
        self._scopes.append(len(self._slots))
        self._slots.extend(slots)

    def pop_scope(self) -> None:
        if not self._scopes:
            raise RootStackOverflow("pop_scope without a matching push_scope")
        del self._slots[self._scopes.pop():]

    def scope(self, *slots: Root) -> _Scope:
        return _Scope(self, slots)

    @property
    def depth(self) -> int:
        return len(self._scopes)

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Root]:
        return iter(self._slots)


class _Scope:
    """Context manager pairing one push_scope with one pop_scope."""

    __slots__ = ("registry", "slots")

    def __init__(self, registry: RootRegistry, slots: tuple[Root, ...]):
        self.registry = registry
        self.slots = slots

    def __enter__(self) -> None:
        self.registry.push_scope(*self.slots)

    def __exit__(self, exc_type, exc, tb) -> None:
        self.registry.pop_scope()
