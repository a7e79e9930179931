"""Environments as heap data.

An environment is a chain of frames: `(frame . parent)`, where each frame is
an association list of `(name . value)` pairs, most recent definition first.
Being ordinary cons cells, environments are traced and relocated by the
collector like any other value.
"""

from __future__ import annotations

from copylisp import Ref
from copylisp.memory.roots import Root
from copylisp.memory.store import Heap
from copylisp.types.tags import Tag


def new_env(heap: Heap, parent: Ref) -> int:
    """Return an empty frame extending `parent`."""
    return heap.cons(None, parent)


def define(heap: Heap, env: Ref, name: Ref, value: Ref) -> None:
    """Bind `name` to `value` in the innermost frame of `env`."""
    env_slot, name_slot, value_slot, pair = Root(env), Root(name), Root(value), Root()
    with heap.protect(env_slot, name_slot, value_slot, pair):
        pair.value = heap.cons(name_slot.value, value_slot.value)
        frame = heap.cons(pair.value, heap.first(env_slot.value))
        heap.set_first(env_slot.value, frame)


def same_name(heap: Heap, a: Ref, b: Ref) -> bool:
    if a == b:
        return True
    if a is None or b is None:
        return False
    # atom text is interned, so identity is text equality
    return heap.tag(a) is Tag.ATOM and heap.tag(b) is Tag.ATOM and heap.first(a) is heap.first(b)


def find_pair(heap: Heap, env: Ref, name: Ref) -> Ref:
    """Return the innermost `(name . value)` pair bound for `name`, or None."""
    while env is not None:
        frame = heap.first(env)
        while frame is not None:
            pair = heap.first(frame)
            if pair is not None and same_name(heap, name, heap.first(pair)):
                return pair
            frame = heap.second(frame)
        env = heap.second(env)
    return None


def lookup(heap: Heap, env: Ref, name: Ref) -> Ref:
    """Value bound to `name`; an unbound name yields None (absent)."""
    pair = find_pair(heap, env, name)
    return heap.second(pair) if pair is not None else None
