"""Render heap values as Lisp text."""

from __future__ import annotations

from io import StringIO

from copylisp import Ref
from copylisp.memory.store import Heap
from copylisp.types.tags import Tag


def native_name(fn) -> str:
    return getattr(fn, "lisp_name", getattr(fn, "__name__", "?"))


def write(heap: Heap, obj: Ref, buffer: StringIO) -> None:
    if obj is None:
        buffer.write("()")
        return
    tag = heap.tag(obj)
    if tag is Tag.ATOM:
        buffer.write(heap.first(obj))
    elif tag is Tag.NATIVE:
        buffer.write(f"<builtin {native_name(heap.first(obj))}>")
    elif tag is Tag.CLOSURE:
        buffer.write("<lambda ")
        write(heap, heap.first(obj), buffer)
        buffer.write(">")
    else:
        buffer.write("(")
        while True:
            write(heap, heap.first(obj), buffer)
            rest = heap.second(obj)
            if rest is None:
                break
            buffer.write(" ")
            if heap.tag(rest) is not Tag.CONS:
                buffer.write(". ")
                write(heap, rest, buffer)
                break
            obj = rest
        buffer.write(")")


def to_string(heap: Heap, obj: Ref) -> str:
    with StringIO() as buffer:
        write(heap, obj, buffer)
        return buffer.getvalue()
