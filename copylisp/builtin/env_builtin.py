"""Built-in functions for the copylisp runtime environment.

Every builtin receives the interpreter and its already-evaluated argument
list (a cons list in the heap) and returns a heap reference. Builtins read
everything they need from the argument list before allocating.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from copylisp import NativeFn, Ref
from copylisp.evaluation.environment import define
from copylisp.evaluation.evaluator import is_number
from copylisp.memory.roots import Root
from copylisp.memory.store import Heap
from copylisp.reader.printer import to_string
from copylisp.types import lists
from copylisp.types.errors import LispArityError, LispTypeError
from copylisp.types.tags import Tag

if TYPE_CHECKING:
    from copylisp.interpreter import Interpreter

BUILTINS: dict[str, NativeFn] = {}


def builtin(name: str) -> Callable[[NativeFn], NativeFn]:
    """Register the decorated function under the Lisp name `name`."""
    def decorate(fn: NativeFn) -> NativeFn:
        fn.lisp_name = name
        BUILTINS[name] = fn
        return fn
    return decorate


def _arg(heap: Heap, args: Ref, index: int, name: str) -> Ref:
    for _ in range(index):
        if args is None:
            break
        args = heap.second(args)
    if args is None:
        raise LispArityError(f"{name} requires at least {index + 1} argument(s)")
    return heap.first(args)


def _pair_arg(heap: Heap, args: Ref, name: str) -> int:
    value = _arg(heap, args, 0, name)
    if not heap.is_pair(value):
        raise LispTypeError(f"{name} expects a pair, got {to_string(heap, value)}")
    return value


def _integers(heap: Heap, args: Ref, name: str) -> list[int]:
    values = []
    for value in lists.items(heap, args):
        if not heap.is_atom(value) or not is_number(heap.first(value)):
            raise LispTypeError(f"All arguments to {name} must be integers, got {to_string(heap, value)}")
        values.append(int(heap.first(value)))
    return values


def is_equal(heap: Heap, a: Ref, b: Ref) -> bool:
    """Structural equality: atoms by interned text, pairs component-wise,
    builtins by function and closures by identity."""
    while True:
        if a == b:
            return True
        if a is None or b is None or heap.tag(a) is not heap.tag(b):
            return False
        if heap.tag(a) is Tag.ATOM:
            return heap.first(a) is heap.first(b)
        if heap.tag(a) is Tag.NATIVE:
            return heap.first(a) == heap.first(b)
        if heap.tag(a) is not Tag.CONS:
            # distinct closures are unequal even when built from one form
            return False
        if not is_equal(heap, heap.first(a), heap.first(b)):
            return False
        a, b = heap.second(a), heap.second(b)


# -------------------------------
# Pairs and lists
# -------------------------------
@builtin("car")
def car(interp: Interpreter, args: Ref) -> Ref:
    return interp.heap.first(_pair_arg(interp.heap, args, "car"))


@builtin("cdr")
def cdr(interp: Interpreter, args: Ref) -> Ref:
    return interp.heap.second(_pair_arg(interp.heap, args, "cdr"))


@builtin("cons")
def cons(interp: Interpreter, args: Ref) -> Ref:
    heap = interp.heap
    head = _arg(heap, args, 0, "cons")
    tail = _arg(heap, args, 1, "cons")
    return heap.cons(head, tail)


@builtin("list")
def list_builtin(interp: Interpreter, args: Ref) -> Ref:
    return args


# -------------------------------
# Predicates
# -------------------------------
@builtin("equal?")
def equal(interp: Interpreter, args: Ref) -> Ref:
    """Return #t if all arguments are structurally equal (or zero/one arg), else ()."""
    heap = interp.heap
    if args is None:
        return interp.true.value
    first = heap.first(args)
    for other in lists.items(heap, heap.second(args)):
        if not is_equal(heap, first, other):
            return None
    return interp.true.value


@builtin("pair?")
def is_pair(interp: Interpreter, args: Ref) -> Ref:
    heap = interp.heap
    return interp.true.value if heap.is_pair(_arg(heap, args, 0, "pair?")) else None


@builtin("null?")
def is_null(interp: Interpreter, args: Ref) -> Ref:
    return interp.true.value if _arg(interp.heap, args, 0, "null?") is None else None


# -------------------------------
# Arithmetic
# -------------------------------
@builtin("+")
def add(interp: Interpreter, args: Ref) -> Ref:
    return interp.number(sum(_integers(interp.heap, args, "+")))


@builtin("-")
def sub(interp: Interpreter, args: Ref) -> Ref:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    values = _integers(interp.heap, args, "-")
    if not values:
        raise LispArityError("- requires at least 1 argument")
    if len(values) == 1:
        return interp.number(-values[0])
    result = values[0]
    for x in values[1:]:
        result -= x
    return interp.number(result)


@builtin("*")
def mul(interp: Interpreter, args: Ref) -> Ref:
    result = 1
    for x in _integers(interp.heap, args, "*"):
        result *= x
    return interp.number(result)


# -------------------------------
# Output
# -------------------------------
@builtin("display")
def display(interp: Interpreter, args: Ref) -> Ref:
    interp.out.write(to_string(interp.heap, _arg(interp.heap, args, 0, "display")))
    return None


@builtin("newline")
def newline(interp: Interpreter, args: Ref) -> Ref:
    interp.out.write("\n")
    return None


def register(interp: Interpreter) -> None:
    """Bind every builtin, plus #t and #f, in the interpreter's global environment."""
    heap = interp.heap
    define(heap, interp.global_env.value, interp.true.value, interp.true.value)
    key = Root()
    with heap.protect(key):
        key.value = interp.atom("#f")
        define(heap, interp.global_env.value, key.value, None)
        for name, fn in BUILTINS.items():
            key.value = interp.atom(name)
            value = interp.native(fn)
            define(heap, interp.global_env.value, key.value, value)
