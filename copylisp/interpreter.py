from __future__ import annotations

import io
import sys
from dataclasses import replace
from typing import TextIO

from copylisp import NativeFn, Ref
from copylisp.builtin.env_builtin import register
from copylisp.config import Limits
from copylisp.evaluation.environment import new_env
from copylisp.evaluation.evaluator import evaluate
from copylisp.evaluation.special_forms import SPECIAL_FORMS
from copylisp.memory.interning import InternTable
from copylisp.memory.roots import Root, RootRegistry
from copylisp.memory.store import Heap
from copylisp.reader.parser import Reader
from copylisp.reader.printer import to_string
from copylisp.types.errors import EndOfInput, EvaluationError, ReadError
from copylisp.types.tags import Tag


class Interpreter:
    """
    One independent copylisp instance: intern table, root registry, object
    store and global environment. Nothing is shared between instances.

    The global environment and the canonical #t atom sit in root slots that
    stay registered for the lifetime of the interpreter.
    """

    def __init__(self, limits: Limits | None = None, out: TextIO | None = None, **overrides: int):
        # keyword overrides (heap_size=..., max_roots=..., max_scopes=...) win over `limits`
        self.limits = replace(limits if limits is not None else Limits(), **overrides)
        self.out: TextIO = out if out is not None else sys.stdout
        self.interns = InternTable()
        self.roots = RootRegistry(self.limits.max_roots, self.limits.max_scopes)
        self.heap = Heap(self.limits.heap_size, self.roots)
        self.special_forms = {self.interns.intern(name): form for name, form in SPECIAL_FORMS.items()}

        self.global_env = Root()
        self.true = Root()
        self.roots.push_scope(self.global_env, self.true)
        self.global_env.value = new_env(self.heap, None)
        self.true.value = self.atom("#t")
        register(self)

    # --- Allocation helpers ---
    def atom(self, text: str) -> int:
        return self.heap.allocate(Tag.ATOM, self.interns.intern(text))

    def number(self, n: int) -> int:
        return self.atom(str(n))

    def native(self, fn: NativeFn) -> int:
        return self.heap.allocate(Tag.NATIVE, fn)

    # --- Evaluation ---
    def eval(self, code: str) -> Ref:
        """Read and evaluate every expression in `code`; return the last value.

        The returned reference is only valid until the next allocation.
        """
        reader = Reader(self, io.StringIO(code))
        result = Root()
        with self.heap.protect(result):
            while True:
                try:
                    expr = reader.read()
                except EndOfInput:
                    return result.value
                result.value = evaluate(self, expr, self.global_env.value)

    def eval_to_string(self, code: str) -> str:
        return self.to_string(self.eval(code))

    def to_string(self, obj: Ref) -> str:
        return to_string(self.heap, obj)

    def run(self, stream: TextIO, echo: bool = False, err: TextIO | None = None) -> None:
        """Read-eval(-print) loop over `stream` until end of input.

        Read errors and evaluation errors are reported on `err` and the
        expression's value is taken as (). Fatal errors propagate.
        """
        err = err if err is not None else sys.stderr
        reader = Reader(self, stream)
        obj = Root()
        with self.heap.protect(obj):
            while True:
                try:
                    obj.value = reader.read()
                except EndOfInput:
                    return
                except ReadError as e:
                    print(f"Error: {e}", file=err)
                    obj.value = None
                try:
                    obj.value = evaluate(self, obj.value, self.global_env.value)
                except EvaluationError as e:
                    print(f"Error: {e}", file=err)
                    obj.value = None
                except RecursionError:
                    print("Error: recursion too deep", file=err)
                    obj.value = None
                if echo:
                    self.out.write(self.to_string(obj.value) + "\n")
                    self.out.flush()
