# Core type aliases for the copylisp data model.
# Every Lisp value lives in the managed object store; Python code only ever
# holds a reference to it, never the object itself.
#
# Naming guidance:
# - Ref:  an index into the object store, or None for the empty list (absent).
#   A Ref held in a plain local is only valid until the next allocation; keep
#   it in a registered Root slot if it must survive one.
# - NativeFn: the Python side of a builtin, called with the interpreter and
#   the (already evaluated) argument list.

from typing import Any, Callable, Optional

Ref = Optional[int]

NativeFn = Callable[[Any, Ref], Ref]
