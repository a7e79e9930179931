from copylisp import Ref


class TailCall:
    """Returned by a special form or application to have the evaluator loop
    continue with `expr` in `env` instead of recursing."""

    __slots__ = ("expr", "env")

    def __init__(self, expr: Ref, env: Ref):
        self.expr = expr
        self.env = env
