class CopyLispError(Exception):
    """ Base class for all copylisp errors"""
    pass


class FatalError(CopyLispError):
    """ Raised when the interpreter cannot continue; the process should stop"""
    pass


class HeapExhausted(FatalError):
    """ Raised when the object store is still full after a collection"""


class RootStackOverflow(FatalError):
    """ Raised when the root registry runs out of slots or scopes, or is popped while empty"""


class NoMatchingClause(FatalError):
    """ Raised when no clause of a cond form is true"""


class ReadError(CopyLispError):
    """ Raised when the reader meets malformed input"""


class EndOfInput(CopyLispError):
    """ Raised when the reader runs out of input; normal termination"""


class EvaluationError(CopyLispError):
    """ Base class for reported (non-fatal) evaluation errors"""


class LispTypeError(EvaluationError):
    """ Raised when a value of the wrong kind is used"""


class LispArityError(EvaluationError):
    """ Raised when a function receives the wrong number of arguments"""


class LispSyntaxError(EvaluationError):
    """ Raised when a special form or call has the wrong shape"""
