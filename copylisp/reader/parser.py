"""
  Lisp Reader: lexer and parser producing cons cells in the object store.

- Streaming: characters are pulled from a text stream one at a time, so an
  interactive stream is never read past the end of the current expression.
- Tokens are "(", ")", and atoms: runs of printable ASCII from '!' to '\''
  and from '*' to '~'. Whitespace separates tokens; any other character is
  reported as an error token.
- Lists become cons chains ending in None; `(a b . c)` ends in the atom c.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Optional, TextIO

from copylisp import Ref
from copylisp.memory.roots import Root
from copylisp.types.errors import EndOfInput, ReadError
from copylisp.types.lists import reverse

if TYPE_CHECKING:
    from copylisp.interpreter import Interpreter


def is_atom_char(ch: str) -> bool:
    return "!" <= ch <= "'" or "*" <= ch <= "~"


def lex(stream: TextIO) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    ch = stream.read(1)
    while ch:
        if ch.isspace():
            ch = stream.read(1)
        elif ch == "(":
            yield "lparen", ch
            ch = stream.read(1)
        elif ch == ")":
            yield "rparen", ch
            ch = stream.read(1)
        elif is_atom_char(ch):
            chars = []
            while ch and is_atom_char(ch):
                chars.append(ch)
                ch = stream.read(1)
            yield "atom", "".join(chars)
        else:
            yield "error", ch
            ch = stream.read(1)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        return next(self.tokens, (None, None))


class Reader:
    """Reads one expression at a time from a text stream into the heap."""

    def __init__(self, interp: Interpreter, stream: TextIO):
        self.interp = interp
        self.heap = interp.heap
        self.tokens = TokenStream(lex(stream))

    def _next(self) -> tuple[str, str]:
        tok_type, tok_val = self.tokens.advance()
        if tok_type is None:
            raise EndOfInput()
        return tok_type, tok_val

    def read(self) -> Ref:
        """Read the next expression.

        Raises EndOfInput when the stream is exhausted (also mid-expression),
        and ReadError for a stray ')' or a malformed dotted form.
        """
        tok_type, tok_val = self._next()
        if tok_type == "rparen":
            raise ReadError("Unexpected )")
        return self._read_datum(tok_type, tok_val)

    def _read_datum(self, tok_type: str, tok_val: str) -> Ref:
        if tok_type == "atom":
            return self.interp.atom(tok_val)
        if tok_type == "lparen":
            return self._read_list()
        if tok_type == "rparen":
            raise ReadError("Unexpected )")
        raise ReadError(f"Unexpected character {tok_val!r}")

    def _read_list(self) -> Ref:
        # elements are consed in reverse, then reversed in place onto the tail
        heap = self.heap
        acc, tail = Root(), Root()
        with heap.protect(acc, tail):
            while True:
                tok_type, tok_val = self._next()
                if tok_type == "rparen":
                    break
                if tok_type == "atom" and tok_val == "." and acc.value is not None:
                    tok_type, tok_val = self._next()
                    if tok_type == "rparen":
                        raise ReadError("Malformed dotted cons")
                    tail.value = self._read_datum(tok_type, tok_val)
                    if self._next()[0] != "rparen":
                        raise ReadError("Malformed dotted cons")
                    break
                value = self._read_datum(tok_type, tok_val)
                acc.value = heap.cons(value, acc.value)
            return reverse(heap, acc.value, tail.value)
