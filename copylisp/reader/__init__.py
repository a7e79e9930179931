from copylisp.reader.parser import Reader, TokenStream, lex
from copylisp.reader.printer import to_string

__all__ = ["Reader", "TokenStream", "lex", "to_string"]
