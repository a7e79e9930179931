"""Program entry: `copylisp [FILE]`.

Reads expressions from FILE, or from standard input when no file is given,
and evaluates them in order. Results are echoed only for standard input.
"""

from __future__ import annotations

import argparse
import logging
import sys

from copylisp.interpreter import Interpreter
from copylisp.types.errors import FatalError


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    parser = argparse.ArgumentParser(prog="copylisp", description="Evaluate copylisp expressions.")
    parser.add_argument("file", nargs="?", help="source file (default: standard input)")
    args = parser.parse_args(argv)

    interp = Interpreter()
    try:
        if args.file:
            with open(args.file, encoding="utf-8") as stream:
                interp.run(stream)
        else:
            interp.run(sys.stdin, echo=True)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except FatalError as e:
        print(f"Fatal: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
