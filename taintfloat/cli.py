"""taintfloat CLI: evaluate an expression and explain any invalid result."""

from __future__ import annotations

import logging
import sys

from .calc import EvaluationError, calculate
from .errors import FloatError, NaNEncountered
from .parse import ParseError
from .tokens import TokenizeError


USAGE: str = """\
taintfloat [OPTIONS] [--] EXPR...

Evaluate an arithmetic expression with verified/unverified floats and print
the result. If the result is not a valid float, print why and exit 1.

Options:
  --f32        Use binary32 arithmetic (default binary64)
  --verbose    Log diagnostic registry activity to stderr
  --help       Show this help message

Environment:
  TAINTFLOAT_POLICY=bounded      Treat infinities as invalid
  TAINTFLOAT_DIAGNOSTICS=0       Release build: no operation diagnostics
"""


def setup_logging(level: int) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("taintfloat")
    if not root.handlers:
        root.addHandler(handler)
    root.setLevel(level)


def _is_number_start(c: str) -> bool:
    """A leading "-" followed by this starts a negative number, not a flag."""
    return c.isdigit() or c == "."


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    parts: list[str] = []
    f32 = False
    verbose = False
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--":
            parts.extend(args[i + 1 :])
            break
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg == "--f32":
            f32 = True
        elif arg == "--verbose" or arg == "-v":
            verbose = True
        elif arg.startswith("-") and len(arg) > 1 and not _is_number_start(arg[1]):
            print("taintfloat: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        else:
            parts.append(arg)
        i += 1
    source = " ".join(parts).strip()
    if source == "":
        print("taintfloat: missing expression", file=sys.stderr)
        return 2

    if verbose:
        setup_logging(logging.DEBUG)

    try:
        value = calculate(source, f32=f32)
    except (TokenizeError, ParseError) as e:
        print("taintfloat: parse error: " + str(e), file=sys.stderr)
        return 1
    except EvaluationError as e:
        print("taintfloat: error: " + str(e), file=sys.stderr)
        return 1
    except NaNEncountered as e:
        reason = e.record.describe() if e.record is not None else e.msg
        print("taintfloat: invalid result: " + reason, file=sys.stderr)
        return 1
    except FloatError as e:
        print("taintfloat: invalid result: " + e.msg, file=sys.stderr)
        return 1

    print(value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
