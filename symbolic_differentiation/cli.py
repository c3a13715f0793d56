"""
Symbolic Differentiation - Command Line Interface

Usage:
    symdiff --eval "expr" x=val y=val ...
    symdiff --diff "expr" --by var [--latex]
    python -m symbolic_differentiation --eval "2*x" x=10
"""

import sys
import argparse
from typing import Dict, List, Optional

from .errors import ExpressionError
from .logging_system import LogLevel, configure_logging, log_debug, log_info, log_milestone

# Options whose value is an expression and may start with '-'
EXPRESSION_OPTIONS = ('--eval', '--diff')


def parse_bindings(tokens: List[str]) -> Dict[str, float]:
    """Collect NAME=VALUE tokens into a name -> value mapping"""
    bindings = {}
    for token in tokens:
        name, sep, value = token.partition('=')
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Expected NAME=VALUE, got {token!r}")
        try:
            bindings[name] = float(value)
        except ValueError:
            raise ValueError(f"Invalid value for {name}: {value!r}") from None
    return bindings


def join_expression_options(argv: List[str]) -> List[str]:
    """Attach the value of --eval/--diff with '=' so argparse accepts '-x^2'"""
    joined = []
    i = 0
    while i < len(argv):
        token = argv[i]
        if token in EXPRESSION_OPTIONS and i + 1 < len(argv):
            joined.append(f"{token}={argv[i + 1]}")
            i += 2
        else:
            joined.append(token)
            i += 1
    return joined


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symdiff",
        description="Evaluate or symbolically differentiate an infix expression",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--eval", dest="eval_expr", metavar="EXPR",
                      help="Expression to evaluate")
    mode.add_argument("--diff", dest="diff_expr", metavar="EXPR",
                      help="Expression to differentiate")
    parser.add_argument("--by", metavar="VAR",
                        help="Variable to differentiate with respect to")
    parser.add_argument("--latex", action="store_true",
                        help="Print the derivative as LaTeX")
    parser.add_argument("bindings", nargs="*", metavar="NAME=VALUE",
                        help="Variable values used by --eval")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true",
                           help="Trace parsing and evaluation on stderr")
    verbosity.add_argument("-q", "--quiet", action="store_true",
                           help="Suppress warnings")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(join_expression_options(list(argv)))
    if args.eval_expr is not None and args.by is not None:
        parser.error("--by only applies to --diff")
    if args.diff_expr is not None and args.bindings:
        parser.error("NAME=VALUE bindings only apply to --eval")
    if args.eval_expr is not None and args.latex:
        parser.error("--latex only applies to --diff")

    if args.verbose:
        configure_logging(LogLevel.VERBOSE)
    elif args.quiet:
        configure_logging(LogLevel.SILENT)
    else:
        configure_logging(LogLevel.MINIMAL)

    from .expression_tree import Expression

    try:
        if args.eval_expr is not None:
            bindings = parse_bindings(args.bindings)
            expr = Expression.parse(args.eval_expr)
            log_milestone(f"Parsed {expr}")
            log_info(f"Bindings: {bindings}")
            result = expr.evaluate(bindings)
            print(result)
        else:
            if not args.by:
                print("Error: must specify --by var", file=sys.stderr)
                return 1
            expr = Expression.parse(args.diff_expr)
            log_milestone(f"Parsed {expr}")
            derivative = expr.differentiate(args.by)
            log_debug(f"derivative has {derivative.size()} nodes")
            print(derivative.to_latex() if args.latex else derivative.to_string())
    except (ExpressionError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
