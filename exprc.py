#!/usr/bin/env python3
"""exprc - top-level CLI wrapper

Usage examples:
  ./exprc.py "9000 + (6 * 4)"
  ./exprc.py -f expressions.txt --continue-temps
  echo "2 * 3 + 4" | ./exprc.py
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from exprc.ast_nodes import dump_ast
from exprc.compiler import Compiler


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(format="{levelname}: {name}: {message}", style="{")
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    ap = argparse.ArgumentParser(prog="exprc", description="Arithmetic expression compiler")
    ap.add_argument("expression", nargs="*", help="Expression(s) to compile")
    ap.add_argument("-f", dest="file", help="Read expressions from a file, one per line")
    ap.add_argument("--continue-temps", action="store_true",
                    help="Keep numbering temporaries across expressions")
    ap.add_argument("--no-ir", action="store_true", help="Print only the results")
    ap.add_argument("--dump-ast", action="store_true", help="Print the syntax tree of each expression")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    setup_logging(args.verbose)

    if args.expression and args.file:
        print("Error: give expressions or -f, not both")
        return 1

    compiler = Compiler(continue_temps=args.continue_temps)
    if args.expression:
        results = compiler.compile_lines(args.expression)
    elif args.file:
        results = compiler.compile_file(args.file)
    else:
        try:
            text = sys.stdin.read()
        except UnicodeDecodeError as e:
            print(f"Error: cannot read standard input: {e}")
            return 1
        results = compiler.compile_lines(text.splitlines())

    status = 0
    for result in results:
        if args.dump_ast and result.ast is not None:
            print(dump_ast(result.ast))
        if not args.no_ir:
            for ins in result.instructions:
                print(ins)
        if not result.success:
            for e in result.errors:
                print("Error:", e)
            status = 1
            continue
        print(result.value)
    return status


if __name__ == "__main__":
    raise SystemExit(main())
