"""
Monkey CLI Entrypoint.

This module provides the command-line interface for running Monkey source code.

Features:
    - Read source from `.monkey` files or inline strings.
    - Dump the token stream (`--tokens`) or the canonical parse (`--ast`).
    - Evaluate the program and print the resulting value.
    - Launch the interactive REPL.

Example usage:
    monkey hello.monkey
    monkey -s "let x = 2; x * 21"
    monkey -s "a + b * c" --ast
    monkey --repl --verbose

Exit status is 0 on success and 1 when the program has syntax errors or
evaluates to an error value. Diagnostics go to stderr.

Functions:
    run_monkey(source, is_string=False, tokens=False, ast=False) -> int:
        Executes the Monkey pipeline (lex → parse → evaluate → print).

    print_supported_parsing_info() -> None:
        Shows lexer and parser output for a set of sample programs.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action.
"""

import argparse
import logging
import sys

from monkey.monkey_environment import Environment
from monkey.monkey_evaluator import evaluate
from monkey.monkey_lexer import tokenize
from monkey.monkey_object import Error
from monkey.monkey_parser import parse

SUPPORTED_SAMPLES = {
    "functions": [
        "fn () {}",
        "fn () { x }",
        "fn (x) {}",
        "fn (x, y) { x + 1 }",
        "let add = fn(x, y) { x + y }",
    ],
    "if expressions": [
        "if (x) {}",
        "if (true) { x + 1 } else { x - 1 }",
    ],
}


def stringify_tokens(source: str) -> str:
    return ", ".join(str(tok) for tok in tokenize(source))


def run_monkey(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    ast: bool = False,
) -> int:
    """
    Run the Monkey pipeline on a file or an inline string.

    Args:
        source (str): Monkey source code, or a path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        tokens (bool): Print the token stream instead of evaluating.
        ast (bool): Print the canonical render of the parsed program instead of evaluating.

    Returns:
        int: Process exit status.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey'.
    """
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    if tokens:
        print(stringify_tokens(source))
        return 0

    program, errors = parse(source)
    if errors:
        for err in errors:
            print(f"[parse error] {err}", file=sys.stderr)
        return 1

    if ast:
        print(program)
        return 0

    result = evaluate(program, Environment())
    if isinstance(result, Error):
        print(f"[error] {result.inspect()}", file=sys.stderr)
        return 1
    print(result.inspect())
    return 0


def print_supported_parsing_info() -> None:
    for samples in SUPPORTED_SAMPLES.values():
        for sample in samples:
            program, _ = parse(sample)
            print(f"INPUT: {sample}")
            print(f"PARSER: {program}")
            print(f"TOKENIZER: {stringify_tokens(sample)}")
            print()


def main() -> None:
    """
    Entry point for the Monkey CLI.

    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise runs `run_monkey` on the given source and exits with its status.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens`: Print the token stream.
        - `--ast`: Print the canonical, fully-parenthesized program.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Debug logging, and verbose REPL mode.
        - `--supported-parsing-info`: Show parser output for sample programs.
    """
    if len(sys.argv) == 1:
        from monkey.monkey_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument("--tokens", action="store_true", help="Print the token stream")
    parser.add_argument(
        "--ast", action="store_true", help="Print the parsed program in canonical form"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of running a program",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Debug logging; verbose REPL mode"
    )
    parser.add_argument(
        "--supported-parsing-info",
        action="store_true",
        help="Print lexer and parser output for sample programs",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr
        )

    if args.supported_parsing_info:
        print_supported_parsing_info()
        if args.source is None and not args.repl:
            return

    if args.repl or args.source is None:
        from monkey.monkey_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    status = run_monkey(
        source=args.source,
        is_string=args.string,
        tokens=args.tokens,
        ast=args.ast,
    )
    if status:
        sys.exit(status)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
