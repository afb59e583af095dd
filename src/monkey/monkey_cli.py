"""
Monkey CLI Entrypoint.

Parses Monkey source and prints the resulting syntax tree.

Features:
    - Read source from `.monkey` files or inline strings.
    - Lex and parse the source, collecting parser errors.
    - Print the program as fully parenthesized source text, or as JSON.
    - Optionally trace the expression parser.
    - Launch an interactive REPL.

Example usage:
    monkey program.monkey
    monkey -s "1 + 2 * 3;"
    monkey -s "let x = 5; x * 2" --json
    monkey --repl --trace

Functions:
    run_monkey(source: str, is_string: bool = False, as_json: bool = False, trace: bool = False) -> int:
        Executes the lex → parse → print pipeline and returns an exit status.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import json
import sys

from monkey.monkey_lexer import CharacterStream, Lexer
from monkey.monkey_parser import ParseError, Parser


def run_monkey(
    source: str,
    is_string: bool = False,
    as_json: bool = False,
    trace: bool = False,
) -> int:
    """
    Run the Monkey front end: read, lex, parse, and print the program.

    Args:
        source (str): The Monkey source code or path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        as_json (bool): If True, prints the AST as indented JSON instead of source text.
        trace (bool): If True, prints the parser's BEGIN/END trace while parsing.

    Returns:
        int: 0 when the source parsed cleanly, 1 when parser errors were reported.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey'.
    """
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    parser = Parser(Lexer(CharacterStream(source)), trace=trace)
    program = parser.parse_program()

    try:
        parser.check_errors()
    except ParseError as e:
        print("[error] >>> parser errors:", file=sys.stderr)
        for msg in e.errors:
            print(f"\t{msg}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps(program.to_dict(), indent=2))
    else:
        print(program)
    return 0


def main() -> None:
    """
    Entry point for the Monkey CLI.

    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise parses the given file or string and exits with `run_monkey`'s status.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--json`: Print the AST as JSON.
        - `--trace`: Print the expression parser trace.
        - `--repl`: Launch the interactive REPL.
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
    parser.add_argument(
        "--json", dest="as_json", action="store_true", help="Print the AST as JSON"
    )
    parser.add_argument(
        "--trace", action="store_true", help="Trace expression parsing"
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch interactive REPL instead of parsing"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from monkey.monkey_repl import start_repl

        start_repl(trace=args.trace)
    else:
        sys.exit(
            run_monkey(
                source=args.source,
                is_string=args.string,
                as_json=args.as_json,
                trace=args.trace,
            )
        )


if __name__ == "__main__":
    main()
