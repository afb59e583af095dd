import io
import traceback

from monkey.monkey_lexer import CharacterStream, Lexer
from monkey.monkey_parser import Parser

PROMPT = ">> "


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def print_parser_errors(errors: list[str]) -> None:
    print("[error] >>> parser errors:")
    for msg in errors:
        print(f"\t{msg}")


def start_repl(trace: bool = False) -> None:
    print("Monkey REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = input(PROMPT).strip()
        except EOFError:
            print()
            return
        if src in ("exit", "quit"):
            print("Exiting Monkey REPL.")
            return
        if not src:
            continue
        if src.lower() == "trace-mode":
            trace = not trace
            print(f"[mode] >>> Trace mode {'ON' if trace else 'OFF'}")
            continue

        try:
            parser = Parser(Lexer(CharacterStream(src)), trace=trace)
            program = parser.parse_program()
        except Exception:
            print_traceback()
            continue

        if parser.errors:
            print_parser_errors(parser.errors)
            continue
        print(program)
