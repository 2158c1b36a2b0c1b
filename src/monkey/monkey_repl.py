import io
import json
import traceback

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


def handle_line(src: str, verbose: bool = False) -> None:
    """Parse one line of input and print either the rendered program or its errors."""
    parser = Parser.from_source(src)
    program = parser.parse_program()

    errors = parser.errors()
    if errors:
        print_parser_errors(errors)
        return

    print(program)
    if verbose:
        print(f"[ast] >>> {json.dumps(program.to_dict())}")


def start_repl(verbose: bool = False) -> None:
    print("Monkey REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = input(PROMPT).strip()
            if src in ("exit", "quit"):
                print("Exiting Monkey REPL.")
                return
            if not src or src.startswith("#"):
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            try:
                handle_line(src, verbose)
            except Exception:
                print_traceback()
        except (KeyboardInterrupt, EOFError):
            print("\nExiting Monkey REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
