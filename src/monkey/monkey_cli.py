"""
Monkey CLI Entrypoint.

This module provides the command-line interface for parsing Monkey source code.

Features:
    - Read source from `.monkey` files or inline strings.
    - Lex and parse the code, reporting every parser diagnostic.
    - Render the resulting tree as source-like text or JSON.
    - Output to console or file.
    - Launch an interactive REPL.

Example usage:
    monkey hello.monkey
    monkey -s "let x = 1 + 2 * 3;"
    monkey myfile.monkey -f json -o myfile.json
    monkey --repl --verbose

Functions:
    run_monkey(source: str, is_string: bool = False, fmt: str = "text", out: str | None = None,
               pretty: bool = False) -> None:
        Executes the full pipeline (read → lex → parse → render → output).

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import json
import logging
import sys

from monkey.monkey_ast import Program
from monkey.monkey_parser import ParseError, Parser

logger = logging.getLogger(__name__)


def render(program: Program, fmt: str = "text") -> str:
    if fmt == "json":
        return json.dumps(program.to_dict(), indent=2)
    return str(program)


def run_monkey(
    source: str,
    is_string: bool = False,
    fmt: str = "text",
    out: str | None = None,
    pretty: bool = False,
) -> None:
    """
    Run the Monkey toolchain: read, lex, parse, and render or write the tree.

    Args:
        source (str): The Monkey source code or path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        fmt (str): Output format, 'text' or 'json'. Defaults to 'text'.
        out (str | None): Optional path to write the output. If None, prints to stdout.
        pretty (bool): If True, prints banners around the output.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey'.
        ParseError: If the parser recorded any diagnostics.
    """
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    # 1. Read source
    if not is_string:
        logger.debug("reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lexing + parsing
    parser = Parser.from_source(source)
    program = parser.parse_program()
    parser.check_errors()

    # 3. Rendering
    code = render(program, fmt)

    # 4. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(code)
        if pretty:
            print(f"(wrote to {out})")
    elif pretty:
        banner = "=" * 20
        print(f"{banner}\nParsed program\n{banner}\n{code}\n{banner}\n")
    else:
        print(code)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing a source",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Debug logging and verbose REPL mode"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the Monkey CLI.

    Launches the REPL if no arguments are passed or `--repl` is given, otherwise runs
    the parse pipeline. Returns the process exit status: 0 on success, 1 when the
    parser reported diagnostics or the source could not be read.
    """
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.repl or args.source is None:
        from monkey.monkey_repl import start_repl

        start_repl(verbose=args.verbose)
        return 0

    try:
        run_monkey(
            source=args.source,
            is_string=args.string,
            fmt=args.fmt,
            out=args.out,
            pretty=args.pretty,
        )
    except ParseError as e:
        print("[error] >>>", file=sys.stderr)
        for msg in e.errors:
            print(f"\t{msg}", file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
