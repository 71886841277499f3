"""
Command line entry point: ``yali [script]``.

With a script path, tokenizes the file and prints its tokens. Without one,
starts an interactive prompt that tokenizes each line as it is entered.
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .lexer import Diagnostic, Token, scan

logger = logging.getLogger(__name__)

# sysexits.h
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66

PROMPT = "> "


def format_token(token: Token) -> str:
    if token.value is not None:
        return f"{token.type.name:<14} {token.lexeme!r:<16} {token.value!r:<12} (line {token.line})"
    return f"{token.type.name:<14} {token.lexeme!r:<16} {'':<12} (line {token.line})"


def report(diagnostics: List[Diagnostic], stream: TextIO) -> None:
    for diagnostic in diagnostics:
        print(diagnostic.report(), file=stream)


def run(source: str, filename: str, out: TextIO, err: TextIO) -> bool:
    """Tokenize ``source`` and print the result. Returns False on lexical errors."""
    tokens, diagnostics = scan(source, filename)
    for token in tokens:
        print(format_token(token), file=out)
    report(diagnostics, err)
    return not diagnostics


def run_file(path: str, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    err = err or sys.stderr
    try:
        with open(path, "r", encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        print(f"yali: cannot read {path}: {e.strerror or e}", file=err)
        return EX_NOINPUT
    except UnicodeDecodeError as e:
        print(f"yali: cannot decode {path}: {e.reason} at byte {e.start}", file=err)
        return EX_DATAERR

    logger.debug("Running %s (%d chars)", path, len(source))
    return 0 if run(source, path, out, err) else EX_DATAERR


def run_prompt(
    stdin: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None
) -> int:
    """Read-eval-print loop; errors on one line don't end the session."""
    stdin = stdin or sys.stdin
    out = out or sys.stdout
    err = err or sys.stderr
    while True:
        print(PROMPT, end="", file=out, flush=True)
        line = stdin.readline()
        if not line:
            print(file=out)
            return 0
        run(line.rstrip("\r\n"), "<stdin>", out, err)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yali",
        description="Tokenize a yali script, or start an interactive prompt.",
    )
    parser.add_argument("script", nargs="*", help="path to a yali source file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if len(args.script) > 1:
        print("Usage: yali [script]")
        return EX_USAGE
    if args.script:
        return run_file(args.script[0])
    return run_prompt()


if __name__ == "__main__":
    raise SystemExit(main())
