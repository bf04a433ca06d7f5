#!/usr/bin/env python3
"""minilang/main.py - CLI entry-point for the MiniLang front end.

Usage examples
--------------
    # Tokenize, parse and type-check a program
    python -m minilang check program.mini

    # Same, machine-readable diagnostics
    python -m minilang check program.mini --format json

    # Print the token stream
    python -m minilang tokens program.mini

    # Parse a program and pretty-print the AST
    python -m minilang parse program.mini --format tree

    # Show version and exit
    python -m minilang --version

Exit codes
----------
    0   Success (semantically correct).
    1   One or more semantic diagnostics were reported.
    2   Infrastructure failure (missing or unreadable file, etc.).
    3   Lexical or syntax error.

The module doubles as ``python -m minilang`` via the companion
``minilang/__main__.py`` which simply calls :func:`main`.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import textwrap
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from minilang import __version__
from minilang.config import FrontendConfig
from minilang.errors import MinilangError, SemanticError
from minilang.frontend import check_source
from minilang.lexer import tokenize
from minilang.parser import parse
from minilang.printer import ast_to_dict, format_ast
from minilang.semantic import SemanticDiagnostic

_log = logging.getLogger("minilang")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2
EXIT_SYNTAX: int = 3


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``minilang`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("minilang")
    # main() may run more than once per process (tests, embedding)
    for old in list(root.handlers):
        root.removeHandler(old)
    root.setLevel(level)
    root.addHandler(handler)


def _read_source(raw: str) -> str:
    """Read the source file at *raw*, exiting with EXIT_INFRA on failure."""
    p = Path(raw).expanduser()
    try:
        return p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _log.error("Cannot read source file %s: %s", p, exc)
        raise SystemExit(EXIT_INFRA)


def _report_error(exc: MinilangError, fmt: str, stream: TextIO) -> None:
    if fmt == "json":
        stream.write(json.dumps(exc.to_json()) + "\n")
    else:
        stream.write(exc.to_gcc_format() + "\n")


def _emit_diagnostics(
    diagnostics: Sequence[SemanticDiagnostic],
    fmt: str,
    stream: TextIO,
) -> int:
    """Write *diagnostics* to *stream* in the chosen format.

    Returns the number of diagnostics written.
    """
    for diag in diagnostics:
        if fmt == "json":
            stream.write(json.dumps(diag.to_dict()) + "\n")
        else:
            stream.write(diag.to_gcc_format() + "\n")

    if fmt == "gcc":
        stream.write(f"\n--- {len(diagnostics)} semantic error(s) ---\n")
    return len(diagnostics)


# ===========================================================================
# Sub-command implementations
# ===========================================================================

def cmd_check(args: argparse.Namespace) -> int:
    """Run the full pipeline and report the verdict."""
    source = _read_source(args.source_file)
    config = FrontendConfig(filename=args.source_file, fail_fast=args.fail_fast)

    try:
        result = check_source(source, config)
    except SemanticError as exc:
        _report_error(exc, args.format, sys.stdout)
        return EXIT_ERROR
    except MinilangError as exc:
        _report_error(exc, args.format, sys.stdout)
        return EXIT_SYNTAX

    if result.valid:
        if args.format == "json":
            sys.stdout.write(json.dumps({"valid": True, "diagnostics": []}) + "\n")
        else:
            sys.stdout.write(f"{args.source_file}: semantically correct\n")
        return EXIT_OK

    _emit_diagnostics(result.semantic.diagnostics, args.format, sys.stdout)
    return EXIT_ERROR


def cmd_tokens(args: argparse.Namespace) -> int:
    """Print one token per line."""
    source = _read_source(args.source_file)
    try:
        tokens = tokenize(source, args.source_file)
    except MinilangError as exc:
        _report_error(exc, "gcc", sys.stdout)
        return EXIT_SYNTAX

    for tok in tokens:
        sys.stdout.write(f"{tok.line}:{tok.column}\t{tok.kind.name}\t{tok.lexeme}\n")
    return EXIT_OK


def cmd_parse(args: argparse.Namespace) -> int:
    """Parse a source file and pretty-print its AST."""
    source = _read_source(args.source_file)
    try:
        program = parse(tokenize(source, args.source_file), args.source_file)
    except MinilangError as exc:
        exc.with_source(source)
        _report_error(exc, "json" if args.format == "json" else "gcc", sys.stdout)
        return EXIT_SYNTAX

    try:
        if args.format == "json":
            rendered = json.dumps(ast_to_dict(program, with_locations=args.locations), indent=2)
        else:
            rendered = format_ast(program)
    except RecursionError:
        _log.error("AST of %s is nested too deeply to print", args.source_file)
        return EXIT_INFRA

    sys.stdout.write(rendered + "\n")
    return EXIT_OK


# ===========================================================================
# Argument parser
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minilang",
        description="MiniLang front end: tokenizer, parser and semantic checker.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              minilang check  program.mini
              minilang tokens program.mini
              minilang parse  program.mini --format json
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    def _add_source_arg(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "source_file",
            metavar="SOURCE",
            help="MiniLang source file.",
        )

    # --- check -------------------------------------------------------------
    p_check = subparsers.add_parser(
        "check",
        help="Tokenize, parse and type-check a program.",
        description=(
            "Run the full front end. Prints 'semantically correct' or the "
            "list of semantic diagnostics."
        ),
    )
    _add_source_arg(p_check)
    p_check.add_argument(
        "-f", "--format",
        choices=["gcc", "json"],
        default="gcc",
        help="Output format (default: gcc).",
    )
    p_check.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first semantic error.",
    )
    p_check.set_defaults(func=cmd_check)

    # --- tokens ------------------------------------------------------------
    p_tokens = subparsers.add_parser(
        "tokens",
        help="Print the token stream.",
    )
    _add_source_arg(p_tokens)
    p_tokens.set_defaults(func=cmd_tokens)

    # --- parse -------------------------------------------------------------
    p_parse = subparsers.add_parser(
        "parse",
        help="Parse a program and dump the AST.",
    )
    _add_source_arg(p_parse)
    p_parse.add_argument(
        "-f", "--format",
        choices=["tree", "json"],
        default="tree",
        help="AST output format (default: tree).",
    )
    p_parse.add_argument(
        "--locations",
        action="store_true",
        help="Include line/column of every node in JSON output.",
    )
    p_parse.set_defaults(func=cmd_parse)

    return parser


# ===========================================================================
# Main entry point
# ===========================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Run the MiniLang CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code (see module docstring for semantics).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    # No subcommand given → print help.
    if not hasattr(args, "func"):
        parser.print_help(sys.stderr)
        return EXIT_INFRA

    try:
        return args.func(args)
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_INFRA


if __name__ == "__main__":
    raise SystemExit(main())
