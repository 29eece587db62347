"""Command-line interface for the VSL front-end."""

from __future__ import annotations

import argparse
import io
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from vsl.debug import dump_ast, dump_tokens
from vsl.lexer import Lexer, tokenize
from vsl.parser import Failed, Parser

DEFAULT_PROMPT = "ready> "
DEFAULT_INDENT = "  "


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None  # None reads standard input
    output_file: Path | None
    lenient_params: bool
    indent: str
    prompt: str | None  # None disables prompting
    tokens: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="vsl",
        description="Parse VSL source and dump the syntax tree",
    )
    p.add_argument("input", nargs="?", default="-", help="Input .vsl file (default: stdin)")
    p.add_argument("-o", "--output", help="Output file for tree dumps (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover vsl.toml)",
    )
    p.add_argument(
        "--lenient-params",
        action="store_true",
        default=None,
        help="Accept identifiers and commas in any order in parameter lists",
    )
    p.add_argument("--indent", metavar="STR", help="Indentation unit for tree dumps")
    p.add_argument(
        "--prompt",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print a prompt before each construct (default: when stdin is a terminal)",
    )
    p.add_argument("--tokens", action="store_true", help="Dump the token stream instead of parsing")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "vsl.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    if args.input == "-":
        input_file = None
        input_dir = Path(".")
    else:
        input_file = Path(args.input)
        input_dir = input_file.parent
        if not input_dir.parts:
            input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    # Parameter list grammar: config < CLI
    lenient_params = False
    cfg_parser = config.get("parser")
    if isinstance(cfg_parser, dict):
        cfg_lenient = cfg_parser.get("lenient-params")
        if isinstance(cfg_lenient, bool):
            lenient_params = cfg_lenient
    if args.lenient_params is not None:
        lenient_params = args.lenient_params

    # Dump indentation: config < CLI
    indent = DEFAULT_INDENT
    cfg_dump = config.get("dump")
    if isinstance(cfg_dump, dict):
        cfg_indent = cfg_dump.get("indent")
        if isinstance(cfg_indent, str):
            indent = cfg_indent
    if args.indent is not None:
        indent = args.indent

    # Prompt text comes from config only; whether to show it from CLI or the terminal
    prompt_text = DEFAULT_PROMPT
    cfg_repl = config.get("repl")
    if isinstance(cfg_repl, dict):
        cfg_prompt = cfg_repl.get("prompt")
        if isinstance(cfg_prompt, str):
            prompt_text = cfg_prompt
    show_prompt = args.prompt
    if show_prompt is None:
        show_prompt = input_file is None and sys.stdin.isatty()

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        lenient_params=lenient_params,
        indent=indent,
        prompt=prompt_text if show_prompt else None,
        tokens=args.tokens,
    )


def run_session(source: str | TextIO, out: TextIO, options: CliOptions) -> int:
    """Parse and dump top-level constructs until end of input.

    Notices and syntax errors go to stderr, tree dumps to *out*. Returns the
    number of syntax errors reported.
    """
    filename = str(options.input_file) if options.input_file is not None else "<stdin>"
    parser = Parser(Lexer(source), lenient_params=options.lenient_params)
    errors = 0

    while True:
        if options.prompt is not None:
            print(options.prompt, end="", file=sys.stderr, flush=True)
        item = parser.next_item()
        if item is None:
            break
        if isinstance(item, Failed):
            errors += 1
            print(item.error.format(filename), file=sys.stderr)
        elif item.kind == "definition":
            print("Parsed a function definition.", file=sys.stderr)
            dump_ast(item.node, file=out, indent=options.indent)
        else:
            print("Parsed a top-level expr", file=sys.stderr)
            dump_ast(item.node, file=out, indent=options.indent)

    return errors


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return 2

    if options.input_file is not None:
        try:
            source: str | TextIO = options.input_file.read_text(encoding="utf-8")
        except OSError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
    else:
        source = sys.stdin

    buf = io.StringIO() if options.output_file else None
    out = buf if buf is not None else sys.stdout

    if options.tokens:
        dump_tokens(tokenize(source), file=out)
        errors = 0
    else:
        errors = run_session(source, out, options)

    if buf is not None and options.output_file is not None:
        try:
            options.output_file.write_text(buf.getvalue(), encoding="utf-8")
        except OSError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2

    return 1 if errors else 0
