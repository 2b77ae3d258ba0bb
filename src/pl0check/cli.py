"""Command-line interface for pl0check."""

from __future__ import annotations

import argparse
import json
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pl0check.checker import CheckResult
from pl0check.tokens import PositionedToken


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    indent: int
    show_warnings: bool
    label: str
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="pl0check",
        description="PL/0 lexer and structural checker",
    )
    p.add_argument("input", help="Input PL/0 source file")
    p.add_argument(
        "-o",
        "--output",
        help="Write the token list as JSON to this file (default: check only)",
    )
    p.add_argument(
        "--indent",
        type=int,
        default=None,
        metavar="N",
        help="JSON indentation width (default: 2)",
    )
    p.add_argument("--no-warnings", action="store_true", help="Do not print warnings")
    p.add_argument(
        "--label",
        metavar="NAME",
        help="File label used in diagnostics (default: the input path)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover pl0check.toml)",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and recheck")
    p.add_argument("--debug", action="store_true", help="Dump tokens and declarations to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "pl0check.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    cfg_output = config.get("output")
    if not isinstance(cfg_output, dict):
        cfg_output = {}
    cfg_diag = config.get("diagnostics")
    if not isinstance(cfg_diag, dict):
        cfg_diag = {}

    # Output file: config < CLI
    output_file: Path | None = None
    if isinstance(cfg_output.get("file"), str):
        output_file = Path(cfg_output["file"])
    if args.output:
        output_file = Path(args.output)

    # Indent: config < CLI
    indent = 2
    if isinstance(cfg_output.get("indent"), int):
        indent = cfg_output["indent"]
    if args.indent is not None:
        indent = args.indent
    if indent < 0:
        raise argparse.ArgumentTypeError(f"indent must be non-negative: {indent}")

    # Warnings: config < CLI
    show_warnings = True
    if isinstance(cfg_diag.get("warnings"), bool):
        show_warnings = cfg_diag["warnings"]
    if args.no_warnings:
        show_warnings = False

    label = str(input_file)
    if isinstance(cfg_diag.get("label"), str):
        label = cfg_diag["label"]
    if args.label:
        label = args.label

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        indent=indent,
        show_warnings=show_warnings,
        label=label,
        watch=args.watch,
        debug=args.debug,
    )


def tokens_to_json(
    tokens: tuple[PositionedToken, ...] | list[PositionedToken], indent: int = 2
) -> str:
    """Serialize a token list as ``{"tokens": [...]}``."""
    return json.dumps({"tokens": [t.to_json() for t in tokens]}, indent=indent)


def write_tokens(path: Path, tokens: tuple[PositionedToken, ...], indent: int = 2) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tokens_to_json(tokens, indent) + "\n", encoding="utf-8")


def check_file(options: CliOptions) -> CheckResult:
    """Read and check a source file, printing diagnostics to stderr."""
    from pl0check.checker import Checker
    from pl0check.debug import dump_declarations, dump_tokens

    source = options.input_file.read_text(encoding="utf-8")
    checker = Checker(source)
    result = checker.run()

    if options.debug:
        dump_tokens(checker.tokens, source, file=sys.stderr)
        dump_declarations(result.declarations, file=sys.stderr)

    diagnostics = result.diagnostics
    for block in diagnostics.render(
        source, options.label, include_warnings=options.show_warnings
    ):
        print(block, file=sys.stderr)
    if len(diagnostics):
        print(diagnostics.summary(), file=sys.stderr)

    if result.tokens is not None and options.output_file is not None:
        write_tokens(options.output_file, result.tokens, options.indent)
    return result


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, recheck on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    result = check_file(options)
                except (OSError, UnicodeDecodeError) as exc:
                    print(f"error: {exc}", file=sys.stderr)
                else:
                    status = "OK" if result.ok else "failed"
                    print(f"Checked {options.input_file}: {status}", file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    if not options.input_file.is_file():
        print(f"error: file does not exist: {options.input_file}", file=sys.stderr)
        return 2

    try:
        result = check_file(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 0 if result.ok else 1
