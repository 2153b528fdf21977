"""
Command-line interface for the TCTL requirement checker.

Provides argument parsing and orchestration for checking TCTL
specification files, or single expressions, and printing their
canonical form.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

import tctl
from tctl.parser.ast_nodes import Expression
from tctl.parser.formula import statistics
from tctl.parser.grammar import ParseError, TCTLParser
from tctl.parser.language import Language
from tctl.parser.specification import Configuration, Specification
from tctl.utils.logger import LogLevel, SpecLogger
from tctl.utils.spec_reader import SpecificationReader


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the TCTL CLI."""
    parser = argparse.ArgumentParser(
        prog="tctl",
        description=(
            "TCTL: parse and pretty-print Timed Computation Tree Logic "
            "requirements with embedded VHDL predicates"
        ),
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "-s",
        "--spec",
        type=Path,
        help="Path to specification file (.tctl)",
    )
    source.add_argument(
        "-x",
        "--expression",
        help="A single TCTL expression to check",
    )

    parser.add_argument(
        "-l",
        "--language",
        choices=[language.value for language in Language],
        default=Language.VHDL.value,
        help="Embedded language of --expression predicates (default: VHDL)",
    )
    parser.add_argument(
        "--format",
        action="store_true",
        help="Print the canonical text of the parsed input",
    )
    parser.add_argument(
        "-w",
        "--write",
        type=Path,
        default=None,
        metavar="FILE",
        help="Write the canonical text of the parsed input to FILE",
    )
    parser.add_argument(
        "-o",
        "--output",
        choices=["silent", "normal", "verbose"],
        default="normal",
        help="Output level (default: normal)",
    )
    parser.add_argument(
        "-d",
        "--debug",
        type=int,
        choices=[0, 1, 2, 3],
        default=0,
        help="Debug level 0-3 (default: 0)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print statistics after checking",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"tctl {tctl.__version__}",
    )

    return parser


def _resolve_log_level(output: str, debug: int) -> LogLevel:
    """Determine the effective log level from output and debug settings."""
    if debug >= 3:
        return LogLevel.DEBUG
    if output == "verbose" or debug >= 1:
        return LogLevel.VERBOSE
    if output == "silent":
        return LogLevel.SILENT
    return LogLevel.NORMAL


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``tctl`` CLI command."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        _run(args)
    except SystemExit:
        raise
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)


def _run(args: argparse.Namespace) -> None:
    """Execute the checking pipeline."""
    log_level = _resolve_log_level(args.output, args.debug)
    logger = SpecLogger(level=log_level, stream=sys.stdout)

    if args.spec is not None:
        if not args.spec.exists():
            print(f"Error: Specification file not found: {args.spec}", file=sys.stderr)
            sys.exit(2)
        specification = _check_specification(args.spec, logger)
    else:
        specification = _check_expression(args.expression, Language(args.language), logger)

    for index, requirement in enumerate(specification.requirements, start=1):
        logger.requirement_info(index, requirement)
        logger.debug(f"Requirement {index} tree", node=repr(requirement))

    canonical = _canonical_text(args, specification)
    if args.format:
        sys.stdout.write(canonical)
    if args.write is not None:
        args.write.write_text(canonical)
        logger.info(f"Wrote canonical text to {args.write}")

    logger.verdict_valid(len(specification.requirements))

    stats = statistics(specification)
    logger.statistics(stats)
    # Statistics (skip if verbose already printed them)
    if args.stats and log_level.value < LogLevel.VERBOSE.value:
        _print_statistics(stats)

    sys.exit(0)


def _check_specification(path: Path, logger: SpecLogger) -> Specification:
    """Parse a specification file, exiting with 1 if it is invalid."""
    reader = SpecificationReader(path)
    logger.info(f"Reading specification {path}")
    try:
        specification = reader.read()
    except ParseError as exc:
        logger.verdict_invalid(str(exc))
        for error in reader.validate()[1:]:
            logger.info(error)
        sys.exit(1)
    logger.configuration_info(specification.configuration)
    return specification


def _check_expression(text: str, language: Language, logger: SpecLogger) -> Specification:
    """Parse a single expression, exiting with 1 if it is invalid."""
    try:
        expression: Expression = TCTLParser(language=language).parse(text)
    except ParseError as exc:
        logger.verdict_invalid(str(exc))
        sys.exit(1)
    return Specification(Configuration(language), (expression,))


def _canonical_text(args: argparse.Namespace, specification: Specification) -> str:
    if args.spec is not None:
        return str(specification)
    return f"{specification.requirements[0]}\n"


def _print_statistics(stats: Dict[str, int]) -> None:
    print()
    print("=== Statistics ===")
    for key, value in stats.items():
        label = key.replace("_", " ").title()
        print(f"  {label}: {value}")
