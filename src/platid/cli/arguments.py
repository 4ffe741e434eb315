"""Argument parser construction for the platid CLI.

This module builds the argument parser with subcommands:
- platid classify - Classify free-form platform strings
- platid current  - Identify the running host
- platid decode   - Decode canonical platform identifiers
- platid list     - List known identifiers
- platid validate - Validate a configuration file
"""

from __future__ import annotations

import argparse
from pathlib import Path

from platid.cli.output import FORMATS

LIST_KINDS = ("os", "arch", "env", "platforms")


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value!r}")
    return number


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    """Add global options available to all commands."""
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show platid version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (shows which rule matched).",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Reduce logging output to errors only.",
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Path to a config file (default: .platid.yml in the current directory).",
    )


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail with exit code 1 when any input cannot be fully identified.",
    )
    parser.add_argument(
        "--format",
        choices=FORMATS,
        help="Output format (default: text, or output.format from config).",
    )


def _build_classify_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'classify' subcommand parser."""
    classify_parser = subparsers.add_parser(
        "classify",
        help="Classify free-form platform strings.",
        description=(
            "Classify target triples, file names or host strings into "
            "operating system, architecture and C runtime."
        ),
    )
    classify_parser.add_argument(
        "texts",
        nargs="+",
        metavar="TEXT",
        help="Strings to classify, e.g. aarch64-unknown-linux-gnu.",
    )
    _add_output_options(classify_parser)
    classify_parser.add_argument(
        "--probe-env",
        action="store_true",
        help="Take the C runtime from the local dynamic linker instead of the text.",
    )
    _add_config_option(classify_parser)


def _build_current_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'current' subcommand parser."""
    current_parser = subparsers.add_parser(
        "current",
        help="Identify the running host.",
        description="Print the platform and C runtime of the running host.",
    )
    _add_output_options(current_parser)
    current_parser.add_argument(
        "--ldd",
        metavar="PATH",
        help="Dynamic linker used to probe the C runtime (default: ldd on PATH).",
    )
    current_parser.add_argument(
        "--timeout",
        metavar="SECONDS",
        type=_positive_float,
        help="Probe timeout in seconds (default: 1.0).",
    )
    _add_config_option(current_parser)


def _build_decode_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'decode' subcommand parser."""
    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode canonical platform identifiers.",
        description=(
            "Decode identifiers such as linux-x86-64. Only exact canonical "
            "identifiers are accepted unless --lenient is given."
        ),
    )
    decode_parser.add_argument(
        "ids",
        nargs="+",
        metavar="ID",
        help="Canonical platform identifiers.",
    )
    decode_parser.add_argument(
        "--lenient",
        action="store_true",
        help="Fall back to heuristic classification for non-canonical input.",
    )
    decode_parser.add_argument(
        "--format",
        choices=FORMATS,
        help="Output format (default: text, or output.format from config).",
    )
    _add_config_option(decode_parser)


def _build_list_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'list' subcommand parser."""
    list_parser = subparsers.add_parser(
        "list",
        help="List known identifiers.",
        description="List the known operating systems, architectures, environments or platforms.",
    )
    list_parser.add_argument(
        "kind",
        nargs="?",
        choices=LIST_KINDS,
        default="platforms",
        help="What to list (default: platforms).",
    )
    list_parser.add_argument(
        "--all",
        action="store_true",
        help="Include unknown variants.",
    )


def _build_validate_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'validate' subcommand parser."""
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a platid configuration file.",
        description="Check a configuration file for syntax errors and unknown keys.",
    )
    _add_config_option(validate_parser)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for the platid CLI.

    Returns:
        Configured ArgumentParser instance with subcommands.
    """
    parser = argparse.ArgumentParser(
        prog="platid",
        description="platid - identify operating systems, CPU architectures and C runtimes.",
        epilog=(
            "Examples:\n"
            "  platid classify aarch64-unknown-linux-musl\n"
            "  platid classify --format json armv7-linux-androideabi x86_64-pc-windows-msvc\n"
            "  platid current --strict\n"
            "  platid decode linux-arm-32-be\n"
            "  platid list arch\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    _add_global_options(parser)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands:",
        metavar="COMMAND",
    )

    _build_classify_parser(subparsers)
    _build_current_parser(subparsers)
    _build_decode_parser(subparsers)
    _build_list_parser(subparsers)
    _build_validate_parser(subparsers)

    return parser
