"""Command line entry point for printing or exporting Fibonacci terms.

Running ``python -m fibext.cli --count 10 --width 8 --policy checked`` prints
the first ten post-seed terms.  Settings may also come from a JSON or YAML
file passed through ``--config``; flags given explicitly on the command line
take precedence over values read from the file.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .arithmetic import ArithmeticPolicy
from .config import ConfigurationError, GeneratorConfig, load_generator_config
from .integers import SUPPORTED_WIDTHS, resolve_representation
from .report import SequenceReport, generate_report, write_sequence_report

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 10
WIDTH_CHOICES = tuple(str(width) for width in SUPPORTED_WIDTHS) + ("big",)


def _non_negative_int(value: str) -> int:
    try:
        parsed = int(value, 10)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("Count must be an integer") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("Count must be non-negative")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate Fibonacci terms over fixed-width or big unsigned integers.",
    )
    parser.add_argument(
        "--count",
        type=_non_negative_int,
        default=DEFAULT_COUNT,
        help=f"Number of terms to produce after the seed (default: {DEFAULT_COUNT})",
    )
    parser.add_argument(
        "--width",
        choices=WIDTH_CHOICES,
        default=None,
        help="Integer width in bits, or 'big' for arbitrary precision (default: 64)",
    )
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in ArithmeticPolicy],
        default=None,
        help="Overflow behaviour of each addition (default: checked)",
    )
    parser.add_argument(
        "--seed",
        nargs=2,
        type=int,
        metavar=("PREVIOUS", "CURRENT"),
        default=None,
        help="Starting pair of the sequence (default: 0 1)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON or YAML file providing policy, representation and seed",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the JSON report to this path instead of stdout",
    )
    parser.add_argument(
        "--output-format",
        choices=["json", "text"],
        default="text",
        help="Print terms one per line or as a JSON report (default: text)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Indentation to use when serialising JSON (default: 2)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING))


def _resolve_config(args: argparse.Namespace) -> GeneratorConfig:
    config = load_generator_config(args.config)
    overrides = {}
    if args.width is not None:
        overrides["representation"] = resolve_representation(args.width)
    if args.policy is not None:
        overrides["policy"] = ArithmeticPolicy.parse(args.policy)
    if args.seed is not None:
        overrides["seed"] = tuple(args.seed)
    return dataclasses.replace(config, **overrides)


def _render_text(report: SequenceReport) -> str:
    lines = [str(value) for value in report.to_dict()["sequence"]]
    if report.exhausted:
        lines.append(f"# overflow after {report.count} terms ({report.representation})")
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        config = _resolve_config(args)
        report = generate_report(args.count, config)
    except ConfigurationError as error:
        logger.error("%s", error)
        return 2

    if args.output is not None:
        path = write_sequence_report(report, args.output, indent=args.indent)
        logger.info("Sequence report written to %s", path)
    elif args.output_format == "json":
        print(json.dumps(report.to_dict(), indent=args.indent))
    else:
        print(_render_text(report))
    return 0


if __name__ == "__main__":  # pragma: no cover - exercised via CLI
    sys.exit(main())
