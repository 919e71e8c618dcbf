"""Shared command-line plumbing for the memory-bank tools.

Exit codes (all tools):
    0 - All checks passed
    1 - Validation failed
    2 - Fatal error (unreadable file, invalid config, nothing to check)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

from memorybank.config.validator_config import ConfigError, ValidatorConfig, load_config
from memorybank.validator.errors import ValidationReport
from memorybank.validator.schema import report_payload

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_VALIDATION_FAILED = 1
EXIT_FATAL_ERROR = 2


class FatalError(Exception):
    """A condition that stops a tool with EXIT_FATAL_ERROR."""


def add_common_arguments(parser: argparse.ArgumentParser, json_output: bool = True) -> None:
    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Repository root containing memory-bank/ (default: current directory)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file overriding the built-in validator rules",
    )
    if json_output:
        parser.add_argument(
            "--json",
            action="store_true",
            help="Output a machine-readable JSON report",
        )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging on stderr",
    )


def configure_logging(debug: bool) -> None:
    """Route library logging to stderr; DEBUG with --debug, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def resolve_config(args: argparse.Namespace) -> ValidatorConfig:
    try:
        config = load_config(root=args.root, path=args.config)
    except ConfigError as e:
        raise FatalError(f"invalid configuration: {e}") from e
    logger.debug("Using validator config: %s", config.source)
    return config


def print_report(
    report: ValidationReport,
    label: str,
    stream: Optional[TextIO] = None,
) -> None:
    """Print ``[OK]``/``[FAIL]`` summary followed by one bullet per issue, in path/line order."""
    out = stream or sys.stdout
    issues = report.sorted_issues()
    errors = [i for i in issues if i.is_error]
    warnings = [i for i in issues if not i.is_error]

    if errors:
        print(f"[FAIL] {label} validation failed:", file=out)
        for issue in errors:
            print(f"  - {issue.format()}", file=out)
    else:
        print(f"[OK] {label} validation passed.", file=out)

    if warnings:
        print(f"[WARN] {label} validation produced {len(warnings)} warning(s):", file=out)
        for issue in warnings:
            print(f"  - {issue.format()}", file=out)


def print_json_report(report: ValidationReport) -> None:
    print(report_payload(report).model_dump_json(indent=2))


def fatal(message: str) -> int:
    print(f"ERROR: {message}", file=sys.stderr)
    return EXIT_FATAL_ERROR


def run_report_tool(
    args: argparse.Namespace,
    label: str,
    build: Callable[[ValidatorConfig], ValidationReport],
) -> int:
    """Load config, build a report, print it and map it to an exit code."""
    configure_logging(args.debug)
    try:
        config = resolve_config(args)
        report = build(config)
    except FatalError as e:
        return fatal(str(e))
    except (OSError, UnicodeDecodeError) as e:
        return fatal(f"cannot read input: {e}")

    if getattr(args, "json", False):
        print_json_report(report)
    else:
        print_report(report, label)
    return EXIT_SUCCESS if report.passed else EXIT_VALIDATION_FAILED
