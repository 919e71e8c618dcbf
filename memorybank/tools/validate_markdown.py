#!/usr/bin/env python3
"""
validate_markdown.py - Lint markdown files across the repository.

Usage:
    mb-validate-markdown [paths ...] [--fix-typos] [--check-only]

Directories are searched recursively for ``*.md`` (``node_modules`` and
``.git`` are skipped). Errors fail the run; warnings are printed but do not.
With ``--fix-typos`` dictionary typos are corrected in place before linting.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from memorybank.config.validator_config import MarkdownRules
from memorybank.tools.common import (
    EXIT_SUCCESS,
    EXIT_VALIDATION_FAILED,
    FatalError,
    add_common_arguments,
    configure_logging,
    fatal,
    print_json_report,
    resolve_config,
)
from memorybank.validator.discovery import find_markdown_files
from memorybank.validator.errors import ValidationReport
from memorybank.validator.frontmatter import SourceFile
from memorybank.validator.markdown import REPORT_NAME, fix_typos, lint_markdown_file

logger = logging.getLogger(__name__)

WARNING_TIPS = (
    "Review warnings and consider addressing them",
    "Use --fix-typos to automatically fix common typos",
    "Some warnings are informational and may not require action",
)
ERROR_TIPS = (
    "Fix errors in the listed files",
    "Use --fix-typos to automatically fix common typos",
    "Re-run validator after making changes",
)


def _apply_typo_fixes(files: List[Path], rules: MarkdownRules, quiet: bool = False) -> int:
    total = 0
    for file_path in files:
        count = fix_typos(file_path, rules.typos)
        if count and not quiet:
            print(f"[INFO] {file_path}: fixed {count} typo(s)")
        total += count
    return total


def _print_tips(tips: Sequence[str]) -> None:
    print()
    print("[INFO] Tips:")
    for tip in tips:
        print(f"  - {tip}")


def _print_summary(report: ValidationReport, check_only: bool) -> int:
    print()
    print(f"[INFO] Validation complete: checked {report.files_checked} file(s)")

    issues = report.sorted_issues()
    errors = [i for i in issues if i.is_error]
    warnings = [i for i in issues if not i.is_error]
    if errors:
        print()
        print(f"[FAIL] Found {len(errors)} error(s):")
        for issue in errors:
            print(f"  - {issue.format()}")
    if warnings:
        print()
        print(f"[WARN] Found {len(warnings)} warning(s):")
        for issue in warnings:
            print(f"  - {issue.format()}")

    print()
    if not errors and not warnings:
        print("[OK] All markdown files are valid!")
        return EXIT_SUCCESS

    if not errors:
        print(f"[WARN] Validation completed with warnings ({len(warnings)} warning(s))")
        if not check_only:
            _print_tips(WARNING_TIPS)
        return EXIT_SUCCESS

    print(
        f"[FAIL] Validation failed with {len(errors)} error(s) "
        f"and {len(warnings)} warning(s)"
    )
    if not check_only:
        _print_tips(ERROR_TIPS)
    return EXIT_VALIDATION_FAILED


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate markdown formatting and spelling",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0 - No errors (warnings may be present)
  1 - Validation errors found
  2 - Fatal error (no markdown files found, unreadable file, invalid config)

Examples:
  mb-validate-markdown
  mb-validate-markdown docs README.md --check-only
  mb-validate-markdown --fix-typos
        """,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Files or directories to lint (default: --root)",
    )
    parser.add_argument(
        "--fix-typos",
        action="store_true",
        help="Correct dictionary typos in place before linting",
    )
    parser.add_argument(
        "--check-only",
        action="store_true",
        help="Only report issues, don't print remediation tips",
    )
    add_common_arguments(parser)
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    try:
        config = resolve_config(args)
    except FatalError as e:
        return fatal(str(e))
    rules = config.markdown

    paths = args.paths or [args.root]
    files = find_markdown_files(paths, rules.exclude_dirs)
    if not files:
        return fatal("No markdown files found")

    if not args.json:
        print("[INFO] Starting markdown validation...")
        print(f"[INFO] Found {len(files)} markdown file(s) to validate")

    report = ValidationReport(REPORT_NAME)
    try:
        if args.fix_typos:
            if not args.json:
                print("[INFO] Applying typo fixes...")
            fixed = _apply_typo_fixes(files, rules, quiet=args.json)
            logger.debug("Fixed %d typo(s) in total", fixed)
            if not args.json:
                print("[OK] Typo fixes applied")

        for index, file_path in enumerate(files, start=1):
            logger.debug("Validating file %d/%d: %s", index, len(files), file_path)
            report.extend(lint_markdown_file(SourceFile.read(file_path), rules))
    except (OSError, UnicodeDecodeError) as e:
        return fatal(f"cannot read input: {e}")

    if args.json:
        print_json_report(report)
        return EXIT_SUCCESS if report.passed else EXIT_VALIDATION_FAILED
    return _print_summary(report, args.check_only)


if __name__ == "__main__":
    sys.exit(main())
