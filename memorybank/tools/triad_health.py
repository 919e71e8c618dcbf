#!/usr/bin/env python3
"""
triad_health.py - Combined health report for instructions, chatmodes and prompts.

Runs the three triad validators, prints file counts and checks that
``.vscode/settings.json`` registers the memory-bank directories with the chat
tooling. Fails if any validator fails or any settings entry is missing.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from memorybank.tools.common import (
    EXIT_SUCCESS,
    EXIT_VALIDATION_FAILED,
    FatalError,
    add_common_arguments,
    configure_logging,
    fatal,
    print_report,
    resolve_config,
)
from memorybank.validator.schema import TriadHealthPayload, report_payload
from memorybank.validator.triad import TriadHealth, check_triad_health

REPORT_LABELS = {
    "instructions": "Memory-bank instructions",
    "chatmodes": "Chatmode",
    "prompts": "Prompt",
}

COUNT_LABELS = {
    "instructions": "Instructions",
    "chatmodes": "Chat modes",
    "prompts": "Prompt cards",
}


def health_payload(health: TriadHealth) -> TriadHealthPayload:
    return TriadHealthPayload(
        status="PASS" if health.passed else "FAIL",
        validators={name: report_payload(r) for name, r in health.reports.items()},
        counts=dict(health.counts),
        settings_missing=list(health.settings_missing),
    )


def print_health(health: TriadHealth) -> None:
    for name, report in health.reports.items():
        print_report(report, REPORT_LABELS[name])
        print(f"[INFO] {name} {'passed' if report.passed else 'failed'}")

    for name, label in COUNT_LABELS.items():
        print(f"[INFO] {label}: {health.counts.get(name, 0)}")

    for message in health.settings_missing:
        print(message)

    if not health.validators_passed:
        print("[INFO] Triad health failed due to validator errors.")
    if not health.settings_passed:
        print("[INFO] Triad health failed due to settings configuration.")
    if health.passed:
        print("[INFO] Triad health check passed.")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run all triad validators and check editor settings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0 - Validators passed and settings are complete
  1 - A validator failed or a settings entry is missing
  2 - Fatal error (unreadable file, invalid config)
        """,
    )
    add_common_arguments(parser)
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    try:
        config = resolve_config(args)
        health = check_triad_health(args.root, config)
    except FatalError as e:
        return fatal(str(e))
    except (OSError, UnicodeDecodeError) as e:
        return fatal(f"cannot read input: {e}")

    if args.json:
        print(health_payload(health).model_dump_json(indent=2))
    else:
        print_health(health)
    return EXIT_SUCCESS if health.passed else EXIT_VALIDATION_FAILED


if __name__ == "__main__":
    sys.exit(main())
