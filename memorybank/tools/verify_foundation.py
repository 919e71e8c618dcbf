#!/usr/bin/env python3
"""
verify_foundation.py - Report which foundation artifacts are present.

Missing artifacts are warnings unless ``--strict`` is given. Read-only.
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
    resolve_config,
)
from memorybank.validator.foundation import FoundationStatus, verify_foundation
from memorybank.validator.schema import FoundationPayload


def print_status(status: FoundationStatus, artifacts: List[str]) -> None:
    print("[INFO] Foundation verification starting...")
    for artifact in artifacts:
        if artifact in status.missing:
            print(f"[WARN] Missing {artifact}")
        else:
            print(f"[INFO] Found {artifact}")

    if status.complete:
        print("[INFO] All foundation artifacts are present.")
    else:
        print(f"[WARN] Foundation missing {len(status.missing)} item(s). See log above.")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Verify that the repository foundation artifacts exist",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0 - Verification ran (missing artifacts are warnings)
  1 - Artifacts missing and --strict given
  2 - Fatal error (invalid config)
        """,
    )
    add_common_arguments(parser)
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat missing artifacts as a failure",
    )
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    try:
        config = resolve_config(args)
    except FatalError as e:
        return fatal(str(e))

    artifacts = list(config.foundation.artifacts)
    status = verify_foundation(args.root, artifacts)

    if args.json:
        payload = FoundationPayload(
            status="PASS" if status.complete else "FAIL",
            found=status.found,
            missing=status.missing,
        )
        print(payload.model_dump_json(indent=2))
    else:
        print_status(status, artifacts)

    if args.strict and not status.complete:
        return EXIT_VALIDATION_FAILED
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
