#!/usr/bin/env python3
"""
validate_instructions.py - Check memory-bank instruction files.

Every ``*.instructions.md`` file in ``memory-bank/instructions`` must carry a
``description:`` key and must not link to external sites unless its name is
allow-listed.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from memorybank.tools.common import add_common_arguments, run_report_tool
from memorybank.validator.instructions import validate_instructions


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate memory-bank instruction files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0 - All instruction files are valid
  1 - Validation failed
  2 - Fatal error (unreadable file, invalid config)

Examples:
  mb-validate-instructions
  mb-validate-instructions --root path/to/repo --json
        """,
    )
    add_common_arguments(parser)
    args = parser.parse_args(argv)

    return run_report_tool(
        args,
        "Memory-bank instructions",
        lambda config: validate_instructions(
            args.root / config.paths.instructions, config.instructions
        ),
    )


if __name__ == "__main__":
    sys.exit(main())
