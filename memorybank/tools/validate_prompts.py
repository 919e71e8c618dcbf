#!/usr/bin/env python3
"""
validate_prompts.py - Check memory-bank prompt cards.

Enforces the prompt layout: front-matter with description and only allowed
keys, a blank line, the path marker comment, a blank line, an H1 title and a
``## Slash Command:`` section as the first H2. External links are rejected.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from memorybank.tools.common import add_common_arguments, run_report_tool
from memorybank.validator.prompts import validate_prompts


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate memory-bank prompt cards",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0 - All prompt files are valid
  1 - Validation failed
  2 - Fatal error (unreadable file, invalid config)
        """,
    )
    add_common_arguments(parser)
    args = parser.parse_args(argv)

    return run_report_tool(
        args,
        "Prompt",
        lambda config: validate_prompts(args.root / config.paths.prompts, config.prompts),
    )


if __name__ == "__main__":
    sys.exit(main())
