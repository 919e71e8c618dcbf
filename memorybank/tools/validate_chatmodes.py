#!/usr/bin/env python3
"""
validate_chatmodes.py - Check memory-bank chat mode files.

Each ``*.chatmode.md`` needs front-matter with description, an allowed model
and the exact tools list, a single H1 heading and relative links only.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from memorybank.tools.common import add_common_arguments, run_report_tool
from memorybank.validator.chatmodes import validate_chatmodes


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate memory-bank chat mode files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0 - All chat mode files are valid
  1 - Validation failed
  2 - Fatal error (unreadable file, invalid config)
        """,
    )
    add_common_arguments(parser)
    args = parser.parse_args(argv)

    return run_report_tool(
        args,
        "Chatmode",
        lambda config: validate_chatmodes(args.root / config.paths.chatmodes, config.chatmodes),
    )


if __name__ == "__main__":
    sys.exit(main())
