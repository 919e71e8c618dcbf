#!/usr/bin/env python3
"""
list_slash_commands.py - List the slash commands declared by prompt cards.

Output format, one per line:
    memory-bank/prompts/example.prompt.md:12:## Slash Command: /example

Exits 1 when there are no prompt files or none declares a slash command.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
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
from memorybank.validator.discovery import find_suffix_files
from memorybank.validator.schema import SlashCommandRecord, slash_commands_json
from memorybank.validator.slash_commands import SlashCommand, list_slash_commands


def _display_path(path: Path, root: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="List slash commands defined in memory-bank prompt files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0 - Slash commands listed
  1 - No prompt files found, or no slash commands declared
  2 - Fatal error (unreadable file, invalid config)
        """,
    )
    add_common_arguments(parser)
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    try:
        config = resolve_config(args)
        prompts_dir = args.root / config.paths.prompts
        if not find_suffix_files(prompts_dir, config.prompts.suffix):
            print("No prompt files found.", file=sys.stderr)
            return EXIT_VALIDATION_FAILED
        commands = list_slash_commands(prompts_dir, config.prompts.suffix)
    except FatalError as e:
        return fatal(str(e))
    except (OSError, UnicodeDecodeError) as e:
        return fatal(f"cannot read input: {e}")

    commands = [
        SlashCommand(_display_path(c.path, args.root), c.line, c.text) for c in commands
    ]
    if args.json:
        records = [
            SlashCommandRecord(path=str(c.path), line=c.line, command=c.command)
            for c in commands
        ]
        print(slash_commands_json(records))
    else:
        for command in commands:
            print(command.format())

    return EXIT_SUCCESS if commands else EXIT_VALIDATION_FAILED


if __name__ == "__main__":
    sys.exit(main())
