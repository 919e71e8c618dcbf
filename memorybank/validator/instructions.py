"""Instruction file validation (``*.instructions.md``).

Rules:
- a ``description:`` line must exist somewhere in the file (lenient scan, so
  a file whose front-matter never closes still passes this check);
- no external links (``https://``, ``http://``, ``ftp://``) unless the file
  name matches an allow-list glob such as ``layer-*``.
"""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path
from typing import Sequence

from memorybank.config.validator_config import InstructionRules
from memorybank.validator.discovery import find_suffix_files
from memorybank.validator.errors import IssueCategory, ValidationReport
from memorybank.validator.frontmatter import ParseMode, SourceFile, parse_front_matter

logger = logging.getLogger(__name__)

REPORT_NAME = "instructions"


def is_allow_listed(filename: str, patterns: Sequence[str]) -> bool:
    """True if ``filename`` matches any shell-glob pattern (case-sensitive)."""
    return any(fnmatch.fnmatchcase(filename, pattern) for pattern in patterns)


def contains_external_link(text: str, schemes: Sequence[str]) -> bool:
    return any(scheme in text for scheme in schemes)


def check_instruction_file(
    source: SourceFile,
    rules: InstructionRules,
    report: ValidationReport,
) -> None:
    """Add issues for one instruction file to ``report``."""
    path = str(source.path)

    front_matter = parse_front_matter(source.lines, mode=ParseMode.LENIENT)
    if "description" not in front_matter:
        report.add_error(
            path,
            "missing description header",
            fix="Add `description: <one-line summary>` to the front-matter",
        )

    if is_allow_listed(source.name, rules.allow_external):
        logger.debug("%s is allow-listed for external links", path)
        return

    if contains_external_link(source.raw, rules.link_schemes):
        report.add_error(
            path,
            "external links are not allowed",
            category=IssueCategory.POLICY,
            fix="Replace the URL with a relative link or allow-list the file",
        )


def validate_instructions(directory: Path, rules: InstructionRules) -> ValidationReport:
    """Validate every instruction file in ``directory``.

    Raises:
        OSError: If a file cannot be read.
    """
    report = ValidationReport(REPORT_NAME)
    for file_path in find_suffix_files(directory, rules.suffix):
        report.files_checked += 1
        check_instruction_file(SourceFile.read(file_path), rules, report)
    return report
