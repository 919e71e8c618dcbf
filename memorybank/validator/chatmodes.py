"""Chatmode file validation (``*.chatmode.md``).

Every chatmode must declare a description, an approved model and exactly the
approved tools list, contain a single H1 heading and link only to relative
paths. All checks run for every file; a file can collect several issues.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from memorybank.config.validator_config import ChatmodeRules
from memorybank.validator.discovery import find_suffix_files
from memorybank.validator.errors import IssueCategory, ValidationReport
from memorybank.validator.frontmatter import (
    FrontMatterError,
    ParsedFrontMatter,
    SourceFile,
    parse_front_matter,
)
from memorybank.validator.instructions import contains_external_link

logger = logging.getLogger(__name__)

REPORT_NAME = "chatmodes"

H1_PREFIX = "# "
# Any scheme separator followed by a target, e.g. "mailto://x" or "ftp://host"
URI_RE = re.compile(r"://[^ )]+")


def count_h1_headings(source: SourceFile) -> int:
    return sum(1 for line in source.lines if line.startswith(H1_PREFIX))


def _check_fields(
    path: str,
    front_matter: ParsedFrontMatter,
    rules: ChatmodeRules,
    report: ValidationReport,
) -> None:
    if "description" not in front_matter:
        report.add_error(path, "missing description in front-matter")

    model = front_matter.get("model") or ""
    if not model:
        report.add_error(path, "missing model in front-matter")
    elif model not in rules.allowed_models:
        report.add_error(
            path,
            f"model '{model}' is not allowed",
            category=IssueCategory.POLICY,
            fix=f"Use one of: {', '.join(rules.allowed_models)}",
        )

    tools = front_matter.get("tools") or ""
    if not tools:
        report.add_error(path, "missing tools in front-matter")
    elif tools != rules.expected_tools:
        report.add_error(
            path,
            f"tools must be exactly {rules.expected_tools}",
            category=IssueCategory.POLICY,
        )


def check_chatmode_file(
    source: SourceFile,
    rules: ChatmodeRules,
    report: ValidationReport,
) -> None:
    """Add issues for one chatmode file to ``report``."""
    path = str(source.path)

    try:
        front_matter = parse_front_matter(source.lines)
    except FrontMatterError as e:
        report.add_error(path, str(e), fix="Open and close the front-matter with '---' lines")
        front_matter = ParsedFrontMatter(fields={}, body_start=0)

    _check_fields(path, front_matter, rules, report)

    h1_count = count_h1_headings(source)
    if h1_count != 1:
        report.add_error(path, f"expected exactly one H1 heading, found {h1_count}")

    if contains_external_link(source.raw, rules.link_schemes):
        report.add_error(path, "external links are not allowed", category=IssueCategory.POLICY)

    if URI_RE.search(source.raw):
        report.add_error(path, "links must be relative", category=IssueCategory.POLICY)


def validate_chatmodes(directory: Path, rules: ChatmodeRules) -> ValidationReport:
    """Validate every chatmode file in ``directory``.

    Raises:
        OSError: If a file cannot be read.
    """
    report = ValidationReport(REPORT_NAME)
    for file_path in find_suffix_files(directory, rules.suffix):
        report.files_checked += 1
        check_chatmode_file(SourceFile.read(file_path), rules, report)
    logger.debug("Chatmode check: %d errors", len(report.errors))
    return report
