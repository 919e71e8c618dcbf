"""Prompt file validation (``*.prompt.md``).

A prompt card has a fixed layout:

    ---
    description: Summarise the open pull requests
    mode: agent
    ---

    <!-- memory-bank/prompts/summarise.prompt.md -->

    # Summarise pull requests

    ## Slash Command: /summarise

The layout walk is sequential and stops at the first structural problem, so
a wrong marker comment does not also report a missing H1. The external-link
scan always runs over the whole file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from memorybank.config.validator_config import PromptRules
from memorybank.validator.discovery import find_suffix_files
from memorybank.validator.errors import IssueCategory, ValidationReport
from memorybank.validator.frontmatter import (
    FrontMatterError,
    SourceFile,
    find_closing_delimiter,
    parse_front_matter,
    split_field,
)
from memorybank.validator.instructions import contains_external_link

logger = logging.getLogger(__name__)

REPORT_NAME = "prompts"


def _line_at(lines: Sequence[str], index: int) -> Optional[str]:
    return lines[index] if index < len(lines) else None


def _is_blank(line: Optional[str]) -> bool:
    return line is not None and line.strip() == ""


def _check_front_matter_keys(
    path: str,
    source: SourceFile,
    rules: PromptRules,
    report: ValidationReport,
) -> None:
    end = find_closing_delimiter(source.lines)
    for offset, line in enumerate(source.lines[1:end], start=2):
        pair = split_field(line)
        if pair is None:
            continue
        key = pair[0]
        if key not in rules.allowed_keys:
            report.add_error(
                path,
                f"disallowed front-matter key '{key}'",
                line=offset,
                category=IssueCategory.POLICY,
                fix=f"Allowed keys: {', '.join(rules.allowed_keys)}",
            )


def _check_layout(
    path: str,
    source: SourceFile,
    body_start: int,
    rules: PromptRules,
    report: ValidationReport,
) -> None:
    """Walk the marker block, H1 and first H2; stop at the first problem."""
    lines = source.lines
    cursor = body_start

    if not _is_blank(_line_at(lines, cursor)):
        report.add_error(path, "expected blank line after front-matter", line=cursor + 1)
        return
    cursor += 1

    expected_marker = rules.expected_marker(source.name)
    if _line_at(lines, cursor) != expected_marker:
        report.add_error(
            path,
            "missing or incorrect path marker comment",
            line=cursor + 1,
            fix=f"Use `{expected_marker}`",
        )
        return
    cursor += 1

    if not _is_blank(_line_at(lines, cursor)):
        report.add_error(path, "expected blank line after path marker", line=cursor + 1)
        return
    cursor += 1

    title = _line_at(lines, cursor)
    if title is None or not title.startswith("# "):
        report.add_error(path, "expected H1 title immediately after marker block", line=cursor + 1)
        return

    for index in range(cursor + 1, len(lines)):
        if lines[index].startswith("## "):
            if not lines[index].startswith(rules.slash_command_prefix):
                report.add_error(
                    path,
                    "first H2 must be a Slash Command section",
                    line=index + 1,
                    fix=f"Start the first H2 with `{rules.slash_command_prefix}/<name>`",
                )
            return

    report.add_error(path, "missing Slash Command section")


def check_prompt_file(
    source: SourceFile,
    rules: PromptRules,
    report: ValidationReport,
) -> None:
    """Add issues for one prompt file to ``report``."""
    path = str(source.path)

    try:
        front_matter = parse_front_matter(source.lines)
    except FrontMatterError as e:
        report.add_error(path, str(e), fix="Open and close the front-matter with '---' lines")
    else:
        if "description" not in front_matter:
            report.add_error(path, "front-matter missing description")
        _check_front_matter_keys(path, source, rules, report)
        _check_layout(path, source, front_matter.body_start, rules, report)

    if contains_external_link(source.raw, rules.link_schemes):
        report.add_error(path, "external links are not allowed", category=IssueCategory.POLICY)


def validate_prompts(directory: Path, rules: PromptRules) -> ValidationReport:
    """Validate every prompt file in ``directory``.

    Raises:
        OSError: If a file cannot be read.
    """
    report = ValidationReport(REPORT_NAME)
    for file_path in find_suffix_files(directory, rules.suffix):
        report.files_checked += 1
        check_prompt_file(SourceFile.read(file_path), rules, report)
    return report
