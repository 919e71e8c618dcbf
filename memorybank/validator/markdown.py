"""
markdown.py - Generic markdown linting and typo correction.

Checks every markdown file independently of the triad front-matter rules:

Errors (fail the run):
- trailing whitespace, except exactly two spaces (hard line break)
- two or more consecutive blank lines
- hard tabs
- heading formatting: missing space after ``#``, several spaces after ``#``,
  trailing ``.``, ``,``, ``;`` or ``:``

Warnings (reported, never fail the run):
- heading not preceded by a blank line
- code fence opened without a language
- possible typos from the dictionary
- lines longer than the configured maximum

Heading checks are suspended inside fenced code blocks and inside the
front-matter region. ``fix_typos`` rewrites a file in place through a
temporary file and ``os.replace`` so an interrupted run never leaves a
truncated file behind.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Pattern, Tuple

from memorybank.config.validator_config import MarkdownRules
from memorybank.validator.discovery import find_markdown_files
from memorybank.validator.errors import IssueCategory, ValidationReport
from memorybank.validator.frontmatter import FRONT_MATTER_DELIMITER, SourceFile

logger = logging.getLogger(__name__)

REPORT_NAME = "markdown"

CODE_FENCE = "```"
HARD_BREAK = "  "
HEADING_RE = re.compile(r"^(#+)(.*)$")
HEADING_PUNCTUATION = (".", ",", ";", ":")


# =============================================================================
# Line-level checks
# =============================================================================


def _front_matter_span(lines: Tuple[str, ...]) -> Optional[Tuple[int, int]]:
    """Indices of the first two ``---`` lines, or None."""
    delimiters = [i for i, line in enumerate(lines) if line == FRONT_MATTER_DELIMITER][:2]
    if len(delimiters) < 2:
        return None
    return delimiters[0], delimiters[1]


def check_trailing_whitespace(source: SourceFile, report: ValidationReport) -> None:
    offending: List[int] = []
    for number, line in enumerate(source.lines, start=1):
        trailing = line[len(line.rstrip()):]
        if trailing and trailing != HARD_BREAK:
            offending.append(number)
    if offending:
        report.add_error(
            str(source.path),
            f"trailing spaces found (lines: {','.join(str(n) for n in offending)})",
            fix="Remove trailing whitespace (keep exactly two spaces only for a line break)",
        )


def check_blank_lines(source: SourceFile, report: ValidationReport) -> None:
    run = 0
    for number, line in enumerate(source.lines, start=1):
        if line == "":
            run += 1
            if run == 2:
                report.add_error(
                    str(source.path),
                    f"multiple consecutive blank lines (around line {number})",
                )
                return
        else:
            run = 0


def check_hard_tabs(source: SourceFile, report: ValidationReport) -> None:
    if "\t" in source.raw:
        report.add_error(str(source.path), "hard tabs found (use spaces instead)")


def check_headings_and_fences(source: SourceFile, report: ValidationReport) -> None:
    """Heading format and code fence language checks.

    Tracks fenced code state and the front-matter region; neither is checked
    for headings.
    """
    path = str(source.path)
    span = _front_matter_span(source.lines)
    in_code = False
    prev_line = ""

    for index, line in enumerate(source.lines):
        number = index + 1

        if span is not None and span[0] <= index <= span[1]:
            prev_line = line
            continue

        if line.startswith(CODE_FENCE):
            if not in_code and line.strip() == CODE_FENCE:
                report.add_warning(
                    path,
                    "code block without language specification",
                    line=number,
                    fix="Add a language after the opening fence, e.g. ```bash",
                )
            in_code = not in_code
            prev_line = line
            continue

        if in_code:
            prev_line = line
            continue

        match = HEADING_RE.match(line)
        if match:
            _check_heading(path, number, index, line, match.group(2), prev_line, span, report)

        prev_line = line


def _check_heading(
    path: str,
    number: int,
    index: int,
    line: str,
    rest: str,
    prev_line: str,
    span: Optional[Tuple[int, int]],
    report: ValidationReport,
) -> None:
    if not rest.startswith(" "):
        report.add_error(path, "no space after # in heading", line=number)
        return

    if rest.startswith("  "):
        report.add_error(path, "multiple spaces after # in heading", line=number)

    if line.endswith(HEADING_PUNCTUATION):
        report.add_error(path, "heading ends with punctuation", line=number)

    if prev_line and number > 2:
        after_front_matter = span is not None and index - 1 == span[1]
        after_comment = prev_line.startswith("<!--")
        if not after_front_matter and not after_comment:
            report.add_warning(path, "heading not surrounded by blank lines", line=number)


def _typo_pattern(typo: str) -> Pattern[str]:
    return re.compile(rf"\b{re.escape(typo)}\b", re.IGNORECASE)


def check_typos(source: SourceFile, typos: Mapping[str, str], report: ValidationReport) -> None:
    for typo, correct in sorted(typos.items()):
        pattern = _typo_pattern(typo)
        numbers = [n for n, line in enumerate(source.lines, start=1) if pattern.search(line)]
        if numbers:
            report.add_warning(
                str(source.path),
                f"possible typo: {typo} -> {correct} (lines: {','.join(str(n) for n in numbers)})",
                category=IssueCategory.TYPO,
                fix="Run with --fix-typos to correct automatically",
            )


def check_line_length(source: SourceFile, max_length: int, report: ValidationReport) -> None:
    in_code = False
    for number, line in enumerate(source.lines, start=1):
        if line.startswith(CODE_FENCE):
            in_code = not in_code
            continue
        if in_code or "http" in line or line.startswith("|"):
            continue
        if len(line) > max_length:
            report.add_warning(
                str(source.path),
                f"lines exceed {max_length} characters (first at line {number})",
            )
            return


# =============================================================================
# File and batch entry points
# =============================================================================


def lint_markdown_file(source: SourceFile, rules: MarkdownRules) -> ValidationReport:
    """Run every markdown check against one file."""
    report = ValidationReport(REPORT_NAME, files_checked=1)
    check_trailing_whitespace(source, report)
    check_blank_lines(source, report)
    check_hard_tabs(source, report)
    check_headings_and_fences(source, report)
    check_typos(source, rules.typos, report)
    check_line_length(source, rules.max_line_length, report)
    return report


def lint_markdown(paths: Iterable[Path], rules: MarkdownRules) -> ValidationReport:
    """Lint all markdown files found under ``paths``.

    Raises:
        OSError: If a file cannot be read.
    """
    report = ValidationReport(REPORT_NAME)
    for file_path in find_markdown_files(paths, rules.exclude_dirs):
        logger.debug("Validating %s", file_path)
        report.extend(lint_markdown_file(SourceFile.read(file_path), rules))
    return report


# =============================================================================
# Typo correction
# =============================================================================


def fix_typos_in_text(text: str, typos: Mapping[str, str]) -> Tuple[str, int]:
    """Replace whole-word typos, keeping an upper-case first letter.

    Returns:
        (new_text, replacement_count)
    """
    if not typos:
        return text, 0

    lookup: Dict[str, str] = {typo.lower(): correct for typo, correct in typos.items()}
    alternation = "|".join(re.escape(t) for t in sorted(lookup, key=len, reverse=True))
    pattern = re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)

    def _replace(match: "re.Match[str]") -> str:
        word = match.group(0)
        correct = lookup[word.lower()]
        if word[0].isupper():
            return correct[0].upper() + correct[1:]
        return correct

    return pattern.subn(_replace, text)


def _atomic_write_text(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` via a temp file in the same directory.

    The temp file is removed on any failure, including KeyboardInterrupt,
    and the original file is left untouched in that case.
    """
    fd, tmp_path = tempfile.mkstemp(suffix=".tmp", prefix=path.name + ".", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def fix_typos(path: Path, typos: Mapping[str, str]) -> int:
    """Correct dictionary typos in ``path`` in place.

    Returns:
        Number of words replaced (0 leaves the file untouched).
    """
    original = path.read_bytes().decode("utf-8")
    fixed, count = fix_typos_in_text(original, typos)
    if count:
        _atomic_write_text(path, fixed)
        logger.info("%s: fixed %d typo(s)", path, count)
    return count
