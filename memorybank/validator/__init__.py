"""
Validator library.

Each validator takes a directory (or file list) plus a frozen rule object and
returns a ValidationReport. Nothing here prints or exits; see
``memorybank.tools`` for the command-line wrappers.
"""

from memorybank.validator.chatmodes import validate_chatmodes
from memorybank.validator.errors import (
    IssueCategory,
    Severity,
    ValidationIssue,
    ValidationReport,
)
from memorybank.validator.foundation import FoundationStatus, verify_foundation
from memorybank.validator.frontmatter import (
    FrontMatterError,
    ParsedFrontMatter,
    ParseMode,
    SourceFile,
    parse_front_matter,
)
from memorybank.validator.instructions import validate_instructions
from memorybank.validator.markdown import fix_typos, lint_markdown, lint_markdown_file
from memorybank.validator.prompts import validate_prompts
from memorybank.validator.slash_commands import SlashCommand, list_slash_commands
from memorybank.validator.triad import TriadHealth, check_triad_health

__all__ = [
    "FoundationStatus",
    "FrontMatterError",
    "IssueCategory",
    "ParseMode",
    "ParsedFrontMatter",
    "Severity",
    "SlashCommand",
    "SourceFile",
    "TriadHealth",
    "ValidationIssue",
    "ValidationReport",
    "check_triad_health",
    "fix_typos",
    "lint_markdown",
    "lint_markdown_file",
    "list_slash_commands",
    "parse_front_matter",
    "validate_chatmodes",
    "validate_instructions",
    "validate_prompts",
    "verify_foundation",
]
