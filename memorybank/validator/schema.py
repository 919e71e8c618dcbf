"""
Pydantic models for the machine-readable (``--json``) output of the tools.

Usage:
    from memorybank.validator.schema import report_payload

    print(report_payload(report).model_dump_json(indent=2))
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, TypeAdapter

from memorybank.validator.errors import ValidationIssue, ValidationReport


class IssueRecord(BaseModel):
    """One validation issue."""
    path: str = Field(description="File the issue refers to")
    line: Optional[int] = Field(None, description="1-based line number, if known")
    message: str = Field(description="Human-readable problem statement")
    severity: str = Field(description="error or warning")
    category: str = Field(description="structure, policy, style or typo")
    fix: Optional[str] = Field(None, description="Suggested remediation")


class ReportPayload(BaseModel):
    """Result of one validator run."""
    name: str = Field(description="Validator name (instructions, chatmodes, ...)")
    status: str = Field(description="PASS or FAIL")
    files_checked: int = Field(description="Number of files inspected")
    error_count: int
    warning_count: int
    issues: List[IssueRecord] = Field(default_factory=list)


class TriadHealthPayload(BaseModel):
    """Result of the combined triad health check."""
    status: str = Field(description="PASS or FAIL")
    validators: Dict[str, ReportPayload] = Field(default_factory=dict)
    counts: Dict[str, int] = Field(default_factory=dict, description="Files per triad kind")
    settings_missing: List[str] = Field(default_factory=list)


class SlashCommandRecord(BaseModel):
    path: str
    line: int
    command: str


class FoundationPayload(BaseModel):
    """Result of the foundation artifact check."""
    status: str = Field(description="PASS when nothing is missing")
    found: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)


def issue_record(issue: ValidationIssue) -> IssueRecord:
    return IssueRecord(**issue.to_dict())


def report_payload(report: ValidationReport) -> ReportPayload:
    return ReportPayload(
        name=report.name,
        status="PASS" if report.passed else "FAIL",
        files_checked=report.files_checked,
        error_count=len(report.errors),
        warning_count=len(report.warnings),
        issues=[issue_record(i) for i in report.issues],
    )


SLASH_COMMAND_LIST = TypeAdapter(List[SlashCommandRecord])


def slash_commands_json(records: List[SlashCommandRecord]) -> str:
    """Serialize slash command records as an indented JSON array."""
    return SLASH_COMMAND_LIST.dump_json(records, indent=2).decode("utf-8")
