# memorybank/validator/errors.py
"""Validation issue collection and formatting."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Severity(str, Enum):
    """Severity of a validation issue."""
    ERROR = "error"
    WARNING = "warning"


class IssueCategory(str, Enum):
    """What kind of rule produced an issue."""
    STRUCTURE = "structure"  # delimiter, marker, blank line, heading layout
    POLICY = "policy"  # links, disallowed keys, model/tools values
    STYLE = "style"  # cosmetic, never blocks acceptance
    TYPO = "typo"


@dataclass(frozen=True)
class ValidationIssue:
    """A single finding against one file."""

    path: str
    message: str
    severity: Severity = Severity.ERROR
    line: Optional[int] = None
    category: IssueCategory = IssueCategory.STRUCTURE
    fix: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def format(self) -> str:
        """Format as ``path: message`` or ``path:line: message``."""
        if self.line is not None:
            return f"{self.path}:{self.line}: {self.message}"
        return f"{self.path}: {self.message}"

    def sort_key(self) -> Tuple[str, int]:
        """Sort key for deterministic ordering."""
        return (self.path, self.line or 0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert issue to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "line": self.line,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "fix": self.fix,
        }


@dataclass
class ValidationReport:
    """Collects the issues produced by one validator run.

    Issues keep the order in which they were added. ``passed`` only looks at
    errors; warnings are reported but never fail a run.
    """

    name: str
    files_checked: int = 0
    _issues: List[ValidationIssue] = field(default_factory=list, repr=False)

    def add_error(
        self,
        path: str,
        message: str,
        line: Optional[int] = None,
        category: IssueCategory = IssueCategory.STRUCTURE,
        fix: Optional[str] = None,
    ) -> None:
        """Add a validation error."""
        self._issues.append(
            ValidationIssue(path, message, Severity.ERROR, line, category, fix)
        )

    def add_warning(
        self,
        path: str,
        message: str,
        line: Optional[int] = None,
        category: IssueCategory = IssueCategory.STYLE,
        fix: Optional[str] = None,
    ) -> None:
        """Add a validation warning (style guideline, not an error)."""
        self._issues.append(
            ValidationIssue(path, message, Severity.WARNING, line, category, fix)
        )

    def extend(self, other: "ValidationReport") -> None:
        """Extend with issues and file count from another report."""
        self._issues.extend(other._issues)
        self.files_checked += other.files_checked

    @property
    def issues(self) -> Tuple[ValidationIssue, ...]:
        return tuple(self._issues)

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self._issues if i.is_error]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self._issues if not i.is_error]

    @property
    def passed(self) -> bool:
        return not self.has_errors()

    def has_errors(self) -> bool:
        """Check if any errors were collected."""
        return any(i.is_error for i in self._issues)

    def has_warnings(self) -> bool:
        """Check if any warnings were collected."""
        return any(not i.is_error for i in self._issues)

    def sorted_issues(self) -> List[ValidationIssue]:
        """Get issues in deterministic order."""
        return sorted(self._issues, key=lambda i: i.sort_key())

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "status": "PASS" if self.passed else "FAIL",
            "files_checked": self.files_checked,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "issues": [i.to_dict() for i in self._issues],
        }
