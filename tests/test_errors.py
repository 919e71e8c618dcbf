"""
Tests for validation issue collection and formatting.
"""

from memorybank.validator.errors import (
    IssueCategory,
    Severity,
    ValidationIssue,
    ValidationReport,
)
from memorybank.validator.schema import report_payload


class TestValidationIssue:
    def test_format_without_line(self):
        issue = ValidationIssue("a.md", "missing description header")
        assert issue.format() == "a.md: missing description header"

    def test_format_with_line(self):
        issue = ValidationIssue("a.md", "heading ends with punctuation", line=7)
        assert issue.format() == "a.md:7: heading ends with punctuation"

    def test_defaults(self):
        issue = ValidationIssue("a.md", "x")
        assert issue.severity is Severity.ERROR
        assert issue.category is IssueCategory.STRUCTURE
        assert issue.is_error

    def test_to_dict(self):
        issue = ValidationIssue(
            "a.md", "x", Severity.WARNING, 3, IssueCategory.TYPO, "run --fix-typos"
        )
        assert issue.to_dict() == {
            "path": "a.md",
            "line": 3,
            "message": "x",
            "severity": "warning",
            "category": "typo",
            "fix": "run --fix-typos",
        }


class TestValidationReport:
    def test_empty_report_passes(self):
        report = ValidationReport("instructions")
        assert report.passed
        assert not report.has_errors()
        assert not report.has_warnings()

    def test_warnings_do_not_fail(self):
        report = ValidationReport("markdown")
        report.add_warning("a.md", "possible typo: teh -> the (lines: 1)")
        assert report.passed
        assert report.has_warnings()
        assert report.warnings[0].category is IssueCategory.STYLE

    def test_errors_fail(self):
        report = ValidationReport("chatmodes")
        report.add_error("a.md", "missing model in front-matter")
        assert not report.passed
        assert [i.path for i in report.errors] == ["a.md"]

    def test_issue_order_preserved(self):
        report = ValidationReport("prompts")
        report.add_error("b.md", "first")
        report.add_warning("a.md", "second")
        report.add_error("a.md", "third")
        assert [i.message for i in report.issues] == ["first", "second", "third"]
        assert [i.path for i in report.sorted_issues()] == ["a.md", "a.md", "b.md"]

    def test_extend_sums_files_checked(self):
        total = ValidationReport("markdown")
        for name in ("a.md", "b.md"):
            single = ValidationReport("markdown", files_checked=1)
            single.add_error(name, "hard tabs found (use spaces instead)")
            total.extend(single)
        assert total.files_checked == 2
        assert len(total.errors) == 2
        assert [i.path for i in total.errors] == ["a.md", "b.md"]

    def test_to_dict_matches_payload(self):
        report = ValidationReport("instructions", files_checked=1)
        report.add_error("x.md", "external links are not allowed", category=IssueCategory.POLICY)
        payload = report_payload(report).model_dump()
        assert payload == report.to_dict()
        assert payload["status"] == "FAIL"
        assert payload["issues"][0]["category"] == "policy"
