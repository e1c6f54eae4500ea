"""Tests for report models, quality derivation and merging.

- Client-perspective behavior verification
- Given-When-Then structure
"""

from code_analyzer.models import (
    CodeQuality,
    CodeWarning,
    CriticalError,
    Optimization,
    Priority,
    Report,
    SecurityIssue,
    derive_quality,
)
from code_analyzer.pipeline import merge_reports


def _remote_report() -> Report:
    return Report(
        critical_errors=[CriticalError(type="Logic Error", description="Always false", line=4)],
        warnings=[CodeWarning(type="Naming", description="Use camelCase", line=2)],
        optimizations=[Optimization(type="Loop", description="Use StringBuilder")],
        security=[SecurityIssue(vulnerability="SQL Injection", description="Concatenated query")],
    )


class TestDeriveQuality:
    """Tests for the quality rule."""

    def test_critical_always_wins(self):
        """Given any critical error, should be CRITICAL_ISSUES regardless of warnings."""
        assert derive_quality(1, 0, 1) == CodeQuality.CRITICAL_ISSUES
        assert derive_quality(2, 10, 30, merged=True) == CodeQuality.CRITICAL_ISSUES

    def test_warning_thresholds(self):
        """Warnings above three need improvement, one to three are satisfactory."""
        assert derive_quality(0, 4, 4) == CodeQuality.NEEDS_IMPROVEMENT
        assert derive_quality(0, 3, 3) == CodeQuality.SATISFACTORY
        assert derive_quality(0, 1, 1) == CodeQuality.SATISFACTORY

    def test_excellent_only_for_merged_reports(self):
        """Given no issues, a merged report is EXCELLENT and a local one GOOD."""
        assert derive_quality(0, 0, 0, merged=True) == CodeQuality.EXCELLENT
        assert derive_quality(0, 0, 0) == CodeQuality.GOOD

    def test_other_issues_keep_good(self):
        """Given only optimizations or security issues, should stay GOOD."""
        assert derive_quality(0, 0, 2, merged=True) == CodeQuality.GOOD

    def test_quality_is_idempotent(self):
        """Recomputing from the same counts yields the same label."""
        report = _remote_report()
        assert report.summary == report.summary


class TestReportFromDict:
    """Tests for parsing remote documents."""

    def test_parses_all_buckets(self):
        """Given a full remote document, should build typed issues."""
        # Given
        data = {
            "criticalErrors": [{
                "type": "Compilation Error",
                "line": 3,
                "description": "Undefined symbol",
                "impact": "Will not compile",
                "fixRecommendation": "Declare it",
                "codeExample": "int y;",
                "priority": "HIGH",
            }],
            "warnings": [{"type": "Unused import", "line": 1, "description": "x", "bestPractice": "Remove it"}],
            "optimizations": [{"type": "Loop", "description": "y", "performance_impact": "O(n^2)", "suggestion": "Cache"}],
            "security": [{"vulnerability": "XSS", "risk_level": "LOW", "description": "z", "mitigation": "Escape"}],
            "summary": {"total_issues": 4},
        }

        # When
        report = Report.from_dict(data)

        # Then
        assert report.critical_errors[0].fix_recommendation == "Declare it"
        assert report.warnings[0].best_practice == "Remove it"
        assert report.optimizations[0].performance_impact == "O(n^2)"
        assert report.security[0].risk_level == Priority.LOW
        assert report.summary.total_issues == 4

    def test_defaults_for_loose_fields(self):
        """Given odd line and priority values, should default instead of failing."""
        # Given
        data = {
            "warnings": [
                {"description": "a", "line": "12", "priority": "high"},
                {"description": "b", "line": "n/a", "priority": "urgent"},
                {"description": "c", "line": 0},
                "not an object",
            ],
            "security": "not a list",
        }

        # When
        report = Report.from_dict(data)

        # Then
        assert [w.line for w in report.warnings] == [12, None, None]
        assert [w.priority for w in report.warnings] == [Priority.HIGH, Priority.MEDIUM, Priority.MEDIUM]
        assert report.warnings[0].type == "Warning"
        assert report.security == []

    def test_self_reported_summary_is_ignored(self):
        """Given a summary that disagrees with the issues, counts come from the issues."""
        # Given
        data = {
            "criticalErrors": [],
            "warnings": [{"type": "Style", "description": "x"}],
            "summary": {"critical_count": 5, "warning_count": 0, "overall_code_quality": "POOR"},
        }

        # When
        summary = Report.from_dict(data).summary

        # Then
        assert summary.critical_count == 0
        assert summary.warning_count == 1
        assert summary.overall_code_quality == CodeQuality.SATISFACTORY

    def test_to_dict_uses_wire_keys(self):
        """Serialized issues should use the remote schema's field names."""
        # Given
        report = Report(warnings=[CodeWarning(
            type="Syntax Warning", description="d", line=1, fix_recommendation="f", code_example="x;"
        )])

        # When
        data = report.to_dict()

        # Then
        assert data["warnings"][0]["fixRecommendation"] == "f"
        assert data["warnings"][0]["codeExample"] == "x;"
        assert data["warnings"][0]["priority"] == "MEDIUM"
        assert data["summary"]["overall_code_quality"] == "SATISFACTORY"


class TestMergeReports:
    """Tests for combining local and remote reports."""

    def test_without_remote_returns_local(self):
        """Given no remote report, the local report is final."""
        # Given
        local = Report(warnings=[CodeWarning(type="Syntax Warning", description="d", line=1)])

        # When
        merged = merge_reports(local, None)

        # Then
        assert merged is local
        assert merged.summary.overall_code_quality == CodeQuality.SATISFACTORY

    def test_local_issues_come_first(self):
        """Given both reports, local criticals and warnings should precede remote ones."""
        # Given
        local = Report(
            critical_errors=[CriticalError(type="Syntax Error", description="brace")],
            warnings=[CodeWarning(type="Syntax Warning", description="semi", line=7)],
        )
        remote = _remote_report()

        # When
        merged = merge_reports(local, remote)

        # Then
        assert [e.type for e in merged.critical_errors] == ["Syntax Error", "Logic Error"]
        assert [w.type for w in merged.warnings] == ["Syntax Warning", "Naming"]
        assert merged.optimizations == remote.optimizations
        assert merged.security == remote.security

    def test_counts_add_up(self):
        """Merged counts should be local plus remote; other buckets remote only."""
        # Given
        local = Report(warnings=[
            CodeWarning(type="Syntax Warning", description="semi", line=1),
            CodeWarning(type="Null Pointer Risk", description="npe", line=2),
        ])
        remote = _remote_report()

        # When
        summary = merge_reports(local, remote).summary

        # Then
        assert summary.critical_count == local.summary.critical_count + remote.summary.critical_count
        assert summary.warning_count == local.summary.warning_count + remote.summary.warning_count
        assert summary.optimization_count == remote.summary.optimization_count
        assert summary.security_count == remote.summary.security_count
        assert summary.total_issues == 6
        assert summary.overall_code_quality == CodeQuality.CRITICAL_ISSUES

    def test_clean_merge_is_excellent(self):
        """Given two empty reports, the merged report should be EXCELLENT."""
        # When
        merged = merge_reports(Report(), Report())

        # Then
        assert merged.summary.total_issues == 0
        assert merged.summary.overall_code_quality == CodeQuality.EXCELLENT

    def test_merge_does_not_mutate_inputs(self):
        """Merging should leave both input reports unchanged."""
        # Given
        local = Report(warnings=[CodeWarning(type="Syntax Warning", description="semi", line=1)])
        remote = _remote_report()

        # When
        merge_reports(local, remote)

        # Then
        assert len(local.warnings) == 1
        assert len(remote.warnings) == 1
        assert remote.merged is False
