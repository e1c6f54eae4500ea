"""Data models for analysis reports."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .issue import CriticalError, CodeWarning, Optimization, SecurityIssue


class CodeQuality(Enum):
    """Overall quality label derived from issue counts."""
    EXCELLENT = "EXCELLENT"                  # Merged report with no issues at all
    GOOD = "GOOD"
    SATISFACTORY = "SATISFACTORY"            # 1-3 warnings
    NEEDS_IMPROVEMENT = "NEEDS_IMPROVEMENT"  # More than 3 warnings
    CRITICAL_ISSUES = "CRITICAL_ISSUES"      # At least one critical error


def derive_quality(
    critical_count: int,
    warning_count: int,
    total_issues: int,
    merged: bool = False
) -> CodeQuality:
    """
    Derive the quality label from final counts.

    The rules are checked in order; the first match wins. Only merged
    reports can be EXCELLENT, a clean local-only report stays GOOD.

    Args:
        critical_count: Number of critical errors
        warning_count: Number of warnings
        total_issues: Number of issues across all buckets
        merged: Whether the counts come from a merged local + remote report

    Returns:
        CodeQuality label
    """
    if critical_count > 0:
        return CodeQuality.CRITICAL_ISSUES
    if warning_count > 3:
        return CodeQuality.NEEDS_IMPROVEMENT
    if warning_count > 0:
        return CodeQuality.SATISFACTORY
    if merged and total_issues == 0:
        return CodeQuality.EXCELLENT
    return CodeQuality.GOOD


@dataclass(frozen=True)
class Summary:
    """Aggregate counts of a report. Always derived from the buckets."""
    total_issues: int = 0
    critical_count: int = 0
    warning_count: int = 0
    optimization_count: int = 0
    security_count: int = 0
    overall_code_quality: CodeQuality = CodeQuality.GOOD

    def to_dict(self) -> dict:
        return {
            "total_issues": self.total_issues,
            "critical_count": self.critical_count,
            "warning_count": self.warning_count,
            "optimization_count": self.optimization_count,
            "security_count": self.security_count,
            "overall_code_quality": self.overall_code_quality.value,
        }


@dataclass
class Report:
    """Analysis result: four issue buckets plus a derived summary."""
    critical_errors: List[CriticalError] = field(default_factory=list)
    warnings: List[CodeWarning] = field(default_factory=list)
    optimizations: List[Optimization] = field(default_factory=list)
    security: List[SecurityIssue] = field(default_factory=list)
    merged: bool = False  # True once local and remote results were combined

    @property
    def summary(self) -> Summary:
        """Recompute the summary from the current bucket sizes."""
        critical_count = len(self.critical_errors)
        warning_count = len(self.warnings)
        optimization_count = len(self.optimizations)
        security_count = len(self.security)
        total = critical_count + warning_count + optimization_count + security_count

        return Summary(
            total_issues=total,
            critical_count=critical_count,
            warning_count=warning_count,
            optimization_count=optimization_count,
            security_count=security_count,
            overall_code_quality=derive_quality(
                critical_count, warning_count, total, merged=self.merged
            ),
        )

    @property
    def has_critical_errors(self) -> bool:
        return bool(self.critical_errors)

    @classmethod
    def from_dict(cls, data: dict) -> "Report":
        """
        Build a report from a remote JSON document.

        Missing or malformed buckets are treated as empty and entries that
        are not objects are skipped. The document's own summary is not
        trusted; counts are always recomputed from the parsed buckets.
        """
        return cls(
            critical_errors=[CriticalError.from_dict(d) for d in _entries(data, "criticalErrors")],
            warnings=[CodeWarning.from_dict(d) for d in _entries(data, "warnings")],
            optimizations=[Optimization.from_dict(d) for d in _entries(data, "optimizations")],
            security=[SecurityIssue.from_dict(d) for d in _entries(data, "security")],
        )

    def to_dict(self) -> dict:
        return {
            "criticalErrors": [issue.to_dict() for issue in self.critical_errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
            "optimizations": [issue.to_dict() for issue in self.optimizations],
            "security": [issue.to_dict() for issue in self.security],
            "summary": self.summary.to_dict(),
        }


def _entries(data: dict, key: str) -> List[dict]:
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, dict)]
