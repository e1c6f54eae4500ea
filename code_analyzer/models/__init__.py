"""Data models for code analysis."""

from .issue import Priority, CriticalError, CodeWarning, Optimization, SecurityIssue
from .report import CodeQuality, Summary, Report, derive_quality

__all__ = [
    "Priority",
    "CriticalError",
    "CodeWarning",
    "Optimization",
    "SecurityIssue",
    "CodeQuality",
    "Summary",
    "Report",
    "derive_quality",
]
