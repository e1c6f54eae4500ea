"""Text renditions of an analysis report."""

import json
from typing import List, Optional

from ..models import Report, CriticalError, CodeWarning, Optimization, SecurityIssue


def report_to_json(report: Report, indent: Optional[int] = 2) -> str:
    """Serialize a report in the same shape the remote schema uses."""
    return json.dumps(report.to_dict(), indent=indent)


def _code_block(code: Optional[str]) -> List[str]:
    if not code:
        return []
    return ["", "```", code.rstrip("\n"), "```"]


def _line_label(line: Optional[int]) -> List[str]:
    return [f"- Line: {line}"] if line else []


def _critical_lines(issue: CriticalError) -> List[str]:
    lines = [f"#### {issue.type}", "", f"- Priority: {issue.priority.value}"]
    lines += _line_label(issue.line)
    lines.append(f"- Description: {issue.description}")
    if issue.impact:
        lines.append(f"- Impact: {issue.impact}")
    if issue.fix_recommendation:
        lines.append(f"- Fix Recommendation: {issue.fix_recommendation}")
    return lines + _code_block(issue.code_example)


def _warning_lines(issue: CodeWarning) -> List[str]:
    lines = [f"#### {issue.type}", "", f"- Priority: {issue.priority.value}"]
    lines += _line_label(issue.line)
    lines.append(f"- Description: {issue.description}")
    if issue.best_practice:
        lines.append(f"- Best Practice: {issue.best_practice}")
    if issue.fix_recommendation:
        lines.append(f"- Fix Recommendation: {issue.fix_recommendation}")
    return lines + _code_block(issue.code_example)


def _optimization_lines(issue: Optimization) -> List[str]:
    lines = [f"#### {issue.type}", "", f"- Priority: {issue.priority.value}"]
    lines += _line_label(issue.line)
    lines.append(f"- Description: {issue.description}")
    if issue.performance_impact:
        lines.append(f"- Performance Impact: {issue.performance_impact}")
    if issue.suggestion:
        lines.append(f"- Suggestion: {issue.suggestion}")
    return lines + _code_block(issue.code_example)


def _security_lines(issue: SecurityIssue) -> List[str]:
    lines = [f"#### {issue.vulnerability}", "", f"- Risk Level: {issue.risk_level.value}"]
    lines += _line_label(issue.line)
    lines.append(f"- Description: {issue.description}")
    if issue.impact:
        lines.append(f"- Impact: {issue.impact}")
    if issue.mitigation:
        lines.append(f"- Mitigation: {issue.mitigation}")
    return lines + _code_block(issue.secure_code_example)


def format_report_markdown(report: Report) -> str:
    """
    Format a report as Markdown.

    Sections: Summary, Critical Errors, Warnings, Optimizations,
    Security Issues. Empty sections are left out.

    Args:
        report: Final analysis report

    Returns:
        Markdown document
    """
    summary = report.summary
    lines = [
        "# Code Analysis Report",
        "",
        "## Analysis Summary",
        "",
        f"- Total Issues: {summary.total_issues}",
        f"- Critical Errors: {summary.critical_count}",
        f"- Warnings: {summary.warning_count}",
        f"- Optimization Suggestions: {summary.optimization_count}",
        f"- Security Issues: {summary.security_count}",
        f"- Overall Code Quality: {summary.overall_code_quality.value}",
    ]

    sections = [
        ("Critical Errors", report.critical_errors, _critical_lines),
        ("Warnings", report.warnings, _warning_lines),
        ("Optimizations", report.optimizations, _optimization_lines),
        ("Security Issues", report.security, _security_lines),
    ]
    for title, issues, render in sections:
        if not issues:
            continue
        lines += ["", f"## {title}"]
        for issue in issues:
            lines.append("")
            lines += render(issue)

    return "\n".join(lines) + "\n"
