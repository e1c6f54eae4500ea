"""Heuristic Issue Builder: turn scanner findings into a local report."""

from typing import List

from ..models import CriticalError, CodeWarning, Priority, Report
from ..utils import get_logger
from .scanner import BraceBalance, LineFinding, ScanResult, scan_source


NULL_CHECK_EXAMPLE = "if (object != null) { object.method(); } // instead of: object.method() != null"


def brace_errors(braces: BraceBalance, source: str) -> List[CriticalError]:
    """Build at most one critical error for unbalanced braces."""
    if braces.missing_close:
        missing = braces.missing_close
        return [CriticalError(
            type="Syntax Error",
            line=braces.last_open_line,
            description=f"Missing {missing} closing brace(s) '}}'.",
            impact="Code will not compile. Incomplete code block structure.",
            fix_recommendation="Add the missing closing brace(s) to properly close all code blocks.",
            code_example="Your code with fix:\n" + source + "\n" + "}\n" * missing,
            priority=Priority.HIGH,
        )]

    if braces.extra_close:
        extra = braces.extra_close
        return [CriticalError(
            type="Syntax Error",
            line=None,
            description=f"{extra} extra closing brace(s) '}}' found.",
            impact="Code will not compile. Incorrect code block structure.",
            fix_recommendation="Remove the extra closing brace(s) to balance all code blocks.",
            code_example="Review your code and remove extra closing braces",
            priority=Priority.HIGH,
        )]

    return []


def semicolon_warning(finding: LineFinding) -> CodeWarning:
    return CodeWarning(
        type="Syntax Warning",
        line=finding.line,
        description="Possible missing semicolon at end of line.",
        best_practice="End statements with semicolons in Java.",
        fix_recommendation="Add a semicolon at the end of this line if it's a statement.",
        code_example=finding.text + ";",
        priority=Priority.MEDIUM,
    )


def null_check_warning(finding: LineFinding) -> CodeWarning:
    return CodeWarning(
        type="Null Pointer Risk",
        line=finding.line,
        description="Possible null pointer exception. Null check appears after method/property access.",
        best_practice="Always check for null before accessing object methods or properties.",
        fix_recommendation="Rearrange code to check for null before accessing the object.",
        code_example=NULL_CHECK_EXAMPLE,
        priority=Priority.HIGH,
    )


def build_report(scan: ScanResult, source: str) -> Report:
    """
    Convert scanner findings into a local-only report.

    Warnings keep scan order: unterminated statements first, then null
    checks. The summary is derived from the buckets by Report itself.

    Args:
        scan: Findings from the line scanner
        source: The scanned source text (used in the brace fix example)

    Returns:
        Local Report
    """
    warnings = [semicolon_warning(f) for f in scan.missing_semicolons]
    warnings.extend(null_check_warning(f) for f in scan.null_check_after_access)

    return Report(
        critical_errors=brace_errors(scan.braces, source),
        warnings=warnings,
    )


def analyze_locally(source: str) -> Report:
    """Run the line scanner and build the local report."""
    logger = get_logger()

    report = build_report(scan_source(source), source)
    summary = report.summary
    logger.debug(
        f"Local analysis: {summary.critical_count} critical, "
        f"{summary.warning_count} warnings ({summary.overall_code_quality.value})"
    )
    return report
