"""Result Merger: combine the local and remote reports."""

from typing import Optional

from ..models import Report


def merge_reports(local: Report, remote: Optional[Report]) -> Report:
    """
    Combine a local report with an optional remote report.

    Local criticals and warnings come first so deterministic findings
    surface regardless of remote ordering. Optimizations and security issues
    only ever come from the remote report. The merged report recomputes its
    summary from the combined buckets, and may be rated EXCELLENT.

    Args:
        local: Report from the heuristic scanner (always present)
        remote: Report from the remote gateway, None when unavailable

    Returns:
        Final report
    """
    if remote is None:
        return local

    return Report(
        critical_errors=[*local.critical_errors, *remote.critical_errors],
        warnings=[*local.warnings, *remote.warnings],
        optimizations=list(remote.optimizations),
        security=list(remote.security),
        merged=True,
    )
