"""Pipeline stages for code analysis."""

from .scanner import scan_source, ScanResult, BraceBalance, LineFinding
from .builder import build_report, analyze_locally
from .gateway import RemoteAnalysisGateway, clean_response, parse_response
from .merge import merge_reports

__all__ = [
    "scan_source",
    "ScanResult",
    "BraceBalance",
    "LineFinding",
    "build_report",
    "analyze_locally",
    "RemoteAnalysisGateway",
    "clean_response",
    "parse_response",
    "merge_reports",
]
