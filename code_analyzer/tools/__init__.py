"""Tools for the code analyzer."""

from .rate_limiter import RateLimiter, shared_rate_limiter, reset_shared_rate_limiter
from .report_formatter import format_report_markdown, report_to_json
from .pdf_export import export_pdf, DEFAULT_PDF_NAME

__all__ = [
    "RateLimiter",
    "shared_rate_limiter",
    "reset_shared_rate_limiter",
    "format_report_markdown",
    "report_to_json",
    "export_pdf",
    "DEFAULT_PDF_NAME",
]
