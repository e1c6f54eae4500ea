"""Analyze entry point: local scan, optional remote analysis, merge."""

import asyncio
from typing import Optional

from .config import AnalyzerConfig
from .errors import (
    GatewayError,
    GatewayRateLimitError,
    GatewayUnavailable,
    InputValidationError,
)
from .models import Report
from .pipeline import RemoteAnalysisGateway, analyze_locally, merge_reports
from .utils import get_logger


class CodeAnalyzer:
    """
    Runs the full analysis for one piece of source code at a time.

    Gateways built without an explicit limiter share the process-wide one,
    so separate instances still respect the dispatch interval.
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        gateway: Optional[RemoteAnalysisGateway] = None,
    ):
        self.config = config or AnalyzerConfig.from_env()
        self.gateway = gateway or RemoteAnalysisGateway(self.config)
        self.logger = get_logger()

    async def analyze(self, source: str) -> Report:
        """
        Analyze source code.

        The local report is always produced. The remote gateway is consulted
        only when a credential is configured and the local scan found no
        critical errors; any remote failure falls back to the local report.

        Args:
            source: Submitted source text

        Returns:
            Final report

        Raises:
            InputValidationError: Source is empty or whitespace only
        """
        if not source or not source.strip():
            raise InputValidationError("Please enter some code to analyze")

        local = analyze_locally(source)

        if not self.gateway.available:
            self.logger.info("Remote analysis API key is not configured, using basic analysis only")
            return local

        if local.has_critical_errors:
            self.logger.info("Found critical syntax issues, skipping remote analysis to save quota")
            return local

        try:
            remote = await self.gateway.analyze(source)
        except GatewayRateLimitError as e:
            self.logger.warning(f"Rate limit exceeded, returning local analysis only: {e}")
            return local
        except GatewayUnavailable as e:
            self.logger.info(f"{e}, using basic analysis only")
            return local
        except GatewayError as e:
            self.logger.warning(f"Remote analysis failed, returning local analysis only: {e}")
            return local

        return merge_reports(local, remote)

    def analyze_sync(self, source: str) -> Report:
        """Synchronous wrapper for analyze."""
        return asyncio.run(self.analyze(source))


def describe_failure(error: Exception) -> str:
    """
    Build the user-facing message for a failed analysis.

    Args:
        error: Exception that escaped the analysis

    Returns:
        Friendly message
    """
    if isinstance(error, InputValidationError):
        return str(error)

    text = str(error)
    message = "Failed to analyze code. "

    if "API key" in text:
        message += "API key is not configured properly. "
    elif "parse" in text:
        message += "Received invalid response format. "
    elif "network" in text:
        message += "Network error occurred. "

    return message + "Please check the logs for more details."
