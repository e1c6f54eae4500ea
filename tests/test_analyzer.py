"""Tests for the analyze entry point.

- Client-perspective behavior verification
- Given-When-Then structure
- Minimal mocking (only the remote fetch function is replaced)
"""

import asyncio
import time

import pytest

from code_analyzer import CodeAnalyzer, describe_failure
from code_analyzer.config import AnalyzerConfig
from code_analyzer.errors import InputValidationError, ResponseParseError
from code_analyzer.models import CodeQuality
from code_analyzer.pipeline import RemoteAnalysisGateway


REMOTE_JSON = """```json
{
  "criticalErrors": [],
  "warnings": [{"type": "Naming", "line": 1, "description": "Use a descriptive name", "priority": "LOW"}],
  "optimizations": [{"type": "Constant", "description": "Make it final", "priority": "LOW"}],
  "security": [],
  "summary": {"total_issues": 2, "overall_code_quality": "GOOD"}
}
```"""


class RecordingFetch:
    """Stands in for the remote model and records every prompt."""

    def __init__(self, reply: str = REMOTE_JSON, delay: float = 0.0):
        self.reply = reply
        self.delay = delay
        self.prompts = []

    async def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.reply


def _analyzer(fetch: RecordingFetch, **overrides) -> CodeAnalyzer:
    values = {"api_key": "test-key", "request_timeout": 1.0, "min_request_interval": 0.0}
    values.update(overrides)
    config = AnalyzerConfig(**values)
    return CodeAnalyzer(config, gateway=RemoteAnalysisGateway(config, fetch=fetch))


class TestCodeAnalyzer:
    """Tests for CodeAnalyzer.analyze."""

    @pytest.mark.parametrize("source", ["", "   ", "\n\t\n"])
    def test_empty_input_rejected(self, source):
        """Given empty or whitespace-only input, should raise before any work."""
        # Given
        fetch = RecordingFetch()
        analyzer = _analyzer(fetch)

        # When/Then
        with pytest.raises(InputValidationError):
            analyzer.analyze_sync(source)
        assert fetch.prompts == []

    def test_local_only_without_credential(self):
        """Given no API key, should return the local report without calling out."""
        # Given
        fetch = RecordingFetch()
        analyzer = _analyzer(fetch, api_key=None)

        # When
        report = analyzer.analyze_sync("int x = 5\nint y = 6;")

        # Then
        assert fetch.prompts == []
        assert len(report.warnings) == 1
        assert report.warnings[0].line == 1
        assert report.warnings[0].code_example == "int x = 5;"
        assert report.critical_errors == []
        assert report.summary.overall_code_quality == CodeQuality.SATISFACTORY

    def test_critical_errors_skip_remote(self):
        """Given an unmatched brace, should never reach the gateway."""
        # Given
        fetch = RecordingFetch()
        analyzer = _analyzer(fetch)

        # When
        report = analyzer.analyze_sync("class A { void f() ")

        # Then
        assert fetch.prompts == []
        assert len(report.critical_errors) == 1
        assert report.summary.overall_code_quality == CodeQuality.CRITICAL_ISSUES

    def test_remote_results_are_merged(self):
        """Given a clean local scan and a remote reply, should merge local-first."""
        # Given
        fetch = RecordingFetch()
        analyzer = _analyzer(fetch)

        # When
        report = analyzer.analyze_sync("int value = 5\nint other = 6;")

        # Then
        assert len(fetch.prompts) == 1
        assert "int value = 5" in fetch.prompts[0]
        assert [w.type for w in report.warnings] == ["Syntax Warning", "Naming"]
        assert [o.type for o in report.optimizations] == ["Constant"]
        summary = report.summary
        assert summary.warning_count == 2
        assert summary.optimization_count == 1
        assert summary.total_issues == 3
        assert summary.overall_code_quality == CodeQuality.SATISFACTORY

    def test_clean_code_with_clean_remote_is_excellent(self):
        """Given no issues locally or remotely, quality should be EXCELLENT."""
        # Given
        fetch = RecordingFetch(reply='{"criticalErrors": [], "warnings": []}')
        analyzer = _analyzer(fetch)

        # When
        report = analyzer.analyze_sync("int x = 5;")

        # Then
        assert report.summary.total_issues == 0
        assert report.summary.overall_code_quality == CodeQuality.EXCELLENT

    def test_timeout_falls_back_to_local(self):
        """Given a remote that never answers in time, should return the local report."""
        # Given
        fetch = RecordingFetch(delay=5.0)
        analyzer = _analyzer(fetch, request_timeout=0.05)

        # When
        report = analyzer.analyze_sync("int x = 5\nint y = 6;")

        # Then
        assert len(fetch.prompts) == 1
        assert report.merged is False
        assert len(report.warnings) == 1
        assert report.summary.overall_code_quality == CodeQuality.SATISFACTORY

    def test_malformed_reply_falls_back_to_local(self):
        """Given a non-JSON reply, should return the local report."""
        # Given
        fetch = RecordingFetch(reply="Sorry, I cannot help with that.")
        analyzer = _analyzer(fetch)

        # When
        report = analyzer.analyze_sync("int x = 5;")

        # Then
        assert report.merged is False
        assert report.summary.overall_code_quality == CodeQuality.GOOD

    def test_unexpected_sdk_failure_falls_back_to_local(self):
        """Given a bare exception from the SDK, should still return the local report."""
        # Given
        prompts = []

        async def fetch(prompt):
            prompts.append(prompt)
            raise Exception("Control request timeout: initialize")

        config = AnalyzerConfig(api_key="test-key", request_timeout=1.0, min_request_interval=0.0)
        analyzer = CodeAnalyzer(config, gateway=RemoteAnalysisGateway(config, fetch=fetch))

        # When
        report = analyzer.analyze_sync("int x = 5\nint y = 6;")

        # Then
        assert len(prompts) == 1
        assert report.merged is False
        assert len(report.warnings) == 1
        assert report.summary.overall_code_quality == CodeQuality.SATISFACTORY

    def test_two_analyzers_share_the_dispatch_interval(self):
        """Given two analyzers in one process, the second should wait for the first."""
        # Given
        dispatched = []

        async def fetch(prompt):
            dispatched.append(time.monotonic())
            return REMOTE_JSON

        config = AnalyzerConfig(api_key="test-key", request_timeout=1.0, min_request_interval=0.2)
        first = CodeAnalyzer(config, gateway=RemoteAnalysisGateway(config, fetch=fetch))
        second = CodeAnalyzer(config, gateway=RemoteAnalysisGateway(config, fetch=fetch))

        # When
        first.analyze_sync("int x = 5;")
        second.analyze_sync("int y = 6;")

        # Then
        assert len(dispatched) == 2
        assert dispatched[1] - dispatched[0] >= 0.19


class TestDescribeFailure:
    """Tests for user-facing failure messages."""

    def test_api_key_message(self):
        message = describe_failure(RuntimeError("API key is invalid"))
        assert message == (
            "Failed to analyze code. API key is not configured properly. "
            "Please check the logs for more details."
        )

    def test_parse_message(self):
        message = describe_failure(ResponseParseError("Failed to parse remote response"))
        assert "Received invalid response format." in message

    def test_network_message(self):
        message = describe_failure(ConnectionError("network is down"))
        assert "Network error occurred." in message

    def test_generic_message(self):
        message = describe_failure(RuntimeError("boom"))
        assert message == "Failed to analyze code. Please check the logs for more details."

    def test_input_validation_message_is_kept(self):
        message = describe_failure(InputValidationError("Please enter some code to analyze"))
        assert message == "Please enter some code to analyze"
