"""Remote Analysis Gateway: deeper analysis by a generative model."""

import asyncio
import json
import re
from typing import Awaitable, Callable, Optional

from claude_agent_sdk import (
    ClaudeSDKClient,
    ClaudeAgentOptions,
    AssistantMessage,
    TextBlock,
    ResultMessage,
)

from ..config import AnalyzerConfig, DEFAULT_CONFIG
from ..errors import (
    GatewayError,
    GatewayRateLimitError,
    GatewayTimeout,
    GatewayTransportError,
    GatewayUnavailable,
    ResponseParseError,
)
from ..models import Report
from ..tools import RateLimiter, shared_rate_limiter
from ..utils import get_logger


ANALYSIS_PROMPT = """
As a {language} code analysis expert, perform a comprehensive analysis of the following code. Provide detailed, actionable feedback in the following categories:

1. Critical Errors:
   - Syntax errors
   - Runtime risks
   - Logic flaws
   - Compilation issues

2. Warnings:
   - Code style deviations
   - Unused variables/imports
   - Naming conventions
   - Code organization

3. Optimizations:
   - Performance improvements
   - Resource utilization
   - Code readability
   - Maintainability suggestions

4. Security:
   - Vulnerabilities
   - Best practices
   - Security patterns
   - Input validation

Return ONLY a JSON object with this structure:
{{
  "criticalErrors": [{{
    "type": "string",
    "line": number,
    "description": "string",
    "impact": "string",
    "fixRecommendation": "string",
    "codeExample": "string",
    "priority": "HIGH|MEDIUM|LOW"
  }}],
  "warnings": [{{
    "type": "string",
    "line": number,
    "description": "string",
    "bestPractice": "string",
    "fixRecommendation": "string",
    "codeExample": "string",
    "priority": "HIGH|MEDIUM|LOW"
  }}],
  "optimizations": [{{
    "type": "string",
    "description": "string",
    "performance_impact": "string",
    "suggestion": "string",
    "codeExample": "string",
    "priority": "HIGH|MEDIUM|LOW"
  }}],
  "security": [{{
    "vulnerability": "string",
    "risk_level": "HIGH|MEDIUM|LOW",
    "description": "string",
    "impact": "string",
    "mitigation": "string",
    "secure_code_example": "string"
  }}],
  "summary": {{
    "total_issues": number,
    "critical_count": number,
    "warning_count": number,
    "optimization_count": number,
    "security_count": number,
    "overall_code_quality": "string"
  }}
}}

{language} code to analyze:
{code}"""

SYSTEM_PROMPT = """You are a static code analysis service. Answer with a single JSON
object and nothing else. Do not use tools."""

FENCE_PATTERN = re.compile(r"```(?:json)?\n?|\n?```")

# Provider messages that mean the call was rejected for quota reasons
RATE_LIMIT_MARKERS = ("429", "quota", "rate limit", "rate_limit", "resource_exhausted")


Fetch = Callable[[str], Awaitable[str]]


def clean_response(text: str) -> str:
    """Strip code-block fencing (with an optional json tag) from a payload."""
    return FENCE_PATTERN.sub("", text).strip()


def parse_response(text: Optional[str]) -> Report:
    """
    Parse a remote payload into a report.

    Args:
        text: Raw text returned by the model

    Returns:
        Report built from the JSON object

    Raises:
        ResponseParseError: Payload is empty, not JSON, or not an object
    """
    if not text or not text.strip():
        raise ResponseParseError("Empty response from remote analysis")

    cleaned = clean_response(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Failed to parse remote response: {e}") from e

    if not isinstance(data, dict):
        raise ResponseParseError(
            f"Invalid response format: expected a JSON object, got {type(data).__name__}"
        )

    report = Report.from_dict(data)

    claimed = data.get("summary")
    if isinstance(claimed, dict):
        derived = report.summary.to_dict()
        mismatched = [
            key for key in ("critical_count", "warning_count", "optimization_count", "security_count")
            if key in claimed and claimed[key] != derived[key]
        ]
        if mismatched:
            get_logger().debug(f"Ignoring remote summary counts that disagree with its issues: {mismatched}")

    return report


def is_rate_limit_message(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in RATE_LIMIT_MARKERS)


def _discard_late_result(task: asyncio.Task):
    """Consume the outcome of a call that lost the race against the timeout."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        get_logger().debug(f"Late remote analysis failed after timeout: {error}")
    else:
        get_logger().debug("Late remote analysis response discarded")


class RemoteAnalysisGateway:
    """
    Boundary to the external code-analysis model.

    Handles:
    - Credential gating
    - Process-wide rate limiting (shared RateLimiter)
    - Timeout racing
    - Response cleaning and parsing
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        rate_limiter: Optional[RateLimiter] = None,
        fetch: Optional[Fetch] = None,
    ):
        """
        Initialize remote gateway.

        Args:
            config: Analyzer configuration
            rate_limiter: Limiter to throttle with (defaults to the process-wide one)
            fetch: Coroutine function sending a prompt and returning the reply
                text (defaults to a Claude Agent SDK query)
        """
        self.config = config or DEFAULT_CONFIG
        self.rate_limiter = rate_limiter or shared_rate_limiter(self.config.min_request_interval)
        self._fetch = fetch or self._query_model
        self.logger = get_logger()

    @property
    def available(self) -> bool:
        return self.config.has_credential

    def build_prompt(self, source: str) -> str:
        return ANALYSIS_PROMPT.format(language=self.config.language, code=source)

    async def analyze(self, source: str) -> Report:
        """
        Run remote analysis for a piece of source code.

        Args:
            source: Source text to analyze

        Returns:
            Report parsed from the remote reply

        Raises:
            GatewayError: Any failure on the remote path
        """
        if not self.available:
            raise GatewayUnavailable("Remote analysis API key is not configured")

        prompt = self.build_prompt(source)

        await self.rate_limiter.throttle()
        self.logger.info("Requesting remote analysis...")

        text = await self._race_timeout(prompt)
        report = parse_response(text)

        summary = report.summary
        self.logger.info(
            f"Remote analysis complete: {summary.total_issues} issues "
            f"({summary.critical_count} critical, {summary.warning_count} warnings)"
        )
        return report

    async def _race_timeout(self, prompt: str) -> str:
        """Race the remote call against the timeout; the first to settle wins."""
        task = asyncio.ensure_future(self._fetch_classified(prompt))
        done, _ = await asyncio.wait({task}, timeout=self.config.request_timeout)

        if task not in done:
            # The request may still be in flight; its result is ignored
            task.add_done_callback(_discard_late_result)
            raise GatewayTimeout(
                f"Remote analysis timed out after {self.config.request_timeout:g}s"
            )

        return task.result()

    async def _fetch_classified(self, prompt: str) -> str:
        """Call the fetch function and map provider failures to gateway errors."""
        try:
            return await self._fetch(prompt)
        except GatewayError:
            raise
        except Exception as e:
            # The SDK raises bare Exception for control and stream failures
            message = str(e)
            if is_rate_limit_message(message):
                raise GatewayRateLimitError(f"Remote analysis rate limited: {message}") from e
            raise GatewayTransportError(f"Remote analysis failed: {message}") from e

    def build_options(self) -> ClaudeAgentOptions:
        """SDK options for a single text-only turn with every tool switched off."""
        env = {"ANTHROPIC_API_KEY": self.config.api_key} if self.config.api_key else {}
        return ClaudeAgentOptions(
            system_prompt=SYSTEM_PROMPT,
            tools=[],  # an empty allowed_tools list is not forwarded to the CLI
            max_turns=self.config.max_turns,
            model=self.config.model,
            env=env,
        )

    async def _query_model(self, prompt: str) -> str:
        """Send the prompt through the Claude Agent SDK and collect the reply text."""
        options = self.build_options()

        chunks = []
        async with ClaudeSDKClient(options=options) as client:
            await client.query(prompt)

            async for message in client.receive_response():
                if isinstance(message, AssistantMessage):
                    for block in message.content:
                        if isinstance(block, TextBlock):
                            chunks.append(block.text)

                elif isinstance(message, ResultMessage):
                    self.logger.debug(f"Remote analysis finished in {message.duration_ms}ms")
                    if message.is_error:
                        detail = message.result or message.subtype
                        if is_rate_limit_message(str(detail)):
                            raise GatewayRateLimitError(f"Remote analysis rate limited: {detail}")
                        raise GatewayTransportError(f"Remote analysis returned an error: {detail}")

        return "".join(chunks)
