"""Errors raised while analyzing code."""


class AnalysisError(Exception):
    """Base class for analyzer errors."""


class InputValidationError(AnalysisError, ValueError):
    """Submitted source text is empty or whitespace only."""


class GatewayError(AnalysisError):
    """Remote analysis failed. Callers fall back to the local report."""


class GatewayUnavailable(GatewayError):
    """No credential is configured for remote analysis."""


class GatewayTimeout(GatewayError):
    """Remote analysis did not answer in time."""


class GatewayTransportError(GatewayError):
    """Remote call failed before a usable payload came back."""


class GatewayRateLimitError(GatewayTransportError):
    """Provider rejected the call because of quota or rate limits."""


class ResponseParseError(GatewayError):
    """Remote payload is empty, not JSON, or not a JSON object."""
