"""Configuration for the code analyzer."""

from dataclasses import dataclass
from typing import Optional
import os


@dataclass
class AnalyzerConfig:
    """Configuration for a code analysis run."""

    # Remote analysis credential (presence is all that matters)
    api_key: Optional[str] = None
    model: Optional[str] = None  # None lets the SDK pick its default model
    use_remote: bool = True

    # Language named in the remote prompt
    language: str = "Java"

    # Remote call limits
    min_request_interval: float = 20.0  # Seconds between remote dispatches
    request_timeout: float = 10.0       # Seconds before the remote call is abandoned
    max_turns: int = 1

    @property
    def has_credential(self) -> bool:
        """Check if the remote path may be attempted at all."""
        return self.use_remote and bool(self.api_key)

    @classmethod
    def from_env(cls) -> "AnalyzerConfig":
        """Create config from environment variables."""
        return cls(
            api_key=os.environ.get("ANTHROPIC_API_KEY"),
            model=os.environ.get("CODE_ANALYZER_MODEL") or None,
            use_remote=os.environ.get("CODE_ANALYZER_USE_REMOTE", "true").lower() == "true",
            language=os.environ.get("CODE_ANALYZER_LANGUAGE", "Java"),
            min_request_interval=float(os.environ.get("CODE_ANALYZER_MIN_INTERVAL", "20.0")),
            request_timeout=float(os.environ.get("CODE_ANALYZER_TIMEOUT", "10.0")),
        )


# Default configuration
DEFAULT_CONFIG = AnalyzerConfig()
