"""Heuristic and model-assisted source code analyzer."""

from .analyzer import CodeAnalyzer, describe_failure
from .config import AnalyzerConfig, DEFAULT_CONFIG
from .models import Report, Summary, CodeQuality

__all__ = [
    "CodeAnalyzer",
    "describe_failure",
    "AnalyzerConfig",
    "DEFAULT_CONFIG",
    "Report",
    "Summary",
    "CodeQuality",
]
