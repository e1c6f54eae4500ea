"""Data models for issues."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Priority(Enum):
    """Issue priority levels (risk level for security issues)."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @classmethod
    def parse(cls, value: Any, default: Optional["Priority"] = None) -> "Priority":
        """Parse a loosely formatted priority, falling back to default (MEDIUM)."""
        if isinstance(value, Priority):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return default or cls.MEDIUM


def _text(data: dict, key: str, default: Optional[str] = None) -> Optional[str]:
    value = data.get(key)
    if value is None or value == "":
        return default
    return str(value)


def _line(value: Any) -> Optional[int]:
    """Coerce a reported line number to a positive int or None."""
    if isinstance(value, bool):
        return None
    try:
        line = int(value)
    except (TypeError, ValueError):
        return None
    return line if line > 0 else None


def _compact(data: dict) -> dict:
    return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class CriticalError:
    """Code that will not compile or is certain to break at runtime."""
    type: str
    description: str
    priority: Priority = Priority.HIGH
    line: Optional[int] = None
    impact: Optional[str] = None
    fix_recommendation: Optional[str] = None
    code_example: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "CriticalError":
        return cls(
            type=_text(data, "type", "Critical Error"),
            description=_text(data, "description", ""),
            priority=Priority.parse(data.get("priority"), Priority.HIGH),
            line=_line(data.get("line")),
            impact=_text(data, "impact"),
            fix_recommendation=_text(data, "fixRecommendation"),
            code_example=_text(data, "codeExample"),
        )

    def to_dict(self) -> dict:
        return _compact({
            "type": self.type,
            "line": self.line,
            "description": self.description,
            "impact": self.impact,
            "fixRecommendation": self.fix_recommendation,
            "codeExample": self.code_example,
            "priority": self.priority.value,
        })


@dataclass(frozen=True)
class CodeWarning:
    """Style, organization or likely-bug finding that does not block compilation."""
    type: str
    description: str
    priority: Priority = Priority.MEDIUM
    line: Optional[int] = None
    best_practice: Optional[str] = None
    fix_recommendation: Optional[str] = None
    code_example: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "CodeWarning":
        return cls(
            type=_text(data, "type", "Warning"),
            description=_text(data, "description", ""),
            priority=Priority.parse(data.get("priority")),
            line=_line(data.get("line")),
            best_practice=_text(data, "bestPractice"),
            fix_recommendation=_text(data, "fixRecommendation"),
            code_example=_text(data, "codeExample"),
        )

    def to_dict(self) -> dict:
        return _compact({
            "type": self.type,
            "line": self.line,
            "description": self.description,
            "bestPractice": self.best_practice,
            "fixRecommendation": self.fix_recommendation,
            "codeExample": self.code_example,
            "priority": self.priority.value,
        })


@dataclass(frozen=True)
class Optimization:
    """Performance, readability or maintainability suggestion."""
    type: str
    description: str
    priority: Priority = Priority.LOW
    line: Optional[int] = None
    performance_impact: Optional[str] = None
    suggestion: Optional[str] = None
    code_example: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Optimization":
        return cls(
            type=_text(data, "type", "Optimization"),
            description=_text(data, "description", ""),
            priority=Priority.parse(data.get("priority"), Priority.LOW),
            line=_line(data.get("line")),
            performance_impact=_text(data, "performance_impact"),
            suggestion=_text(data, "suggestion"),
            code_example=_text(data, "codeExample"),
        )

    def to_dict(self) -> dict:
        return _compact({
            "type": self.type,
            "line": self.line,
            "description": self.description,
            "performance_impact": self.performance_impact,
            "suggestion": self.suggestion,
            "codeExample": self.code_example,
            "priority": self.priority.value,
        })


@dataclass(frozen=True)
class SecurityIssue:
    """Vulnerability or insecure pattern."""
    vulnerability: str
    description: str
    risk_level: Priority = Priority.MEDIUM
    line: Optional[int] = None
    impact: Optional[str] = None
    mitigation: Optional[str] = None
    secure_code_example: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "SecurityIssue":
        return cls(
            vulnerability=_text(data, "vulnerability", "Security Issue"),
            description=_text(data, "description", ""),
            risk_level=Priority.parse(data.get("risk_level")),
            line=_line(data.get("line")),
            impact=_text(data, "impact"),
            mitigation=_text(data, "mitigation"),
            secure_code_example=_text(data, "secure_code_example"),
        )

    def to_dict(self) -> dict:
        return _compact({
            "vulnerability": self.vulnerability,
            "risk_level": self.risk_level.value,
            "line": self.line,
            "description": self.description,
            "impact": self.impact,
            "mitigation": self.mitigation,
            "secure_code_example": self.secure_code_example,
        })
