"""Line Scanner: textual heuristics over raw source lines.

This is not a parser. It does not understand strings, multi-line
expressions or annotations spanning brackets, and accepts false positives.
"""

from dataclasses import dataclass, field
from typing import List, Optional


# Trimmed line endings/prefixes that never need a semicolon
STATEMENT_END_MARKERS = ("{", "}", ";")
COMMENT_PREFIXES = ("//", "/*", "*", "@")
COMMENT_SUFFIX = "*/"

NULL_CHECK = " != null"


@dataclass
class BraceBalance:
    """Brace tally across the whole source."""
    open_count: int = 0
    close_count: int = 0
    last_open_line: Optional[int] = None  # 1-based line of the last '{'

    @property
    def missing_close(self) -> int:
        return max(self.open_count - self.close_count, 0)

    @property
    def extra_close(self) -> int:
        return max(self.close_count - self.open_count, 0)


@dataclass
class LineFinding:
    """A single suspicious line."""
    line: int   # 1-based
    text: str   # Trimmed line content


@dataclass
class ScanResult:
    """Structural findings of one scan."""
    braces: BraceBalance = field(default_factory=BraceBalance)
    missing_semicolons: List[LineFinding] = field(default_factory=list)
    null_check_after_access: List[LineFinding] = field(default_factory=list)


def needs_semicolon(trimmed: str) -> bool:
    """Check if a trimmed line looks like an unterminated statement."""
    if not trimmed:
        return False
    if trimmed.endswith(STATEMENT_END_MARKERS):
        return False
    if trimmed.startswith(COMMENT_PREFIXES) or trimmed.endswith(COMMENT_SUFFIX):
        return False
    return True


def has_null_check_after_access(trimmed: str) -> bool:
    """Check if a member access appears before a '!= null' test on the line."""
    dot = trimmed.find(".")
    check = trimmed.find(NULL_CHECK)
    return dot != -1 and check != -1 and dot < check


def scan_source(source: str) -> ScanResult:
    """
    Scan source text line by line.

    First pass tallies braces and collects unterminated statements,
    second pass collects null checks that follow a member access.

    Args:
        source: Raw source text

    Returns:
        ScanResult with findings in line order
    """
    lines = source.split("\n")
    result = ScanResult()

    for index, line in enumerate(lines, start=1):
        open_count = line.count("{")
        result.braces.open_count += open_count
        result.braces.close_count += line.count("}")
        if open_count > 0:
            result.braces.last_open_line = index

        trimmed = line.strip()
        if needs_semicolon(trimmed):
            result.missing_semicolons.append(LineFinding(line=index, text=trimmed))

    for index, line in enumerate(lines, start=1):
        trimmed = line.strip()
        if has_null_check_after_access(trimmed):
            result.null_check_after_access.append(LineFinding(line=index, text=trimmed))

    return result
