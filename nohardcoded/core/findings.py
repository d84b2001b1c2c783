"""
Finding data structures.

This module defines the structures used to report hard-coded environment
values and the results of a complete scan.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any
import json


class Severity(Enum):
    """Severity levels for findings."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    def __lt__(self, other):
        order = [Severity.INFO, Severity.LOW, Severity.MEDIUM, Severity.HIGH, Severity.CRITICAL]
        return order.index(self) < order.index(other)

    def __le__(self, other):
        return self == other or self < other


@dataclass
class CodeLocation:
    """Represents a location in source code."""
    file_path: str
    start_line: int
    end_line: int
    start_column: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        return f"{self.file_path}:{self.start_line}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_path": self.file_path,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "start_column": self.start_column,
            "end_column": self.end_column,
        }


@dataclass
class CodeSnippet:
    """A snippet of code with context."""
    code: str
    highlighted_line: int
    context_before: List[str] = field(default_factory=list)
    context_after: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "highlighted_line": self.highlighted_line,
            "context_before": self.context_before,
            "context_after": self.context_after,
        }


@dataclass
class Finding:
    """
    A string literal that reproduces a value from the environment file.

    ``env_keys`` names the environment variables whose values were found
    in the literal; ``masked_value`` is safe to print.
    """
    rule_id: str
    title: str
    description: str
    severity: Severity
    location: CodeLocation
    env_keys: List[str] = field(default_factory=list)
    masked_value: str = ""
    snippet: Optional[CodeSnippet] = None
    remediation: Optional[str] = None
    language: str = "unknown"
    suppressed: bool = False
    suppression_reason: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.severity, str):
            self.severity = Severity(self.severity)

    def to_dict(self) -> Dict[str, Any]:
        """Convert finding to a dictionary."""
        result = {
            "rule_id": self.rule_id,
            "title": self.title,
            "description": self.description,
            "severity": self.severity.value,
            "location": self.location.to_dict(),
            "env_keys": self.env_keys,
            "masked_value": self.masked_value,
            "language": self.language,
            "suppressed": self.suppressed,
        }

        if self.snippet:
            result["snippet"] = self.snippet.to_dict()
        if self.remediation:
            result["remediation"] = self.remediation
        if self.suppression_reason:
            result["suppression_reason"] = self.suppression_reason

        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert finding to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


@dataclass
class ScanResult:
    """Results from a complete scan."""
    findings: List[Finding]
    files_scanned: int
    scan_time_seconds: float
    env_file: Optional[str] = None
    comparison_values: int = 0
    languages_detected: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def total_findings(self) -> int:
        return sum(1 for f in self.findings if not f.suppressed)

    @property
    def suppressed_count(self) -> int:
        return sum(1 for f in self.findings if f.suppressed)

    @property
    def files_with_findings(self) -> int:
        return len({f.location.file_path for f in self.findings if not f.suppressed})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": {
                "env_file": self.env_file,
                "comparison_values": self.comparison_values,
                "files_scanned": self.files_scanned,
                "files_with_findings": self.files_with_findings,
                "scan_time_seconds": self.scan_time_seconds,
                "languages_detected": self.languages_detected,
                "total_findings": self.total_findings,
                "suppressed_findings": self.suppressed_count,
            },
            "findings": [f.to_dict() for f in self.findings],
            "errors": self.errors,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
