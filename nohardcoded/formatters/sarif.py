"""
SARIF output formatter for IDE integration.

SARIF (Static Analysis Results Interchange Format) is a standard
format for static analysis tool output, supported by many IDEs
and code review tools.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List

from nohardcoded import __version__
from nohardcoded.constants import RULE_ID, RULE_NAME
from nohardcoded.core.findings import Finding, ScanResult, Severity


SARIF_LEVEL = {
    Severity.CRITICAL: "error",
    Severity.HIGH: "error",
    Severity.MEDIUM: "warning",
    Severity.LOW: "note",
    Severity.INFO: "none",
}

RULE_HELP = (
    "String literals must not repeat values declared in the project's "
    "environment file. Read the value from the environment instead."
)


class SARIFFormatter:
    """
    Formats scan results in SARIF format.

    SARIF is supported by:
    - GitHub Code Scanning
    - VS Code SARIF Viewer
    - Azure DevOps
    """

    SARIF_VERSION = "2.1.0"
    SCHEMA_URI = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"

    def __init__(self, include_suppressed: bool = False):
        self.include_suppressed = include_suppressed

    def format_result(self, result: ScanResult) -> str:
        """Format a complete scan result in SARIF format."""
        sarif = {
            "$schema": self.SCHEMA_URI,
            "version": self.SARIF_VERSION,
            "runs": [self._create_run(result)],
        }

        return json.dumps(sarif, indent=2)

    def _create_run(self, result: ScanResult) -> Dict[str, Any]:
        return {
            "tool": self._create_tool(),
            "results": [
                self._create_result(finding)
                for finding in result.findings
                if self.include_suppressed or not finding.suppressed
            ],
            "invocations": [self._create_invocation(result)],
        }

    def _create_tool(self) -> Dict[str, Any]:
        return {
            "driver": {
                "name": "nohardcoded",
                "version": __version__,
                "rules": [self._create_rule()],
            }
        }

    def _create_rule(self) -> Dict[str, Any]:
        return {
            "id": RULE_ID,
            "name": RULE_NAME,
            "shortDescription": {
                "text": RULE_NAME,
            },
            "fullDescription": {
                "text": RULE_HELP,
            },
            "help": {
                "text": RULE_HELP,
            },
            "defaultConfiguration": {
                "level": SARIF_LEVEL[Severity.HIGH],
            },
            "properties": {
                "tags": ["security", "secrets"],
            },
        }

    def _create_result(self, finding: Finding) -> Dict[str, Any]:
        """Create a SARIF result object from a finding."""
        result: Dict[str, Any] = {
            "ruleId": finding.rule_id,
            "level": SARIF_LEVEL.get(finding.severity, "warning"),
            "message": {
                "text": finding.description,
            },
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {
                            "uri": finding.location.file_path,
                        },
                        "region": {
                            "startLine": finding.location.start_line,
                            "endLine": finding.location.end_line,
                            "startColumn": finding.location.start_column + 1,  # SARIF is 1-indexed
                            "endColumn": finding.location.end_column + 1,
                        },
                    },
                }
            ],
            "properties": {
                "language": finding.language,
                "envKeys": finding.env_keys,
                "maskedValue": finding.masked_value,
            },
        }

        if finding.snippet:
            result["locations"][0]["physicalLocation"]["region"]["snippet"] = {
                "text": finding.snippet.code,
            }

        if finding.suppressed:
            result["suppressions"] = [
                {
                    "kind": "inSource",
                    "justification": finding.suppression_reason or "Suppressed by inline comment",
                }
            ]

        return result

    def _create_invocation(self, result: ScanResult) -> Dict[str, Any]:
        return {
            "executionSuccessful": len(result.errors) == 0,
            "endTimeUtc": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "toolExecutionNotifications": [
                {
                    "message": {
                        "text": error,
                    },
                    "level": "error",
                }
                for error in result.errors
            ],
        }
