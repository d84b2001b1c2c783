"""
CLI output formatter for human-readable results.
"""

from typing import Dict, List, Mapping, Optional, Tuple
import sys

from nohardcoded.core.findings import Finding, ScanResult, Severity
from nohardcoded.core.matcher import mask_value


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"

    BG_RED = "\033[41m"


def supports_color() -> bool:
    """Check if the terminal supports color output."""
    if not hasattr(sys.stdout, "isatty"):
        return False
    if not sys.stdout.isatty():
        return False
    return True


class CLIFormatter:
    """
    Formats scan results for human-readable CLI output.

    Suppressed findings are counted in the summary and only listed when
    ``show_suppressed`` is set.
    """

    def __init__(self, use_color: bool = True, verbose: bool = False, show_suppressed: bool = False):
        self.use_color = use_color and supports_color()
        self.verbose = verbose
        self.show_suppressed = show_suppressed

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_color:
            return f"{color}{text}{Colors.RESET}"
        return text

    def _severity_color(self, severity: Severity) -> str:
        colors = {
            Severity.CRITICAL: Colors.BG_RED + Colors.WHITE,
            Severity.HIGH: Colors.RED,
            Severity.MEDIUM: Colors.YELLOW,
            Severity.LOW: Colors.BLUE,
            Severity.INFO: Colors.DIM,
        }
        return colors.get(severity, "")

    def _severity_label(self, severity: Severity) -> str:
        return self._color(f"[{severity.value.upper()}]", self._severity_color(severity))

    def format_result(self, result: ScanResult) -> str:
        """Format a complete scan result."""
        lines = []

        # Header
        lines.append("")
        lines.append(self._color("=" * 70, Colors.DIM))
        lines.append(self._color(" HARD-CODED ENVIRONMENT VALUES ", Colors.BOLD))
        lines.append(self._color("=" * 70, Colors.DIM))
        lines.append("")

        # Summary
        lines.append(self._color("Summary", Colors.BOLD))
        lines.append(self._color("-" * 40, Colors.DIM))
        lines.append(f"  Environment file:  {result.env_file or '-'}")
        lines.append(f"  Sensitive values:  {result.comparison_values}")
        lines.append(f"  Files scanned:     {result.files_scanned}")
        lines.append(f"  Languages:         {', '.join(result.languages_detected) or '-'}")
        lines.append(f"  Scan time:         {result.scan_time_seconds:.2f}s")
        lines.append("")

        # Findings summary
        lines.append(self._color("Findings", Colors.BOLD))
        lines.append(self._color("-" * 40, Colors.DIM))

        if result.total_findings == 0:
            lines.append(self._color("  No hard-coded values found!", Colors.GREEN))
        else:
            lines.append(f"  Findings:          {result.total_findings}")
            lines.append(f"  Files affected:    {result.files_with_findings}")
        if result.suppressed_count > 0:
            lines.append(f"  Suppressed:        {result.suppressed_count}")
        lines.append("")

        findings_by_file: Dict[str, List[Finding]] = {}
        for finding in result.findings:
            if finding.suppressed and not self.show_suppressed:
                continue
            findings_by_file.setdefault(finding.location.file_path, []).append(finding)

        # Detailed findings
        if findings_by_file:
            lines.append(self._color("=" * 70, Colors.DIM))
            lines.append(self._color(" DETAILED FINDINGS ", Colors.BOLD))
            lines.append(self._color("=" * 70, Colors.DIM))
            lines.append("")

            for file_path, findings in findings_by_file.items():
                lines.append(self._color(file_path, Colors.CYAN))
                lines.append("")

                for finding in findings:
                    lines.extend(self._format_finding(finding))
                    lines.append("")

        # Errors
        if result.errors:
            lines.append(self._color("=" * 70, Colors.DIM))
            lines.append(self._color(" ERRORS ", Colors.RED))
            lines.append(self._color("=" * 70, Colors.DIM))
            for error in result.errors:
                lines.append(f"  - {error}")
            lines.append("")

        return "\n".join(lines)

    def _format_finding(self, finding: Finding) -> list:
        """Format a single finding."""
        lines = []

        severity_label = self._severity_label(finding.severity)
        location = f"{finding.location.file_path}:{finding.location.start_line}:{finding.location.start_column + 1}"

        if finding.suppressed:
            title = self._color(f"[SUPPRESSED] {finding.title}", Colors.DIM)
        else:
            title = self._color(finding.title, Colors.BOLD)

        lines.append(f"  {severity_label} {title}")
        lines.append(f"  {self._color('Location:', Colors.DIM)} {location}")
        lines.append(f"  {self._color('Rule:', Colors.DIM)} {finding.rule_id}")
        if finding.env_keys:
            lines.append(f"  {self._color('Variables:', Colors.DIM)} {', '.join(finding.env_keys)}")
        lines.append(f"  {self._color('Value:', Colors.DIM)} {finding.masked_value}")

        lines.append("")
        lines.append(f"  {finding.description}")

        # Code snippet
        if finding.snippet:
            lines.append("")
            lines.append(self._color("  Code:", Colors.DIM))

            if self.verbose:
                before = finding.snippet.context_before[-3:]
                for i, ctx_line in enumerate(before):
                    line_num = finding.snippet.highlighted_line - len(before) + i
                    lines.append(self._color(f"    {line_num:4} | {ctx_line}", Colors.DIM))

            lines.append(self._color(
                f"  > {finding.snippet.highlighted_line:4} | {finding.snippet.code}",
                Colors.RED if finding.severity >= Severity.HIGH else Colors.YELLOW
            ))

            if self.verbose:
                for i, ctx_line in enumerate(finding.snippet.context_after[:3]):
                    line_num = finding.snippet.highlighted_line + 1 + i
                    lines.append(self._color(f"    {line_num:4} | {ctx_line}", Colors.DIM))

        if finding.remediation:
            lines.append("")
            lines.append(self._color("  Remediation:", Colors.GREEN))
            lines.append(f"    {finding.remediation}")

        lines.append(self._color("  " + "-" * 66, Colors.DIM))

        return lines

    def format_finding(self, finding: Finding) -> str:
        """Format a single finding."""
        return "\n".join(self._format_finding(finding))

    def format_values(self, index: Mapping[str, Tuple[str, ...]], env_file: Optional[str] = None) -> str:
        """List the environment keys feeding the comparison set, values masked."""
        lines = []
        if env_file:
            lines.append(self._color(f"Environment file: {env_file}", Colors.BOLD))

        rows = sorted((key, mask_value(value)) for value, keys in index.items() for key in keys)
        if not rows:
            lines.append(self._color("No sensitive values selected.", Colors.YELLOW))
            return "\n".join(lines)

        width = max(len(key) for key, _ in rows)
        for key, masked in rows:
            lines.append(f"  {key:<{width}}  {masked}")
        lines.append("")
        lines.append(f"{len(index)} sensitive value(s) from {len(rows)} variable(s)")
        return "\n".join(lines)
