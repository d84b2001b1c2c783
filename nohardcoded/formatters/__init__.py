"""
Output formatters for scan results.

Provides multiple output formats including:
- Human-readable CLI output
- JSON for machine processing
- SARIF for IDE and code-scanning integration
"""

from nohardcoded.formatters.cli import CLIFormatter
from nohardcoded.formatters.json_formatter import JSONFormatter
from nohardcoded.formatters.sarif import SARIFFormatter

__all__ = [
    "CLIFormatter",
    "JSONFormatter",
    "SARIFFormatter",
    "get_formatter",
]

FORMATTERS = {
    "text": CLIFormatter,
    "cli": CLIFormatter,
    "json": JSONFormatter,
    "sarif": SARIFFormatter,
}


def get_formatter(format_name: str, **options):
    """
    Get a formatter by name.

    ``options`` are passed to the formatter; each formatter only takes the
    ones it understands (``use_color``, ``verbose``, ``include_suppressed``).
    """
    formatter_class = FORMATTERS.get(format_name.lower())
    if formatter_class is None:
        raise ValueError(f"Unknown format: {format_name}")

    if formatter_class is CLIFormatter:
        return CLIFormatter(
            use_color=options.get("use_color", True),
            verbose=options.get("verbose", False),
            show_suppressed=options.get("include_suppressed", False),
        )
    return formatter_class(include_suppressed=options.get("include_suppressed", False))
