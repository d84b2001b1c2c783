"""
Generic parser for languages without dedicated parsers.

Uses regex-based pattern matching to find quoted string literals. This
provides baseline coverage for any language with C-like string syntax.
"""

import re
from typing import Dict, List, Optional

from nohardcoded.parsers.base import BaseParser, StringLiteral, strip_quotes


_DOUBLE_QUOTED = r'"(?:[^"\\\n]|\\.)*"'
_SINGLE_QUOTED = r"'(?:[^'\\\n]|\\.)*'"
_BACKTICK = r'`[^`]*`'

# Language-specific string literal patterns
LANGUAGE_PATTERNS: Dict[str, re.Pattern] = {
    "java": re.compile(_DOUBLE_QUOTED),
    "kotlin": re.compile(_DOUBLE_QUOTED),
    "scala": re.compile(_DOUBLE_QUOTED),
    "go": re.compile(f"{_DOUBLE_QUOTED}|{_BACKTICK}"),
    "ruby": re.compile(f"{_DOUBLE_QUOTED}|{_SINGLE_QUOTED}"),
    "php": re.compile(f"{_DOUBLE_QUOTED}|{_SINGLE_QUOTED}"),
    "rust": re.compile(r'r?' + _DOUBLE_QUOTED),
    "swift": re.compile(_DOUBLE_QUOTED),
    "c": re.compile(_DOUBLE_QUOTED),
    "cpp": re.compile(_DOUBLE_QUOTED),
    "csharp": re.compile(r'[@$]?' + _DOUBLE_QUOTED),
}


class GenericParser(BaseParser):
    """
    Generic parser that works for any language using regex patterns.

    Matches are line-based, so literals that span lines are only found when
    the language's pattern allows it (Go raw strings).
    """

    def __init__(self, language: str = "unknown"):
        self._language = language.lower()

    @property
    def language(self) -> str:
        return self._language

    def extract_literals(self, source: str, file_path: str = "<unknown>") -> Optional[List[StringLiteral]]:
        """Extract quoted strings with the language's pattern."""
        pattern = LANGUAGE_PATTERNS.get(self._language)
        if pattern is None:
            return []

        literals = []
        for match in pattern.finditer(source):
            start_line = source.count("\n", 0, match.start()) + 1
            end_line = start_line + match.group().count("\n")
            line_start = source.rfind("\n", 0, match.start()) + 1
            end_line_start = source.rfind("\n", 0, match.end()) + 1

            literals.append(StringLiteral(
                value=strip_quotes(match.group()),
                start_line=start_line,
                end_line=end_line,
                start_column=match.start() - line_start,
                end_column=match.end() - end_line_start,
            ))

        return literals
