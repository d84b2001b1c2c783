"""
Base class for string literal extractors.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class StringLiteral:
    """
    A string literal found in source code.

    ``value`` is the literal's content without its quotes. Lines are
    1-based; columns are 0-based offsets into the line.
    """
    value: str
    start_line: int
    end_line: int
    start_column: int = 0
    end_column: int = 0

    def __repr__(self) -> str:
        return f"StringLiteral(value={self.value!r}, line={self.start_line})"


@dataclass(frozen=True)
class Comment:
    """A source comment, including its leading marker (``#``, ``//``, ``/*``)."""
    text: str
    start_line: int
    end_line: int


COMMENT_START = re.compile(r"#|//|/\*")


def strip_quotes(raw: str) -> str:
    """Remove a literal's prefix and surrounding quote characters."""
    # String prefixes such as r"", b'', @"", $""
    text = raw.lstrip("@$rRbBuUfF")
    if len(text) >= 2 and text[0] in "\"'`" and text[-1] == text[0]:
        return text[1:-1]
    return raw


def blank_literals(source: str, literals: List[StringLiteral]) -> str:
    """Replace every literal's characters with spaces, keeping line breaks."""
    line_starts = [0]
    for line in source.splitlines(keepends=True):
        line_starts.append(line_starts[-1] + len(line))

    chars = list(source)
    for literal in literals:
        if literal.start_line > len(line_starts) or literal.end_line > len(line_starts):
            continue
        start = line_starts[literal.start_line - 1] + literal.start_column
        end = line_starts[literal.end_line - 1] + literal.end_column
        for i in range(start, min(end, len(chars))):
            if chars[i] != "\n":
                chars[i] = " "
    return "".join(chars)


class BaseParser(ABC):
    """
    Base class for language-specific literal extractors.

    Each parser turns source code into the list of string literals it
    contains, with their positions, and the comments around them.
    """

    @classmethod
    def for_language(cls, language: str) -> "BaseParser":
        """Create a parser for ``language``, one of the names it is registered under."""
        return cls()

    @property
    @abstractmethod
    def language(self) -> str:
        """Return the language this parser handles."""
        pass

    @abstractmethod
    def extract_literals(self, source: str, file_path: str = "<unknown>") -> Optional[List[StringLiteral]]:
        """
        Extract string literals from source code.

        Args:
            source: The source code to parse.
            file_path: The file path (for error messages and dialect detection).

        Returns:
            The literals in source order, or None if the source cannot be parsed.
        """
        pass

    def extract_comments(self, source: str, file_path: str = "<unknown>") -> List[Comment]:
        """
        Extract line comments from source code.

        The default implementation blanks out every string literal and then
        takes the rest of each line from the first comment marker on, so a
        ``#`` or ``//`` inside a string is never mistaken for a comment.
        """
        literals = self.extract_literals(source, file_path) or []
        comments = []
        for number, line in enumerate(blank_literals(source, literals).splitlines(), start=1):
            match = COMMENT_START.search(line)
            if match:
                comments.append(Comment(text=line[match.start():].rstrip(), start_line=number, end_line=number))
        return comments
