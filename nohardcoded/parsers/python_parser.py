"""
Python literal extraction using Python's built-in ast module.
"""

import ast as python_ast
import io
import logging
import tokenize
from typing import List, Optional

from nohardcoded.parsers.base import BaseParser, Comment, StringLiteral
from nohardcoded.parsers import register_parser

logger = logging.getLogger(__name__)


@register_parser("python")
class PythonParser(BaseParser):
    """
    Parser for Python source code using the built-in ast module.

    Reports every ``str`` constant, including docstrings and the literal
    parts of f-strings. Bytes literals are skipped.
    """

    @property
    def language(self) -> str:
        return "python"

    def extract_literals(self, source: str, file_path: str = "<unknown>") -> Optional[List[StringLiteral]]:
        """Extract decoded string constants from Python source."""
        try:
            tree = python_ast.parse(source, filename=file_path)
        except (SyntaxError, ValueError) as e:
            logger.debug("Could not parse %s: %s", file_path, e)
            return None

        literals = []
        for node in python_ast.walk(tree):
            if not isinstance(node, python_ast.Constant) or not isinstance(node.value, str):
                continue
            start_line = getattr(node, "lineno", 0)
            literals.append(StringLiteral(
                value=node.value,
                start_line=start_line,
                end_line=getattr(node, "end_lineno", None) or start_line,
                start_column=getattr(node, "col_offset", 0),
                end_column=getattr(node, "end_col_offset", None) or 0,
            ))

        literals.sort(key=lambda lit: (lit.start_line, lit.start_column))
        return literals

    def extract_comments(self, source: str, file_path: str = "<unknown>") -> List[Comment]:
        """Extract ``#`` comments with the tokenizer."""
        comments = []
        try:
            for token in tokenize.generate_tokens(io.StringIO(source).readline):
                if token.type == tokenize.COMMENT:
                    comments.append(Comment(text=token.string, start_line=token.start[0], end_line=token.end[0]))
        except (tokenize.TokenError, SyntaxError) as e:
            logger.debug("Could not tokenize %s: %s", file_path, e)
        return comments
