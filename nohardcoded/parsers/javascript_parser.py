"""
JavaScript/TypeScript literal extraction using tree-sitter grammars.
"""

from pathlib import Path
from typing import Iterable, List, Optional

from tree_sitter_language_pack import get_parser as get_tree_sitter_parser

from nohardcoded.parsers.base import BaseParser, Comment, StringLiteral
from nohardcoded.parsers import register_parser


STRING_NODE_TYPES = {"string", "template_string"}


def is_string_node(node) -> bool:
    # TypeScript also has an anonymous "string" keyword token in type annotations
    return node.is_named and node.type in STRING_NODE_TYPES


# Grammar used for each file extension
GRAMMAR_BY_EXTENSION = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}


def iter_nodes(node) -> Iterable[object]:
    """Walk a tree depth-first, skipping the inside of string nodes."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if is_string_node(current):
            continue
        stack.extend(reversed(current.children))


@register_parser("javascript")
@register_parser("typescript")
class JavaScriptParser(BaseParser):
    """
    Parser for JavaScript, TypeScript and TSX source code.

    Reports quoted strings, template strings and JSX attribute strings.
    A template string is reported once as a whole, substitutions included,
    and escape sequences are left as written.

    The grammar comes from the file extension; sources without a known
    extension are parsed with ``default_grammar``.
    """

    def __init__(self, default_grammar: str = "javascript"):
        self.default_grammar = default_grammar
        self._language = "javascript" if default_grammar == "javascript" else "typescript"

    @classmethod
    def for_language(cls, language: str) -> "JavaScriptParser":
        return cls(default_grammar="typescript" if language == "typescript" else "javascript")

    @property
    def language(self) -> str:
        return self._language

    def grammar_for(self, file_path: str) -> str:
        return GRAMMAR_BY_EXTENSION.get(Path(file_path).suffix.lower(), self.default_grammar)

    def parse(self, source: str, file_path: str):
        grammar = self.grammar_for(file_path)
        self._language = "javascript" if grammar == "javascript" else "typescript"

        data = source.encode("utf-8")
        return get_tree_sitter_parser(grammar).parse(data), data

    def extract_literals(self, source: str, file_path: str = "<unknown>") -> Optional[List[StringLiteral]]:
        """Extract string literals from JavaScript or TypeScript source."""
        tree, data = self.parse(source, file_path)

        literals = []
        for node in iter_nodes(tree.root_node):
            if not is_string_node(node):
                continue
            raw = data[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
            literals.append(StringLiteral(
                value=raw[1:-1] if len(raw) >= 2 else "",
                start_line=node.start_point[0] + 1,
                end_line=node.end_point[0] + 1,
                start_column=node.start_point[1],
                end_column=node.end_point[1],
            ))

        return literals

    def extract_comments(self, source: str, file_path: str = "<unknown>") -> List[Comment]:
        """Extract ``//`` and ``/* */`` comment nodes."""
        tree, data = self.parse(source, file_path)

        return [
            Comment(
                text=data[node.start_byte:node.end_byte].decode("utf-8", errors="replace"),
                start_line=node.start_point[0] + 1,
                end_line=node.end_point[0] + 1,
            )
            for node in iter_nodes(tree.root_node)
            if node.type == "comment"
        ]
