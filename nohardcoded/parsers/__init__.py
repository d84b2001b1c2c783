"""
Language parsers for string literal extraction.

Each supported language gets a parser that lists the string literals in a
source file; languages without a dedicated parser fall back to regular
expressions.
"""

from typing import Dict, Optional, Type
from nohardcoded.parsers.base import BaseParser, Comment, StringLiteral

# Registry of available parsers
_parsers: Dict[str, Type[BaseParser]] = {}

# Aliases
LANGUAGE_ALIASES = {
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "rb": "ruby",
    "rs": "rust",
    "cs": "csharp",
    "c#": "csharp",
    "c++": "cpp",
}


def register_parser(language: str):
    """Decorator to register a parser for a language."""
    def decorator(cls: Type[BaseParser]) -> Type[BaseParser]:
        _parsers[language.lower()] = cls
        return cls
    return decorator


def get_parser(language: str) -> Optional[BaseParser]:
    """Get a parser instance for a language."""
    language = language.lower()
    language = LANGUAGE_ALIASES.get(language, language)

    if language in _parsers:
        return _parsers[language].for_language(language)

    if language in LANGUAGE_PATTERNS:
        return GenericParser(language)

    return None


def list_supported_languages() -> list:
    """List all languages that have a parser, dedicated or generic."""
    return sorted(set(_parsers) | set(LANGUAGE_PATTERNS))


# Import parsers to register them
from nohardcoded.parsers.python_parser import PythonParser  # noqa: E402
from nohardcoded.parsers.javascript_parser import JavaScriptParser  # noqa: E402
from nohardcoded.parsers.generic import GenericParser, LANGUAGE_PATTERNS  # noqa: E402

__all__ = [
    "BaseParser",
    "StringLiteral",
    "Comment",
    "get_parser",
    "register_parser",
    "list_supported_languages",
    "PythonParser",
    "JavaScriptParser",
    "GenericParser",
]
