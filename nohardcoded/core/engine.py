"""
Main scanning engine.

This module ties the pieces together: it resolves the environment file,
builds the comparison set once per scan, discovers source files, extracts
their string literals and reports every literal that reproduces an
environment value.
"""

import fnmatch
import logging
import os
import re
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, Generator, List, Mapping, Optional, Set, Union

from nohardcoded.config import ScanConfig
from nohardcoded.constants import RULE_ID, RULE_NAME
from nohardcoded.errors import ConfigurationError
from nohardcoded.core.environment import find_environment_file, load_environment
from nohardcoded.core.extractor import (
    ComparisonIndex, ComparisonSet, build_comparison_index, build_comparison_set
)
from nohardcoded.core.findings import CodeLocation, CodeSnippet, Finding, ScanResult, Severity
from nohardcoded.core.matcher import find_matches, mask_value
from nohardcoded.parsers import Comment, StringLiteral, get_parser

logger = logging.getLogger(__name__)


# Language detection by file extension
LANGUAGE_EXTENSIONS: Dict[str, List[str]] = {
    "python": [".py", ".pyw", ".pyi"],
    "javascript": [".js", ".jsx", ".mjs", ".cjs"],
    "typescript": [".ts", ".tsx", ".mts", ".cts"],
    "java": [".java"],
    "kotlin": [".kt", ".kts"],
    "scala": [".scala"],
    "go": [".go"],
    "ruby": [".rb", ".erb", ".rake"],
    "rust": [".rs"],
    "swift": [".swift"],
    "c": [".c", ".h"],
    "cpp": [".cpp", ".cc", ".cxx", ".hpp", ".hh", ".hxx"],
    "csharp": [".cs"],
    "php": [".php"],
}

# Reverse mapping for quick lookup
EXTENSION_TO_LANGUAGE: Dict[str, str] = {}
for lang, exts in LANGUAGE_EXTENSIONS.items():
    for ext in exts:
        EXTENSION_TO_LANGUAGE[ext] = lang


# Always skipped, on top of the configured exclude patterns
DEFAULT_IGNORE_PATTERNS = [
    "node_modules",
    ".git",
    ".svn",
    "__pycache__",
    ".tox",
    "venv",
    ".venv",
    ".idea",
    ".vscode",
    "*.egg-info",
]

# Matched against comment text only, never against whole source lines
SUPPRESSION_PATTERN = re.compile(
    r"^(?:#|//|/\*)\s*(?:noqa|nosec|nohardcoded-ignore)\b",
    re.IGNORECASE,
)

DESCRIPTION = "Do not hardcode sensitive values. Use environment variables instead."


def env_reference(language: str, key: str) -> str:
    """How code in ``language`` would read environment variable ``key``."""
    if language in ("javascript", "typescript"):
        return f"process.env.{key}"
    if language == "python":
        return f'os.environ["{key}"]'
    if language == "ruby":
        return f'ENV["{key}"]'
    if language == "go":
        return f'os.Getenv("{key}")'
    return f"the {key} environment variable"


class ScanEngine:
    """
    Scanning engine for hard-coded environment values.

    The engine:
    1. Resolves and parses the environment file (once per engine)
    2. Builds the comparison set from it
    3. Discovers source files in the target
    4. Extracts string literals with the parser for each language
    5. Reports literals containing a comparison value

    An ``env_map`` may be passed directly to skip the environment file.
    """

    def __init__(
        self,
        config: Optional[Union[ScanConfig, Dict[str, Any]]] = None,
        env_map: Optional[Mapping[str, str]] = None,
        project_root: str = ".",
    ):
        if config is None:
            config = ScanConfig()
        elif isinstance(config, dict):
            config = ScanConfig.from_dict(config)
        self.config = config
        self.project_root = project_root
        self.errors: List[str] = []

        self.max_file_size = config.max_file_size
        self.max_workers = config.max_workers
        self.ignore_patterns = list(DEFAULT_IGNORE_PATTERNS) + list(config.exclude_patterns or [])
        self.include_patterns = config.include_patterns
        try:
            self.severity = Severity(config.severity)
        except ValueError:
            raise ConfigurationError(f"Unknown severity {config.severity!r}")

        self.env_file: Optional[str] = None
        self._env_map: Optional[Dict[str, str]] = dict(env_map) if env_map is not None else None
        self._comparison_set: Optional[ComparisonSet] = None
        self._comparison_index: ComparisonIndex = {}

    def load_comparison_set(self) -> ComparisonSet:
        """
        Build the comparison set, loading the environment file if needed.

        Raises:
            EnvironmentFileNotFoundError: if the environment file is missing.
        """
        if self._comparison_set is not None:
            return self._comparison_set

        if self._env_map is None:
            path = find_environment_file(self.project_root, self.config.env_file)
            self._env_map = load_environment(path, cwd=self.project_root)
            self.env_file = str(path)

        self._comparison_set = build_comparison_set(self._env_map, self.config.match)
        self._comparison_index = build_comparison_index(self._env_map, self.config.match)
        logger.debug("Matching against %d sensitive value(s)", len(self._comparison_set))
        return self._comparison_set

    @property
    def comparison_index(self) -> ComparisonIndex:
        self.load_comparison_set()
        return self._comparison_index

    def detect_language(self, file_path: str) -> Optional[str]:
        """Detect the programming language of a file."""
        ext = os.path.splitext(file_path)[1].lower()
        return EXTENSION_TO_LANGUAGE.get(ext)

    def should_ignore(self, file_path: str, base_path: str) -> bool:
        """Check if a file should be ignored based on patterns."""
        rel_path = os.path.relpath(file_path, base_path).replace(os.sep, "/")
        name = os.path.basename(file_path)

        for pattern in self.ignore_patterns:
            if fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(name, pattern):
                return True
            # "dir/**" also covers the directory itself
            if pattern.endswith("/**") and fnmatch.fnmatch(rel_path, pattern[:-3]):
                return True

        return False

    def is_included(self, file_path: str, base_path: str) -> bool:
        """Check a file against the include patterns, if any are set."""
        if not self.include_patterns:
            return True
        rel_path = os.path.relpath(file_path, base_path).replace(os.sep, "/")
        name = os.path.basename(file_path)
        return any(
            fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(name, pattern)
            for pattern in self.include_patterns
        )

    def discover_files(self, target_path: str) -> Generator[str, None, None]:
        """Discover all files to scan in the target path."""
        target = Path(target_path)

        if target.is_file():
            yield str(target)
            return

        for root, dirs, files in os.walk(target):
            # Filter out ignored directories
            dirs[:] = sorted(d for d in dirs if not self.should_ignore(os.path.join(root, d), target_path))

            for file in sorted(files):
                file_path = os.path.join(root, file)

                if self.should_ignore(file_path, target_path) or not self.is_included(file_path, target_path):
                    continue

                try:
                    if os.path.getsize(file_path) > self.max_file_size:
                        logger.debug("Skipping %s: larger than %d bytes", file_path, self.max_file_size)
                        continue
                except OSError:
                    continue

                # Only include files with recognized extensions
                if self.detect_language(file_path):
                    yield file_path

    def read_file(self, file_path: str) -> Optional[str]:
        """Read a file's contents."""
        try:
            with open(file_path, "r", encoding="utf-8", errors="ignore") as f:
                return f.read()
        except OSError as e:
            self.errors.append(f"Error reading {file_path}: {e}")
            return None

    def extract_literals(self, content: str, language: str, file_path: str) -> Optional[List[StringLiteral]]:
        """Extract literals, recording a scan error when parsing fails."""
        parser = get_parser(language)
        if parser is None:
            return []

        literals = parser.extract_literals(content, file_path)
        if literals is None:
            self.errors.append(f"Error parsing {file_path}: not valid {language} source")
        return literals

    def extract_comments(self, content: str, language: str, file_path: str) -> List[Comment]:
        parser = get_parser(language)
        if parser is None:
            return []
        return parser.extract_comments(content, file_path)

    def scan_file(self, file_path: str) -> List[Finding]:
        """Scan a single file and return findings."""
        language = self.detect_language(file_path)
        if not language:
            return []

        content = self.read_file(file_path)
        if content is None:
            return []

        return self.scan_content(content, language, file_path)

    def scan_content(self, content: str, language: str, file_path: str = "<stdin>") -> List[Finding]:
        """
        Scan code content directly without reading from a file.

        Useful for editor integrations and testing.
        """
        comparison_set = self.load_comparison_set()
        if not comparison_set:
            return []

        literals = self.extract_literals(content, language, file_path)
        if not literals:
            return []

        lines = content.splitlines()
        suppressed_lines: Optional[Set[int]] = None
        findings: List[Finding] = []

        for literal in literals:
            matches = find_matches(literal.value, comparison_set)
            if not matches:
                continue
            finding = self.create_finding(literal, matches, language, file_path, lines)
            # Comments are only needed once something matched
            if suppressed_lines is None:
                suppressed_lines = find_suppressed_lines(self.extract_comments(content, language, file_path))
            if literal.start_line in suppressed_lines:
                finding.suppressed = True
                finding.suppression_reason = "Inline suppression comment"
            findings.append(finding)

        return findings

    def create_finding(
        self,
        literal: StringLiteral,
        matches: tuple,
        language: str,
        file_path: str,
        lines: List[str],
    ) -> Finding:
        """Build the finding for a literal that matched ``matches``."""
        env_keys = sorted({key for value in matches for key in self._comparison_index.get(value, ())})
        # Report the longest match; it is the most specific one
        matched = max(matches, key=len)

        if env_keys:
            names = ", ".join(env_keys)
            description = f"Hard-coded value of environment variable {names}. {DESCRIPTION}"
            remediation = f"Read the value from {env_reference(language, env_keys[0])} instead of hard-coding it."
        else:
            description = DESCRIPTION
            remediation = "Read the value from the environment instead of hard-coding it."

        return Finding(
            rule_id=RULE_ID,
            title=RULE_NAME,
            description=description,
            severity=self.severity,
            location=CodeLocation(
                file_path=file_path,
                start_line=literal.start_line,
                end_line=literal.end_line,
                start_column=literal.start_column,
                end_column=literal.end_column,
            ),
            env_keys=env_keys,
            masked_value=mask_value(matched),
            snippet=get_snippet(lines, literal.start_line),
            remediation=remediation,
            language=language,
        )

    def scan(self, target_path: str) -> ScanResult:
        """
        Scan a target path and return results.

        ``errors`` is cleared first, so each result only carries the
        errors of its own scan.

        Args:
            target_path: Path to a file or directory to scan.

        Returns:
            ScanResult containing all findings and metadata.

        Raises:
            EnvironmentFileNotFoundError: if the environment file is missing.
        """
        start_time = time.time()
        self.errors = []
        comparison_set = self.load_comparison_set()

        all_findings: List[Finding] = []
        languages_detected: Set[str] = set()
        files_scanned = 0

        files = list(self.discover_files(target_path))
        if self.env_file:
            env_path = os.path.abspath(self.env_file)
            files = [f for f in files if os.path.abspath(f) != env_path]
        logger.debug("Discovered %d file(s) under %s", len(files), target_path)

        if not comparison_set:
            logger.warning("No sensitive values found in the environment file; nothing to match")

        # Scan files (parallel if multiple); the comparison set is read-only
        if len(files) > 1 and self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = {executor.submit(self.scan_file, f): f for f in files}

                for future in as_completed(futures):
                    file_path = futures[future]
                    try:
                        all_findings.extend(future.result())
                        files_scanned += 1
                        languages_detected.add(self.detect_language(file_path))
                    except Exception as e:
                        logger.debug("Scan of %s failed", file_path, exc_info=True)
                        self.errors.append(f"Error scanning {file_path}: {e}")
        else:
            for file_path in files:
                try:
                    all_findings.extend(self.scan_file(file_path))
                    files_scanned += 1
                    languages_detected.add(self.detect_language(file_path))
                except Exception as e:
                    logger.debug("Scan of %s failed", file_path, exc_info=True)
                    self.errors.append(f"Error scanning {file_path}: {e}")

        all_findings.sort(key=lambda f: (f.location.file_path, f.location.start_line, f.location.start_column))

        elapsed_time = time.time() - start_time

        return ScanResult(
            findings=all_findings,
            files_scanned=files_scanned,
            scan_time_seconds=round(elapsed_time, 3),
            env_file=self.env_file,
            comparison_values=len(comparison_set),
            languages_detected=sorted(lang for lang in languages_detected if lang),
            errors=list(self.errors),
        )


def find_suppressed_lines(comments: List[Comment]) -> Set[int]:
    """Line numbers covered by a suppression comment (its lines and the next)."""
    suppressed: Set[int] = set()
    for comment in comments:
        if SUPPRESSION_PATTERN.match(comment.text):
            suppressed.update(range(comment.start_line, comment.end_line + 2))
    return suppressed


def get_snippet(lines: List[str], line_number: int, context_lines: int = 3) -> CodeSnippet:
    """Get a code snippet around a line number."""
    start = max(0, line_number - context_lines - 1)
    end = min(len(lines), line_number + context_lines)

    return CodeSnippet(
        code=lines[line_number - 1] if 0 < line_number <= len(lines) else "",
        highlighted_line=line_number,
        context_before=lines[start:max(0, line_number - 1)],
        context_after=lines[line_number:end],
    )


def create_engine(config_path: Optional[str] = None, **kwargs) -> ScanEngine:
    """
    Create a scan engine with configuration.

    Args:
        config_path: Optional path to a configuration file.
        **kwargs: Additional configuration options.

    Returns:
        Configured ScanEngine instance.
    """
    config: Dict[str, Any] = {}

    if config_path:
        from nohardcoded.config import load_config
        config = load_config(config_path)

    config.update(kwargs)

    return ScanEngine(config)
