"""
nohardcoded

Flags string literals in source code that reproduce sensitive values
already declared in a project's environment file.
"""

__version__ = "1.0.0"
__author__ = "nohardcoded maintainers"

from nohardcoded.config import MatchConfiguration, MatchMode, ScanConfig
from nohardcoded.core.classifier import is_sensitive
from nohardcoded.core.extractor import build_comparison_set
from nohardcoded.core.matcher import is_candidate_sensitive
from nohardcoded.core.engine import ScanEngine
from nohardcoded.errors import (
    NoHardcodedError,
    EnvironmentFileNotFoundError,
    ConfigurationError,
)

__all__ = [
    "MatchConfiguration",
    "MatchMode",
    "ScanConfig",
    "ScanEngine",
    "is_sensitive",
    "build_comparison_set",
    "is_candidate_sensitive",
    "NoHardcodedError",
    "EnvironmentFileNotFoundError",
    "ConfigurationError",
]
