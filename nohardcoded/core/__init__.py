"""Core classification, matching and scanning."""

from nohardcoded.core.classifier import is_sensitive, is_numeric, is_date
from nohardcoded.core.extractor import build_comparison_set, build_comparison_index
from nohardcoded.core.matcher import is_candidate_sensitive, find_matches, mask_value
from nohardcoded.core.environment import find_environment_file, load_environment
from nohardcoded.core.findings import Finding, ScanResult, Severity
from nohardcoded.core.engine import ScanEngine

__all__ = [
    "is_sensitive",
    "is_numeric",
    "is_date",
    "build_comparison_set",
    "build_comparison_index",
    "is_candidate_sensitive",
    "find_matches",
    "mask_value",
    "find_environment_file",
    "load_environment",
    "Finding",
    "ScanResult",
    "Severity",
    "ScanEngine",
]
