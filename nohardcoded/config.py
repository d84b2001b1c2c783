"""
Configuration for nohardcoded.

Supports YAML and JSON configuration files for choosing the environment
file, the key filters used to build the comparison set, and the scan and
output settings.
"""

import json
import re
from dataclasses import dataclass, field, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Union

import yaml

from nohardcoded.constants import DEFAULT_IDENTIFIERS
from nohardcoded.errors import ConfigurationError


# Default configuration file names to search for
CONFIG_FILE_NAMES = [
    ".nohardcoded.yaml",
    ".nohardcoded.yml",
    ".nohardcoded.json",
    "nohardcoded.yaml",
    "nohardcoded.yml",
    "nohardcoded.json",
]

DEFAULT_EXCLUDE_PATTERNS = [
    "node_modules/**",
    ".git/**",
    "vendor/**",
    "__pycache__/**",
    "*.min.js",
    "dist/**",
    "build/**",
]

_FRAGMENT_PATTERN = re.compile(r"^[A-Z0-9_]+$")


class MatchMode(Enum):
    """How environment keys are selected for matching."""
    # ignore list first, then the identifiers allow-list
    IDENTIFIERS = "identifiers"
    # ignore list and value heuristics only
    HEURISTIC = "heuristic"


def normalize_fragments(fragments: Optional[Iterable[str]], option: str) -> FrozenSet[str]:
    """Upper-case key fragments and reject empty or malformed ones."""
    if fragments is None:
        return frozenset()
    if isinstance(fragments, str):
        raise ConfigurationError(f"'{option}' must be a list of strings, got {fragments!r}")

    result = set()
    for fragment in fragments:
        token = str(fragment).strip().upper()
        if not _FRAGMENT_PATTERN.match(token):
            raise ConfigurationError(
                f"Invalid entry {fragment!r} in '{option}': "
                "expected a non-empty token of letters, digits and underscores"
            )
        result.add(token)
    return frozenset(result)


@dataclass(frozen=True)
class MatchConfiguration:
    """
    Options that shape the comparison set.

    ``identifiers`` and ``ignore`` hold upper-case key-name fragments that
    are compared to environment keys by substring containment.
    ``no_sensitive_values`` adds to the built-in list of values that are
    never treated as secrets.
    """
    identifiers: FrozenSet[str] = frozenset()
    ignore: FrozenSet[str] = frozenset()
    no_sensitive_values: FrozenSet[str] = frozenset()
    mode: MatchMode = MatchMode.IDENTIFIERS

    def __post_init__(self):
        # Frozen, so normalized values go through object.__setattr__
        try:
            mode = MatchMode(self.mode)
        except ValueError:
            choices = ", ".join(m.value for m in MatchMode)
            raise ConfigurationError(f"Unknown match mode {self.mode!r} (expected one of: {choices})")
        if isinstance(self.no_sensitive_values, str):
            raise ConfigurationError("'no_sensitive_values' must be a list of strings")

        object.__setattr__(self, "identifiers", normalize_fragments(self.identifiers, "identifiers"))
        object.__setattr__(self, "ignore", normalize_fragments(self.ignore, "ignore"))
        object.__setattr__(self, "no_sensitive_values", frozenset(str(v) for v in (self.no_sensitive_values or ())))
        object.__setattr__(self, "mode", mode)

    @classmethod
    def create(
        cls,
        identifiers: Optional[Union[str, Iterable[str]]] = None,
        ignore: Optional[Iterable[str]] = None,
        no_sensitive_values: Optional[Iterable[str]] = None,
        mode: Union[str, MatchMode] = MatchMode.IDENTIFIERS,
    ) -> "MatchConfiguration":
        """
        Build a validated configuration from loose input.

        ``identifiers`` may be the string ``"default"`` to use the built-in
        identifier list.
        """
        if identifiers == "default":
            identifiers = DEFAULT_IDENTIFIERS

        return cls(
            identifiers=identifiers,
            ignore=ignore,
            no_sensitive_values=no_sensitive_values,
            mode=mode,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchConfiguration":
        """Create a configuration from a ``match`` config section."""
        return cls.create(
            identifiers=data.get("identifiers"),
            ignore=data.get("ignore"),
            no_sensitive_values=data.get("no_sensitive_values"),
            mode=data.get("mode") or MatchMode.IDENTIFIERS.value,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "identifiers": sorted(self.identifiers),
            "ignore": sorted(self.ignore),
            "no_sensitive_values": sorted(self.no_sensitive_values),
        }


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    format: str = "text"  # text, json, sarif
    output_file: Optional[str] = None
    verbose: bool = False
    show_suppressed: bool = False
    color: bool = True


@dataclass
class ScanConfig:
    """
    Main configuration for a scan.

    Example YAML config:

    ```yaml
    env_file: .env.local
    scan:
      exclude:
        - "node_modules/**"
      max_file_size: 10485760
      max_workers: 4
    match:
      mode: identifiers
      identifiers: [API, TOKEN, SECRET]
      ignore: []
      no_sensitive_values: [localhost]
    output:
      format: text
      color: true
    severity: high
    ```
    """
    # Environment file; None searches the conventional names
    env_file: Optional[str] = None
    match: MatchConfiguration = field(default_factory=MatchConfiguration)

    # Scan settings
    target: str = "."
    exclude_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    include_patterns: Optional[List[str]] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    max_workers: int = 4
    severity: str = "high"

    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a dictionary."""
        data = asdict(self)
        data["match"] = self.match.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScanConfig":
        """Create config from a dictionary."""
        data = dict(data)

        # Handle nested 'scan' section
        if isinstance(data.get("scan"), dict):
            data.update(data.pop("scan"))

        match = data.get("match")
        if match is None:
            data["match"] = MatchConfiguration()
        elif isinstance(match, dict):
            data["match"] = MatchConfiguration.from_dict(match)
        elif not isinstance(match, MatchConfiguration):
            raise ConfigurationError("'match' must be a mapping")

        if isinstance(data.get("output"), dict):
            known_output = {f for f in OutputConfig.__dataclass_fields__}
            data["output"] = OutputConfig(
                **{k: v for k, v in data["output"].items() if k in known_output}
            )

        # Map some common alternative names
        if "exclude" in data:
            data["exclude_patterns"] = data.pop("exclude")
        if "include" in data:
            data["include_patterns"] = data.pop("include")

        # Filter to only known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}

        return cls(**filtered_data)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration from a file.

    Supports YAML and JSON formats.
    """
    path = Path(path)

    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    content = path.read_text(encoding="utf-8")

    try:
        if path.suffix == ".json":
            data = json.loads(content)
        else:
            # YAML is a superset of JSON, so unknown suffixes go through yaml too
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Could not parse configuration file {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")
    return data


def find_config(start_path: str = ".") -> Optional[str]:
    """
    Find a configuration file by searching up the directory tree.

    Returns the path to the first config file found, or None.
    """
    current = Path(start_path).resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in CONFIG_FILE_NAMES:
            config_path = current / name
            if config_path.exists():
                return str(config_path)
        if current == current.parent:
            return None
        current = current.parent


def load_scan_config(path: Optional[str] = None, start_dir: str = ".") -> ScanConfig:
    """
    Load a ScanConfig from a file or create a default one.

    If path is None, searches for a config file starting from start_dir.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return ScanConfig()

    return ScanConfig.from_dict(load_config(path))


def create_default_config() -> str:
    """
    Create a default configuration file content.
    """
    config = {
        "env_file": None,
        "scan": {
            "exclude": list(DEFAULT_EXCLUDE_PATTERNS),
            "max_file_size": 10485760,
            "max_workers": 4,
        },
        "match": {
            "mode": MatchMode.IDENTIFIERS.value,
            "identifiers": list(DEFAULT_IDENTIFIERS),
            "ignore": [],
            "no_sensitive_values": [],
        },
        "output": {
            "format": "text",
            "color": True,
        },
        "severity": "high",
    }

    return yaml.safe_dump(config, default_flow_style=False, sort_keys=False)
