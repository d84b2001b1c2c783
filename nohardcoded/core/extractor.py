"""
Comparison set extraction.

Turns a parsed environment file into the set of values that source
literals are matched against.
"""

import logging
from typing import Dict, FrozenSet, Generator, List, Mapping, Tuple
from urllib.parse import urlsplit

from nohardcoded.config import MatchConfiguration, MatchMode
from nohardcoded.core.classifier import is_sensitive

logger = logging.getLogger(__name__)

ComparisonSet = FrozenSet[str]
ComparisonIndex = Dict[str, Tuple[str, ...]]


def key_is_selected(key: str, config: MatchConfiguration) -> bool:
    """
    Decide whether an environment key takes part in matching.

    A non-empty ignore list wins over everything else. Otherwise, in
    identifiers mode with a non-empty allow-list, the key must contain at
    least one identifier fragment. With neither list every key is kept.
    """
    key_upper = key.upper()

    if config.ignore:
        return not any(fragment in key_upper for fragment in config.ignore)

    if config.mode == MatchMode.IDENTIFIERS and config.identifiers:
        return any(fragment in key_upper for fragment in config.identifiers)

    return True


def normalize_value(value: str) -> str:
    """
    Reduce URL values to their hostname.

    Anything that is not an absolute URL with a host is returned unchanged.
    """
    try:
        parts = urlsplit(value.strip())
        hostname = parts.hostname
    except ValueError:
        return value
    if parts.scheme and parts.netloc and hostname:
        return hostname
    return value


def iter_candidates(
    env_map: Mapping[str, str],
    config: MatchConfiguration,
) -> Generator[Tuple[str, str], None, None]:
    """Yield ``(key, comparison_value)`` for every selected sensitive entry."""
    for key, value in env_map.items():
        if value is None or not value.strip():
            continue
        if not is_sensitive(value, config.no_sensitive_values):
            continue
        if not key_is_selected(key, config):
            logger.debug("Skipping %s: excluded by key filter", key)
            continue
        yield key, normalize_value(value)


def build_comparison_set(
    env_map: Mapping[str, str],
    config: MatchConfiguration = MatchConfiguration(),
) -> ComparisonSet:
    """
    Build the set of sensitive values to look for in source literals.

    Pure and idempotent; neither argument is modified.
    """
    comparison = frozenset(value for _, value in iter_candidates(env_map, config))
    logger.debug(
        "Built comparison set of %d value(s) from %d environment entries",
        len(comparison),
        len(env_map),
    )
    return comparison


def build_comparison_index(
    env_map: Mapping[str, str],
    config: MatchConfiguration = MatchConfiguration(),
) -> ComparisonIndex:
    """Map each comparison value to the environment keys that produced it."""
    index: Dict[str, List[str]] = {}
    for key, value in iter_candidates(env_map, config):
        index.setdefault(value, []).append(key)
    return {value: tuple(sorted(keys)) for value, keys in index.items()}
