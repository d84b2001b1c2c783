"""
Literal matching against a comparison set.
"""

from typing import AbstractSet, Tuple


def is_candidate_sensitive(candidate: str, comparison_set: AbstractSet[str]) -> bool:
    """
    Return True if ``candidate`` contains any member of ``comparison_set``.

    Containment, not equality: a token embedded in a larger literal (for
    example a URL template) still matches.
    """
    if not comparison_set:
        return False
    return any(value in candidate for value in comparison_set)


def find_matches(candidate: str, comparison_set: AbstractSet[str]) -> Tuple[str, ...]:
    """Return every member of ``comparison_set`` found in ``candidate``, sorted."""
    if not comparison_set:
        return ()
    return tuple(sorted(value for value in comparison_set if value in candidate))


def mask_value(value: str) -> str:
    """Mask a secret for display, keeping a short prefix and suffix."""
    if len(value) > 16:
        return value[:4] + "*" * (len(value) - 8) + value[-4:]
    if len(value) > 8:
        return value[:2] + "*" * (len(value) - 2)
    return "*" * len(value)
