"""
Value classification.

Decides whether a single environment value is secret-like enough to be
worth flagging when it shows up as a literal in source code.
"""

import re
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Iterable, Tuple

from nohardcoded.constants import MIN_SENSITIVE_LENGTH, NON_SENSITIVE_VALUES


# Formats tried after ISO 8601 parsing fails.
DATE_FORMATS: Tuple[str, ...] = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%d.%m.%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%a %b %d %Y",
    "%a %b %d %Y %H:%M:%S",
)

_ISO_ZULU = re.compile(r"[zZ]$")
_ISO_FRACTION = re.compile(r"(\.\d+)")


def is_sensitive(value: str, extra_non_sensitive: Iterable[str] = ()) -> bool:
    """
    Return True if ``value`` should be treated as a secret.

    Rules are applied in order and the first one that matches wins:

    1. values of at most four characters (after trimming) are not sensitive;
    2. values in the built-in baseline or in ``extra_non_sensitive``
       (case-insensitive) are not sensitive;
    3. values that parse as a number are not sensitive;
    4. values that parse as a date or timestamp are not sensitive;
    5. everything else is sensitive.

    Never raises: a value that fails to parse simply falls through to the
    next rule.
    """
    if len(value.strip()) < MIN_SENSITIVE_LENGTH:
        return False

    excluded = NON_SENSITIVE_VALUES | {v.lower() for v in extra_non_sensitive}
    if value.lower() in excluded:
        return False

    if is_numeric(value):
        return False

    if is_date(value):
        return False

    return True


def is_numeric(value: str) -> bool:
    """Check whether the whole value is a numeric literal."""
    text = value.strip()
    if not text or "_" in text:
        return False
    try:
        float(text)
        return True
    except ValueError:
        pass
    try:
        # Prefixed integers: 0x1F, 0o17, 0b101
        int(text, 0)
        return True
    except ValueError:
        return False


def is_date(value: str) -> bool:
    """Check whether the value is a calendar date or timestamp."""
    text = value.strip()
    if not text or not any(ch.isdigit() for ch in text):
        return False

    if _parse_iso(text):
        return True

    for fmt in DATE_FORMATS:
        try:
            datetime.strptime(text, fmt)
            return True
        except ValueError:
            continue

    try:
        return parsedate_to_datetime(text) is not None
    except (TypeError, ValueError, IndexError):
        return False


def _parse_iso(text: str) -> bool:
    # fromisoformat only learned "Z" and arbitrary fraction widths in 3.11
    candidate = _ISO_ZULU.sub("+00:00", text)
    candidate = _ISO_FRACTION.sub(lambda m: m.group(1)[:7].ljust(7, "0"), candidate, count=1)
    try:
        datetime.fromisoformat(candidate)
        return True
    except ValueError:
        return False
