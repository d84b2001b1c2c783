"""
Static baselines shared across the package.

These are process-wide constants; nothing in the package mutates them.
"""

from typing import FrozenSet, Tuple


# Literal forms that are never treated as secrets, compared lower-cased.
NON_SENSITIVE_VALUES: FrozenSet[str] = frozenset({
    "true",
    "false",
    "null",
    "undefined",
    "unknown",
    "nan",
    "infinity",
    "-infinity",
    # Digit-only placeholders
    "0000",
    "00000",
    "000000",
    "1234",
    "12345",
    "123456",
    "1234567890",
})

# Key-name fragments that usually denote a sensitive variable.
DEFAULT_IDENTIFIERS: Tuple[str, ...] = (
    "API",
    "URL",
    "TOKEN",
    "PASSWORD",
    "SECRET",
    "UUID",
    "KEY",
    "DOMAIN",
)

# Environment files searched, in priority order, when none is given.
ENV_FILES: Tuple[str, ...] = (
    ".env.production",
    ".env.development",
    ".env.local",
    ".env",
    ".env.local.example",
    ".env.example",
)

# Values at or below this many characters (after trimming) are never flagged.
MIN_SENSITIVE_LENGTH = 5

RULE_ID = "HARDCODED-ENV-001"
RULE_NAME = "Hard-coded Environment Value"
