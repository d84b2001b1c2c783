"""
Exceptions raised by nohardcoded.
"""

from pathlib import Path
from typing import Optional, Sequence, Union


class NoHardcodedError(Exception):
    """Base class for all errors raised by this package."""


class EnvironmentFileNotFoundError(NoHardcodedError):
    """
    The environment file could not be resolved.

    Raised once per scan, before any source file is read. ``path`` is the
    file that was attempted, or the directory that was searched when no
    explicit file was given.
    """

    def __init__(self, path: Union[str, Path], candidates: Optional[Sequence[str]] = None):
        self.path = str(path)
        self.candidates = tuple(candidates or ())
        if self.candidates:
            message = (
                f"No environment file found in {self.path} "
                f"(tried: {', '.join(self.candidates)})"
            )
        else:
            message = f"The environment file {self.path} does not exist."
        super().__init__(message)


class ConfigurationError(NoHardcodedError, ValueError):
    """Invalid configuration file or match option."""
