"""
Environment file resolution and parsing.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import dotenv_values

from nohardcoded.constants import ENV_FILES
from nohardcoded.errors import EnvironmentFileNotFoundError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def find_environment_file(cwd: PathLike = ".", env_file: Optional[str] = None) -> Optional[Path]:
    """
    Resolve the environment file for a project directory.

    An explicit ``env_file`` is resolved against ``cwd`` and returned whether
    or not it exists, so a caller can name the missing file. Without one,
    the conventional names are tried in priority order and the first
    existing file wins. Returns None when nothing is found.
    """
    base = Path(cwd)

    if env_file is not None and env_file.strip():
        return (base / env_file).resolve()

    for name in ENV_FILES:
        candidate = base / name
        if candidate.is_file():
            logger.debug("Using environment file %s", candidate)
            return candidate.resolve()

    return None


def load_environment(path: Optional[PathLike], cwd: PathLike = ".") -> Dict[str, str]:
    """
    Parse an environment file into a key/value mapping.

    ``path`` is normally the result of :func:`find_environment_file`; None
    means the search came up empty. Keys declared without a value are
    dropped. Later definitions of a key win.

    Raises:
        EnvironmentFileNotFoundError: if there is no file to read.
    """
    if path is None:
        raise EnvironmentFileNotFoundError(Path(cwd).resolve(), candidates=ENV_FILES)

    path = Path(path)
    if not path.is_file():
        raise EnvironmentFileNotFoundError(path)

    values = dotenv_values(path, interpolate=False)
    env_map = {key: value for key, value in values.items() if value is not None}
    logger.debug("Loaded %d variable(s) from %s", len(env_map), path)
    return env_map


def resolve_environment(cwd: PathLike = ".", env_file: Optional[str] = None) -> Dict[str, str]:
    """Find and parse the environment file in one step."""
    return load_environment(find_environment_file(cwd, env_file), cwd=cwd)
