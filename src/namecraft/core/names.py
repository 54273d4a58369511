"""Collision-free name generation for renames.

Two generators feed the rename protocol:
- resolve_safe_name: the human-facing final name, suffixed ``stem(N)ext``
  when the desired name is taken.
- generate_temp_name: an ephemeral ``~temp_`` staging name for the first
  phase of a two-phase rename.

Both check existence and return a name; neither creates anything, so the
result can be taken by another process before the caller uses it.
"""

import logging
import os
import time
from pathlib import Path, PurePath
from typing import Union

from namecraft.errors import ExhaustedError

logger = logging.getLogger(__name__)

MAX_SUFFIX = 9999
MAX_TEMP_ATTEMPTS = 1000
TEMP_PREFIX = "~temp_"


def _occupied(directory: Path, name: str) -> bool:
    # lexists: a dangling symlink still owns the name
    return os.path.lexists(directory / name)


def _split_name(name: str) -> tuple[str, str]:
    pure = PurePath(name)
    return pure.stem, pure.suffix


def resolve_safe_name(directory: Union[str, Path], desired_name: str) -> str:
    """Return a name in *directory* that does not collide with an existing entry.

    Args:
        directory: Directory the name will live in.
        desired_name: Preferred file name (no directory part).

    Returns:
        *desired_name* unchanged if free, otherwise the first free name of
        ``stem(1)ext`` ... ``stem(9999)ext``.

    Raises:
        ExhaustedError: If all 9999 suffixed candidates exist.

    Example:
        >>> resolve_safe_name("/photos", "beach.jpg")  # beach.jpg exists
        'beach(1).jpg'
    """
    directory = Path(directory)
    if not _occupied(directory, desired_name):
        return desired_name

    stem, ext = _split_name(desired_name)
    for counter in range(1, MAX_SUFFIX + 1):
        candidate = f"{stem}({counter}){ext}"
        if not _occupied(directory, candidate):
            logger.debug(f"Resolved collision for {desired_name} -> {candidate}")
            return candidate

    raise ExhaustedError(
        f"No free name for {desired_name} in {directory} "
        f"after {MAX_SUFFIX} attempts"
    )


def generate_temp_name(directory: Union[str, Path], original_name: str) -> str:
    """Return an unused ``~temp_{stem}_{millis}{seq}{ext}`` name in *directory*.

    The timestamp is read once; only the sequence number changes between
    attempts, so iteration only happens when a previous call in the same
    millisecond already claimed the name.

    Raises:
        ExhaustedError: After 1000 occupied candidates.
    """
    directory = Path(directory)
    stem, ext = _split_name(original_name)
    millis = time.time_ns() // 1_000_000
    for sequence in range(MAX_TEMP_ATTEMPTS):
        candidate = f"{TEMP_PREFIX}{stem}_{millis}{sequence}{ext}"
        if not _occupied(directory, candidate):
            return candidate

    raise ExhaustedError(
        f"No free temporary name for {original_name} in {directory} "
        f"after {MAX_TEMP_ATTEMPTS} attempts"
    )


__all__ = [
    "MAX_SUFFIX",
    "MAX_TEMP_ATTEMPTS",
    "TEMP_PREFIX",
    "generate_temp_name",
    "resolve_safe_name",
]
