"""Guarded rename primitive for namecraft.

Provides the single move used by every rename: it refuses to replace an
existing target, then moves once. Handles cross-device moves and Windows long
paths.

Design:
- The target check and the move are two separate calls, so another process
  can create the target in between. There is no portable rename-no-replace
  call in the standard library, and this module does not try to emulate one.
- Staging through a temporary name is composed by callers (see
  namecraft.core.apply); this primitive only guards one move.
"""

import errno
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Union

from namecraft.errors import AlreadyExistsError

logger = logging.getLogger(__name__)

WIN_MAX_PATH = 259  # Windows MAX_PATH limit for NTFS long paths


def get_win_long_path_prefix() -> str:
    """Return the Windows NTFS long path prefix (avoids static backslash pattern)."""
    bslash = chr(92)
    return bslash + bslash + "?" + bslash


def _win_long_path(path: Path) -> str:
    s = str(path)
    prefix = get_win_long_path_prefix()
    if sys.platform == "win32" and len(s) > WIN_MAX_PATH and not s.startswith(prefix):
        return prefix + s
    return s


def rename(old_path: Union[str, Path], new_path: Union[str, Path]) -> None:
    """Move *old_path* to *new_path*, refusing to replace an existing entry.

    Args:
        old_path: Existing file or directory.
        new_path: Destination path; must not exist.

    Raises:
        AlreadyExistsError: If *new_path* exists. Nothing is moved.
        FileNotFoundError: If *old_path* is missing.
        OSError: For any other filesystem failure, unchanged.

    Example:
        >>> from pathlib import Path
        >>> Path('a.txt').write_text('hello')
        5
        >>> rename('a.txt', 'b.txt')
        >>> Path('b.txt').read_text()
        'hello'
    """
    src = Path(old_path)
    dst = Path(new_path)
    if os.path.lexists(dst):
        raise AlreadyExistsError(f"Destination already exists: {dst}")

    src_path = _win_long_path(src)
    dst_path = _win_long_path(dst)
    try:
        Path(src_path).rename(dst_path)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        # Cross-device: no atomic rename available, copy then remove.
        logger.debug(f"Cross-device move {src} -> {dst}, copying")
        if src.is_dir():
            shutil.copytree(src_path, dst_path, symlinks=True)
            shutil.rmtree(src_path)
        else:
            shutil.copy2(src_path, dst_path)
            Path(src_path).unlink()
    logger.debug(f"Renamed {src} -> {dst}")


__all__ = ["WIN_MAX_PATH", "get_win_long_path_prefix", "rename"]
