"""File metadata readers.

Two readers with deliberately different failure policies:
- get_file_info is strict: a missing path raises NotFoundError, and an
  unreadable modification time simply leaves the timestamp fields out.
- get_file_time is best effort: it walks modification time, creation time,
  the current time and finally 0, and never raises. Callers use it as a sort
  key only.

Keep the two separate; existing callers depend on each policy.
"""

import logging
import os
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from namecraft.core.classifier import classify, mime_type
from namecraft.errors import NotFoundError
from namecraft.models.core import FileMetadata

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _stat(path: Union[str, Path]) -> os.stat_result:
    return os.stat(path)


def format_timestamp(millis: int) -> str:
    """Render epoch milliseconds as a UTC ``YYYY-MM-DD HH:MM:SS`` string."""
    dt = datetime.fromtimestamp(millis // 1000, tz=timezone.utc)
    return dt.strftime(TIME_FORMAT)


def _modified_millis(st: os.stat_result) -> Optional[int]:
    mtime_ns = getattr(st, "st_mtime_ns", None)
    if mtime_ns is None:
        return None
    # Times before the epoch count as unreadable.
    if mtime_ns < 0:
        return None
    return mtime_ns // 1_000_000


def _created_seconds(st: os.stat_result) -> Optional[int]:
    created = getattr(st, "st_birthtime", None)
    if created is None and sys.platform == "win32":
        # Before 3.12 Windows reports creation time as st_ctime.
        created = getattr(st, "st_ctime", None)
    if created is None or created < 0:
        return None
    return int(created)


def get_file_info(path: Union[str, Path]) -> FileMetadata:
    """Read name, size and modification time of *path*.

    Args:
        path: File (or directory) to inspect.

    Returns:
        FileMetadata. ``timestamp_millis`` and ``time_string`` are None when
        the modification time cannot be read; there is no fallback.

    Raises:
        NotFoundError: If the path has no filesystem metadata.
    """
    try:
        st = _stat(path)
    except OSError as e:
        raise NotFoundError(f"File not found: {path} ({e.strerror or e})") from e

    facts = classify(path)
    millis = _modified_millis(st)
    return FileMetadata(
        **facts.model_dump(),
        size=st.st_size,
        mime_type=mime_type(facts.extension),
        timestamp_millis=millis,
        time_string=format_timestamp(millis) if millis is not None else None,
    )


def get_file_time(path: Union[str, Path]) -> int:
    """Return a plausible timestamp for *path* in whole epoch seconds.

    Tries modification time, then creation time, then the current time, then
    0. Never raises, even for a missing path.
    """
    try:
        st = _stat(path)
    except OSError as e:
        logger.debug(f"Cannot stat {path}: {e}; using current time")
        st = None

    if st is not None:
        millis = _modified_millis(st)
        if millis is not None:
            return millis // 1000
        created = _created_seconds(st)
        if created is not None:
            return created

    now = time.time()
    if now >= 0:
        return int(now)
    return 0


__all__ = ["format_timestamp", "get_file_info", "get_file_time"]
