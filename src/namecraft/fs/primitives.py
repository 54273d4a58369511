"""Thin filesystem queries used by the front end.

Each function wraps one OS call; none of them keep state.
"""

import os
from pathlib import Path
from typing import List, Union

PathLike = Union[str, Path]


def exists(path: PathLike) -> bool:
    """Return True if *path* resolves to filesystem metadata."""
    return os.path.exists(path)


def is_file(path: PathLike) -> bool:
    """Return True if *path* exists and is a regular file."""
    return os.path.isfile(path)


def basename(path: PathLike) -> str:
    """Return the file stem of *path* (name without its final extension).

    The front end appends the extension itself, so this deliberately drops it:
    ``basename("/a/clip.mkv") == "clip"``. Returns ``""`` for paths with no
    final component.
    """
    return Path(path).stem


def list_files(path: PathLike, recursive: bool = True) -> List[str]:
    """List regular files under *path*.

    Symlinks are reported by their own type and never followed, so a link to
    a file is not listed and a link to a directory is not entered.

    Args:
        path: Directory to walk. A regular file is returned as the only entry.
        recursive: Descend into subdirectories when True.

    Returns:
        File paths as strings, each directory's entries in name order.

    Raises:
        OSError: If *path* is missing or unreadable, or (when recursive) a
            subdirectory cannot be read.
    """
    root = Path(path)
    if root.is_file():
        return [str(root)]
    if not root.is_dir():
        # Missing root: let scandir raise the FileNotFoundError.
        os.scandir(root).close()

    if not recursive:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
        return [e.path for e in entries if e.is_file(follow_symlinks=False)]

    def _raise(err: OSError) -> None:
        raise err

    files: List[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            full = os.path.join(dirpath, name)
            if os.path.isfile(full) and not os.path.islink(full):
                files.append(full)
    return files


__all__ = ["basename", "exists", "is_file", "list_files"]
