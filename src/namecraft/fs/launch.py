"""Launch external programs on a path.

Fire-and-forget wrappers: each starts one process and returns without waiting
for it. Missing inputs raise NotFoundError; a process that cannot be started
raises LaunchError.

Platform openers:
- Windows: ``rundll32.exe url.dll,FileProtocolHandler`` / ``explorer /select,``
- macOS: ``open`` / ``open -R``
- Linux and others: ``xdg-open`` (the containing directory is opened, since
  there is no portable way to select a file in it)

The ``launch.opener`` setting replaces the platform opener for
open_with_default_app and open_containing_folder.
"""

import logging
import subprocess
import sys
from pathlib import Path
from typing import List, Union

from namecraft.errors import LaunchError, NotFoundError
from namecraft.utils.config import resolve_setting

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _require(path: PathLike, what: str = "File") -> Path:
    p = Path(path)
    if not p.exists():
        raise NotFoundError(f"{what} not found: {path}")
    return p


def _spawn(command: List[str]) -> None:
    logger.debug(f"Launching: {command}")
    try:
        subprocess.Popen(  # noqa: S603
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except (OSError, ValueError) as e:
        raise LaunchError(f"Could not launch {command[0]}: {e}") from e


def _custom_opener() -> str:
    return resolve_setting("launch.opener", default="")


def default_open_command(path: str) -> List[str]:
    """Return the platform command that opens *path* with its default app."""
    if sys.platform == "win32":
        return ["rundll32.exe", "url.dll,FileProtocolHandler", path]
    if sys.platform == "darwin":
        return ["open", path]
    return ["xdg-open", path]


def reveal_command(path: Path) -> List[str]:
    """Return the platform command that shows *path* in the file manager."""
    if sys.platform == "win32":
        if path.is_dir():
            return ["explorer", str(path)]
        return ["explorer", f"/select,{path}"]
    if sys.platform == "darwin":
        return ["open", "-R", str(path)]
    target = path if path.is_dir() else path.parent
    return ["xdg-open", str(target)]


def open_with_default_app(path: PathLike) -> None:
    """Open *path* with the OS default application.

    Raises:
        NotFoundError: If *path* does not exist.
        LaunchError: If the opener cannot be started.
    """
    p = _require(path)
    opener = _custom_opener()
    command = [opener, str(p)] if opener else default_open_command(str(p))
    _spawn(command)


def open_with_app(app_path: PathLike, path: PathLike) -> None:
    """Open *path* with the application at *app_path*.

    Raises:
        NotFoundError: If the application or the file does not exist.
        LaunchError: If the application cannot be started.
    """
    app = _require(app_path, "Application")
    p = _require(path)
    _spawn([str(app), str(p)])


def open_containing_folder(path: PathLike) -> None:
    """Show *path* in a file manager window.

    Raises:
        NotFoundError: If *path* does not exist.
        LaunchError: If the file manager cannot be started.
    """
    p = _require(path)
    opener = _custom_opener()
    if opener:
        target = p if p.is_dir() else p.parent
        _spawn([opener, str(target)])
        return
    _spawn(reveal_command(p))


__all__ = [
    "default_open_command",
    "open_containing_folder",
    "open_with_app",
    "open_with_default_app",
    "reveal_command",
]
