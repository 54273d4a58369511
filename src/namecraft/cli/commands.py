"""CLI commands for namecraft.

Every command answers with exactly one JSON document on stdout:
- success: the operation's record, e.g. ``{"name": "beach(1).jpg"}``
- failure: ``{"error": "<message>"}`` and exit code 1, plus a styled line
  on stderr for anyone watching a terminal.

Design:
- Errors are converted to strings here and nowhere else; the core raises
  NamecraftError subclasses or plain OSError.
- Nothing is retried. The front end decides whether to call again.
- Typer app and Consoles are module level so tests can drive them with
  typer.testing.CliRunner.
"""

import json
import os
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Callable, List, Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.traceback import install as install_traceback

from namecraft.core.apply import apply_renames
from namecraft.core.metadata import get_file_info, get_file_time
from namecraft.core.names import generate_temp_name, resolve_safe_name
from namecraft.core.thumbnail import synthesize_video_thumbnail
from namecraft.errors import NamecraftError
from namecraft.fs import launch, primitives
from namecraft.fs.operations import rename as guarded_rename
from namecraft.utils.config import (
    DEFAULT_THUMBNAIL_HEIGHT,
    DEFAULT_THUMBNAIL_QUALITY,
    DEFAULT_THUMBNAIL_WIDTH,
    KNOWN_SETTINGS,
    parse_setting,
    resolve_setting,
    set_setting,
    setting_default,
)
from namecraft.utils.debug import setup_logger
from namecraft.utils.json import dumps

install_traceback(show_locals=True)

app = typer.Typer(
    name="namecraft",
    help="File operations backend for the namecraft batch renamer.",
    add_completion=False,
)
config_app = typer.Typer(help="Read and write persistent settings.")
app.add_typer(config_app, name="config")
console = Console()
err_console = Console(stderr=True)

_ENV_DISABLE_RICH = "NAMECRAFT_NO_RICH"


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1


class SortKey(str, Enum):
    """Ordering for the list command."""

    NAME = "name"
    TIME = "time"
    NONE = "none"


def _rich_enabled() -> bool:
    return os.getenv(_ENV_DISABLE_RICH, "0").lower() not in {"1", "true", "yes"}


def _emit(data: Any) -> None:  # noqa: ANN401
    sys.stdout.write(dumps(data) + "\n")
    sys.stdout.flush()


def _fail(err: Exception) -> None:
    message = str(err)
    _emit({"error": message})
    if _rich_enabled():
        err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    else:
        sys.stderr.write(f"Error: {message}\n")
    raise typer.Exit(ExitCode.ERROR)


def _run(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
    """Call *func*, turning any expected failure into an error document."""
    try:
        return func(*args, **kwargs)
    except (NamecraftError, OSError, ValueError) as e:
        _fail(e)


@app.callback()
def callback(
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output. "
            "Can also be set with the NAMECRAFT_NO_RICH environment variable."
        ),
    ),
) -> None:
    """File operations backend for the namecraft batch renamer."""
    if no_rich:
        os.environ[_ENV_DISABLE_RICH] = "1"
    setup_logger()


PATH_ARG = Annotated[Path, typer.Argument(help="File or directory path")]
DIR_ARG = Annotated[Path, typer.Argument(help="Directory the name lives in")]
NAME_ARG = Annotated[str, typer.Argument(help="File name without directory")]


@app.command("rename")
def rename_cmd(
    old: Annotated[Path, typer.Argument(help="Existing path")],
    new: Annotated[Path, typer.Argument(help="Destination path; must not exist")],
) -> None:
    """Move OLD to NEW, refusing to replace an existing entry."""
    _run(guarded_rename, old, new)
    _emit({"ok": True})


@app.command("safe-name")
def safe_name(directory: DIR_ARG, name: NAME_ARG) -> None:
    """Print NAME, or the first free NAME(N) variant in DIRECTORY."""
    _emit({"name": _run(resolve_safe_name, directory, name)})


@app.command("temp-name")
def temp_name(directory: DIR_ARG, name: NAME_ARG) -> None:
    """Print an unused ~temp_ staging name for NAME in DIRECTORY."""
    _emit({"name": _run(generate_temp_name, directory, name)})


def _parse_pairs(raw: str) -> List[Tuple[str, str]]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid rename list: {e}") from e
    if not isinstance(data, list) or not all(
        isinstance(p, list) and len(p) == 2 and all(isinstance(s, str) for s in p)
        for p in data
    ):
        raise ValueError("Rename list must be a JSON array of [path, new_name] pairs")
    return [(p[0], p[1]) for p in data]


@app.command("apply")
def apply_cmd(
    pairs: Annotated[
        str,
        typer.Argument(help='JSON array of [path, new_name] pairs, or "-" for stdin'),
    ],
    resolve_conflicts: Annotated[
        bool,
        typer.Option(
            "--resolve-conflicts",
            help="Pick the first free NAME(N) variant when a final name is taken",
        ),
    ] = False,
) -> None:
    """Rename a batch of files through temporary names, rolling back on failure."""
    raw = sys.stdin.read() if pairs == "-" else pairs
    parsed = _run(_parse_pairs, raw)
    result = _run(apply_renames, parsed, resolve_conflicts=resolve_conflicts)
    _emit(result.to_record())
    if not result.success:
        raise typer.Exit(ExitCode.ERROR)


@app.command("info")
def info(path: PATH_ARG) -> None:
    """Print name, size and modification time of PATH."""
    _emit(_run(get_file_info, path).to_record())


@app.command("file-time")
def file_time(path: PATH_ARG) -> None:
    """Print a best-effort timestamp for PATH in epoch seconds."""
    _emit({"seconds": get_file_time(path)})


@app.command("thumbnail")
def thumbnail(
    path: PATH_ARG,
    width: Annotated[Optional[int], typer.Option("--width", min=1)] = None,
    height: Annotated[Optional[int], typer.Option("--height", min=1)] = None,
    quality: Annotated[
        Optional[int], typer.Option("--quality", min=1, max=95)
    ] = None,
    seek_time: Annotated[
        Optional[float],
        typer.Option("--seek-time", help="Accepted and ignored; no frame is decoded"),
    ] = None,
) -> None:
    """Print a base64 JPEG placeholder thumbnail for a video file."""
    data = _run(
        synthesize_video_thumbnail,
        path,
        resolve_setting(
            "thumbnail.width", default=DEFAULT_THUMBNAIL_WIDTH, cli_value=width
        ),
        resolve_setting(
            "thumbnail.height", default=DEFAULT_THUMBNAIL_HEIGHT, cli_value=height
        ),
        quality=resolve_setting(
            "thumbnail.quality", default=DEFAULT_THUMBNAIL_QUALITY, cli_value=quality
        ),
        seek_time=seek_time,
    )
    _emit({"data": data})


@app.command("exists")
def exists(path: PATH_ARG) -> None:
    """Print whether PATH exists."""
    _emit({"result": primitives.exists(path)})


@app.command("is-file")
def is_file(path: PATH_ARG) -> None:
    """Print whether PATH is a regular file."""
    _emit({"result": primitives.is_file(path)})


@app.command("basename")
def basename(path: PATH_ARG) -> None:
    """Print the file name of PATH without its extension."""
    _emit({"result": primitives.basename(path)})


@app.command("list")
def list_cmd(
    path: PATH_ARG,
    recursive: Annotated[
        bool, typer.Option("--recursive/--no-recursive", help="Descend into folders")
    ] = True,
    sort: Annotated[SortKey, typer.Option("--sort", case_sensitive=False)] = (
        SortKey.NAME
    ),
    desc: Annotated[bool, typer.Option("--desc", help="Reverse the order")] = False,
) -> None:
    """Print the regular files under PATH."""
    files = _run(primitives.list_files, path, recursive=recursive)
    if sort is SortKey.NAME:
        files = sorted(files, key=lambda f: Path(f).name.lower(), reverse=desc)
    elif sort is SortKey.TIME:
        files = sorted(files, key=get_file_time, reverse=desc)
    elif desc:
        files = list(reversed(files))
    _emit({"files": files})


@app.command("open")
def open_cmd(
    path: PATH_ARG,
    app_path: Annotated[
        Optional[Path], typer.Option("--app", help="Application to open PATH with")
    ] = None,
) -> None:
    """Open PATH with its default application, or with --app."""
    if app_path is not None:
        _run(launch.open_with_app, app_path, path)
    else:
        _run(launch.open_with_default_app, path)
    _emit({"ok": True})


@app.command("reveal")
def reveal(path: PATH_ARG) -> None:
    """Show PATH in a file manager window."""
    _run(launch.open_containing_folder, path)
    _emit({"ok": True})


SETTING_KEY = Annotated[
    str, typer.Argument(help=f"One of: {', '.join(sorted(KNOWN_SETTINGS))}")
]


@config_app.command("set")
def config_set(
    key: SETTING_KEY,
    value: Annotated[str, typer.Argument(help="New value")],
) -> None:
    """Store VALUE for KEY in config.toml."""
    parsed = _run(parse_setting, key, value)
    _run(set_setting, key, parsed)
    _emit({"key": key, "value": parsed})


@config_app.command("get")
def config_get(key: SETTING_KEY) -> None:
    """Print the effective value of KEY (env > config file > default)."""
    default = _run(setting_default, key)
    _emit({"key": key, "value": resolve_setting(key, default=default)})


@app.command()
def version() -> None:
    """Show the version of namecraft."""
    from namecraft.__about__ import __version__

    console.print(f"namecraft version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
