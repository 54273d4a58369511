"""Filesystem operations for namecraft."""

from namecraft.fs.launch import (
    open_containing_folder,
    open_with_app,
    open_with_default_app,
)
from namecraft.fs.operations import rename
from namecraft.fs.primitives import basename, exists, is_file, list_files

__all__ = [
    "basename",
    "exists",
    "is_file",
    "list_files",
    "open_containing_folder",
    "open_with_app",
    "open_with_default_app",
    "rename",
]
