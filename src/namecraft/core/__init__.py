"""Core functionality for namecraft.

This package exposes the classification, naming, metadata and thumbnail
operations the CLI serves to the front end.
- classify: path string -> PathFacts, no filesystem access.
- resolve_safe_name / generate_temp_name: collision-free final and staging
  names for renames.
- get_file_info / get_file_time: strict and best-effort metadata readers.
- synthesize_video_thumbnail: placeholder preview for video files.
"""

from namecraft.core.classifier import classify
from namecraft.core.metadata import get_file_info, get_file_time
from namecraft.core.names import generate_temp_name, resolve_safe_name
from namecraft.core.thumbnail import synthesize_video_thumbnail

__all__ = [
    "classify",
    "generate_temp_name",
    "get_file_info",
    "get_file_time",
    "resolve_safe_name",
    "synthesize_video_thumbnail",
]
