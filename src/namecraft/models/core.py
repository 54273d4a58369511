"""Core domain models for namecraft.

This module defines the records returned to the front end by the classifier
and the metadata extractor.
- Records are pydantic models so they validate on construction and dump
  straight to JSON for the CLI.
- Keys are serialized in camelCase (``fullName``, ``timestampMillis``) because
  that is the shape the front end's file-info type expects.

Design:
- PathFacts is derived from the path string alone; FileMetadata layers the
  filesystem facts (size, modification time) on top of it.
- Optional timestamp fields are omitted entirely when the modification time is
  unreadable, rather than being sent as null.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class MediaCategory(str, Enum):
    """Broad category of a file, decided by its extension."""

    IMAGE = "image"
    VIDEO = "video"
    OTHER = "other"


class PathFacts(BaseModel):
    """Facts derived purely from a path string.

    ``is_image`` and ``is_video`` are mutually exclusive because the two
    extension tables are disjoint.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    stem: str
    """File name without its final extension."""

    extension: str
    """Final extension including the leading dot, original case, or ''."""

    full_name: str
    """stem + extension."""

    is_image: bool = False
    """True when the extension is one of the known image formats."""

    is_video: bool = False
    """True when the extension is one of the known video formats."""

    @property
    def category(self: "PathFacts") -> MediaCategory:
        """Return the MediaCategory matching the image/video flags."""
        if self.is_image:
            return MediaCategory.IMAGE
        if self.is_video:
            return MediaCategory.VIDEO
        return MediaCategory.OTHER

    def to_record(self: "PathFacts") -> Dict[str, Any]:
        """Dump to a camelCase dict, dropping absent optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class FileMetadata(PathFacts):
    """PathFacts plus the filesystem facts of an existing file."""

    size: int
    """Size of the file in bytes."""

    mime_type: str = "application/octet-stream"
    """MIME type used by the front end for inline previews."""

    timestamp_millis: Optional[int] = None
    """Modification time in epoch milliseconds, if readable."""

    time_string: Optional[str] = None
    """Modification time as 'YYYY-MM-DD HH:MM:SS' (UTC), if readable."""
