"""Domain models for the namecraft application."""

from namecraft.models.core import FileMetadata, MediaCategory, PathFacts

__all__ = [
    "FileMetadata",
    "MediaCategory",
    "PathFacts",
]
