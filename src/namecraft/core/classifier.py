"""Path classifier for namecraft.

Derives name, extension and media-category facts from a path string without
touching the filesystem.
"""

from pathlib import PurePath
from typing import Union

from namecraft.models.core import PathFacts

# IMAGE_EXTENSIONS and VIDEO_EXTENSIONS must stay disjoint; PathFacts relies on
# it for is_image/is_video exclusivity.
IMAGE_EXTENSIONS = {
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".bmp",
    ".webp",
    ".tiff",
    ".tif",
    ".svg",
    ".avif",
}

VIDEO_EXTENSIONS = {
    ".mp4",
    ".avi",
    ".mov",
    ".wmv",
    ".flv",
    ".webm",
    ".mkv",
    ".m4v",
    ".3gp",
    ".ogv",
}

IMAGE_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".webp": "image/webp",
    ".tiff": "image/tiff",
    ".tif": "image/tiff",
    ".svg": "image/svg+xml",
    ".avif": "image/avif",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def is_image_extension(ext: str) -> bool:
    """Return True if *ext* (with leading dot, any case) is an image format."""
    return ext.lower() in IMAGE_EXTENSIONS


def is_video_extension(ext: str) -> bool:
    """Return True if *ext* (with leading dot, any case) is a video format."""
    return ext.lower() in VIDEO_EXTENSIONS


def mime_type(ext: str) -> str:
    """Map an extension to the MIME type used for inline image previews.

    Args:
        ext: Extension including the leading dot, e.g. ``.JPG``.

    Returns:
        The image MIME type, or ``application/octet-stream`` for anything
        that is not a known image format.
    """
    return IMAGE_MIME_TYPES.get(ext.lower(), DEFAULT_MIME_TYPE)


def classify(path: Union[str, PurePath]) -> PathFacts:
    """Derive PathFacts from a path string.

    The stem and extension follow final-suffix semantics: ``archive.tar.gz``
    has stem ``archive.tar`` and extension ``.gz``; a dotfile such as
    ``.bashrc`` has no extension. Missing parts degrade to empty strings.

    Args:
        path: Absolute or relative path, or a bare file name.

    Returns:
        PathFacts for the final path component.

    Example:
        >>> classify("photo.JPG").is_image
        True
        >>> classify("readme").extension
        ''
    """
    pure = PurePath(path)
    stem = pure.stem
    extension = pure.suffix
    return PathFacts(
        stem=stem,
        extension=extension,
        full_name=f"{stem}{extension}",
        is_image=is_image_extension(extension),
        is_video=is_video_extension(extension),
    )


__all__ = [
    "IMAGE_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "classify",
    "is_image_extension",
    "is_video_extension",
    "mime_type",
]
