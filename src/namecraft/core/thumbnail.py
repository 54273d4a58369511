"""Placeholder thumbnails for video files.

The front end shows these in place of a real frame preview. Nothing here opens
or decodes the video; the image depends only on the requested size, and the
path is checked for existence.

The picture is built in four passes over one RGB buffer, each pass reading
what the previous one wrote:
1. vertical gradient background, the BASE_RED/GREEN/BLUE constants scaled
   from 0.3 at the top row towards 1.0 at the bottom
2. soft circular highlight in the centre (saturating add)
3. white play triangle inside the highlight, apex on the left
4. black badge with a white border in the bottom-right corner

The finished buffer is JPEG-encoded with Pillow and returned as base64.
"""

import base64
import logging
import os
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from PIL import Image

from namecraft.core.classifier import classify
from namecraft.errors import EncodeError, NotFoundError
from namecraft.utils.config import DEFAULT_THUMBNAIL_QUALITY

logger = logging.getLogger(__name__)

# Gradient base colour, scaled by a per-row factor in [0.3, 1.0].
BASE_RED = 25
BASE_GREEN = 45
BASE_BLUE = 30

HIGHLIGHT_BOOST = 60
HIGHLIGHT_SCALE = 1.2
TRIANGLE_SCALE = 0.8
BADGE_MAX_WIDTH = 40
BADGE_MAX_HEIGHT = 12
BADGE_MARGIN = 2

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def _put(buf: bytearray, width: int, height: int, x: int, y: int, rgb) -> None:
    if 0 <= x < width and 0 <= y < height:
        i = (y * width + x) * 3
        buf[i : i + 3] = bytes(rgb)


def _fill_gradient(buf: bytearray, width: int, height: int) -> None:
    for y in range(height):
        factor = (y / height) * 0.7 + 0.3
        row = bytes(
            (int(BASE_RED * factor), int(BASE_GREEN * factor), int(BASE_BLUE * factor))
        )
        start = y * width * 3
        buf[start : start + width * 3] = row * width


def _highlight_radius(width: int, height: int) -> float:
    return (min(width, height) // 4) * HIGHLIGHT_SCALE


def _add_highlight(buf: bytearray, width: int, height: int) -> None:
    cx, cy = width // 2, height // 2
    radius = _highlight_radius(width, height)
    r2 = radius * radius
    if r2 <= 0:
        return
    reach = int(radius) + 1
    for y in range(cy - reach, cy + reach + 1):
        if not 0 <= y < height:
            continue
        for x in range(cx - reach, cx + reach + 1):
            if not 0 <= x < width:
                continue
            d2 = (x - cx) ** 2 + (y - cy) ** 2
            if d2 > r2:
                continue
            boost = int((1 - d2 / r2) * HIGHLIGHT_BOOST)
            i = (y * width + x) * 3
            for c in range(3):
                buf[i + c] = min(255, buf[i + c] + boost)


def _draw_play_triangle(buf: bytearray, width: int, height: int) -> None:
    cx, cy = width // 2, height // 2
    size = int(_highlight_radius(width, height) * TRIANGLE_SCALE)
    if size <= 0:
        return
    left = cx - size // 2
    half_height = size / 2
    span = max(size - 1, 1)
    for dx in range(size):
        # Apex at the left column, widening linearly to full height on the right.
        limit = half_height * (dx / span)
        for dy in range(-int(half_height), int(half_height) + 1):
            if abs(dy) <= limit:
                _put(buf, width, height, left + dx, cy + dy, WHITE)


def _draw_badge(buf: bytearray, width: int, height: int) -> None:
    badge_w = min(width // 3, BADGE_MAX_WIDTH)
    badge_h = min(height // 6, BADGE_MAX_HEIGHT)
    if badge_w <= 0 or badge_h <= 0:
        return
    x0 = width - badge_w - BADGE_MARGIN
    y0 = height - badge_h - BADGE_MARGIN
    for y in range(y0, y0 + badge_h):
        for x in range(x0, x0 + badge_w):
            edge = y in (y0, y0 + badge_h - 1) or x in (x0, x0 + badge_w - 1)
            _put(buf, width, height, x, y, WHITE if edge else BLACK)


def render_placeholder(width: int, height: int) -> bytearray:
    """Render the placeholder picture as a raw RGB8 buffer, row-major.

    Pixel ``(x, y)`` starts at byte ``(y * width + x) * 3``. Writes that would
    land outside the buffer are skipped.
    """
    buf = bytearray(width * height * 3)
    _fill_gradient(buf, width, height)
    _add_highlight(buf, width, height)
    _draw_play_triangle(buf, width, height)
    _draw_badge(buf, width, height)
    return buf


def encode_jpeg_base64(buf: bytearray, width: int, height: int, quality: int) -> str:
    """JPEG-encode an RGB buffer and return it as standard base64 text.

    Raises:
        EncodeError: If Pillow cannot build or compress the image.
    """
    try:
        img = Image.frombytes("RGB", (width, height), bytes(buf))
        out = BytesIO()
        img.save(out, format="JPEG", quality=quality)
    except (OSError, ValueError) as e:
        raise EncodeError(f"Failed to encode thumbnail: {e}") from e
    return base64.b64encode(out.getvalue()).decode("ascii")


def synthesize_video_thumbnail(
    path: Union[str, Path],
    width: int,
    height: int,
    quality: int = DEFAULT_THUMBNAIL_QUALITY,
    seek_time: Optional[float] = None,
) -> str:
    """Return a base64 JPEG placeholder thumbnail for the video at *path*.

    Args:
        path: Video file; only its existence is checked.
        width: Thumbnail width in pixels.
        height: Thumbnail height in pixels.
        quality: JPEG quality (1-95).
        seek_time: Accepted for compatibility with frame-grabbing callers and
            ignored; no frame is decoded.

    Raises:
        NotFoundError: If *path* does not exist.
        EncodeError: If the size is not positive or encoding fails.
    """
    if not os.path.exists(path):
        raise NotFoundError(f"File not found: {path}")
    if width <= 0 or height <= 0:
        raise EncodeError(f"Invalid thumbnail size: {width}x{height}")

    # The badge is meant to carry the format label, but no text is drawn yet.
    label = classify(path).extension.lstrip(".").upper()
    logger.debug(f"Placeholder thumbnail {width}x{height} for {path} [{label}]")

    buf = render_placeholder(width, height)
    return encode_jpeg_base64(buf, width, height, quality)


__all__ = [
    "encode_jpeg_base64",
    "render_placeholder",
    "synthesize_video_thumbnail",
]
