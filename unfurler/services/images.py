"""Pixel dimensions of raw image responses."""

import io

from PIL import Image, UnidentifiedImageError


class ImageDecodeError(Exception):
    """Raised when bytes cannot be read as an image."""


def decode_dimensions(content: bytes) -> tuple[int, int]:
    """Return ``(width, height)`` of an encoded image.

    Only the header is read; the pixel data is never decoded.
    """
    if not content:
        raise ImageDecodeError("Empty image body")
    try:
        with Image.open(io.BytesIO(content)) as img:
            return img.size
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageDecodeError(f"Unable to decode image: {e}") from e
