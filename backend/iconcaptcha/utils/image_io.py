"""Image loading — file, base64 and raw bytes to the canonical RGBA buffer.

Every loader decodes with Pillow and converts once to RGBA, so the engine
never sees palette, grayscale or RGB images. Images without an alpha channel
come out fully opaque.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from iconcaptcha.engine.context import PixelBuffer
from iconcaptcha.engine.errors import DecodeError

logger = logging.getLogger(__name__)

_DATA_URL = re.compile(r"^data:image/[\w.+-]+;base64,", re.IGNORECASE)


def _to_rgba(img: Image.Image) -> PixelBuffer:
    return np.array(img.convert("RGBA"), dtype=np.uint8)


def _decode(data: bytes) -> PixelBuffer:
    try:
        with Image.open(io.BytesIO(data)) as img:
            return _to_rgba(img)
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as e:
        raise DecodeError("Invalid image") from e


def clean_base64(text: str) -> str:
    """Strip quotes, whitespace and a ``data:image/...;base64,`` prefix."""
    text = text.strip().replace('"', "")
    return _DATA_URL.sub("", text)


def load_image(path: str | Path) -> PixelBuffer:
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise DecodeError(f"Cannot read {path}: {e.strerror or e}") from e
    logger.debug("Loaded %s (%d bytes)", path, len(data))
    return _decode(data)


def load_from_base64(text: str) -> PixelBuffer:
    try:
        data = base64.b64decode(clean_base64(text), validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError("Invalid base64") from e
    return _decode(data)


def load_from_bytes(data: bytes) -> PixelBuffer:
    if not data:
        raise DecodeError("Invalid image")
    return _decode(data)


def save_image(image: PixelBuffer, path: str | Path) -> None:
    """Write ``image`` to ``path``; the format follows the file extension."""
    Image.fromarray(np.ascontiguousarray(image, dtype=np.uint8)).save(path)

