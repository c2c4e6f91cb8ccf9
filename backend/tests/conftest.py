"""Shared test fixtures: synthetic captcha strips built from small icon masks."""

from __future__ import annotations

import base64
import io
import struct
import zlib

import numpy as np
import pytest
from PIL import Image

from iconcaptcha.engine.config import DELIMITER_GRAY, DELIMITER_LIGHT
from iconcaptcha.engine.context import Silhouette

# Icon masks (1 = opaque). P has no symmetry, so its orbit has 8 distinct members.
P_MASK = np.array(
    [
        [1, 1],
        [1, 1],
        [1, 0],
    ],
    dtype=bool,
)

T_MASK = np.array(
    [
        [1, 1, 1],
        [0, 1, 0],
        [0, 1, 0],
    ],
    dtype=bool,
)

L_MASK = np.array(
    [
        [1, 0, 0, 0],
        [1, 0, 0, 0],
        [1, 1, 1, 0],
        [1, 1, 1, 1],
    ],
    dtype=bool,
)

ICON_COLOR = (200, 30, 30, 255)
CELL = 20
HEIGHT = 50


def rot_cw(mask: np.ndarray) -> np.ndarray:
    return np.rot90(mask, k=-1)


def flip(mask: np.ndarray) -> np.ndarray:
    return np.fliplr(mask)


def cell_starts(n: int, cell: int = CELL) -> list[int]:
    return [k * (cell + 1) for k in range(n)]


def make_strip(
    masks: list[np.ndarray],
    cell: int = CELL,
    height: int = HEIGHT,
    delimiters: list[tuple[int, int, int]] | None = None,
    y_offset: int = 5,
) -> np.ndarray:
    """RGBA strip: one ``cell``-wide slot per mask, a delimiter column between slots.

    Slot k starts at column k * (cell + 1); each mask is drawn two columns
    into its slot so it sits inside the span the segmenter derives.
    """
    n = len(masks)
    width = n * cell + (n - 1)
    img = np.zeros((height, width, 4), dtype=np.uint8)
    colors = delimiters or [DELIMITER_GRAY] * (n - 1)
    for k, x0 in enumerate(cell_starts(n, cell)):
        mask = masks[k]
        if mask is not None:
            h, w = mask.shape
            region = img[y_offset : y_offset + h, x0 + 2 : x0 + 2 + w]
            region[mask] = ICON_COLOR
        if k < n - 1:
            img[:, x0 + cell, :3] = colors[k]
            img[:, x0 + cell, 3] = 255
    return img


def encode_png_base64(image: np.ndarray) -> str:
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(image, dtype=np.uint8)).save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


def _png_chunk(kind: bytes, body: bytes) -> bytes:
    return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", zlib.crc32(kind + body))


def oversized_png(width: int = 20000, height: int = 20000) -> bytes:
    """PNG whose header claims ``width`` x ``height`` RGBA with a near-empty body."""
    header = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b"\x00"))
        + _png_chunk(b"IEND", b"")
    )


def silhouette_of(mask: np.ndarray, color: tuple[int, int, int, int] = ICON_COLOR) -> Silhouette:
    pixels = np.zeros((*mask.shape, 4), dtype=np.uint8)
    pixels[mask] = color
    return Silhouette(pixels=pixels)


def numbered_silhouette(height: int, width: int) -> Silhouette:
    """Every pixel has a distinct alpha (1..h*w), so any permutation is visible."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :, 3] = np.arange(1, height * width + 1, dtype=np.uint8).reshape(height, width)
    pixels[:, :, 0] = np.arange(height * width, dtype=np.uint8).reshape(height, width)
    return Silhouette(pixels=pixels)


# Outlier is T at position 3; every P variant has two twins.
ODD_ONE_OUT = [P_MASK, rot_cw(P_MASK), T_MASK, flip(P_MASK)]


@pytest.fixture
def odd_one_out_strip() -> np.ndarray:
    return make_strip(ODD_ONE_OUT)


@pytest.fixture
def light_delimiter_strip() -> np.ndarray:
    masks = [T_MASK, L_MASK, flip(L_MASK), rot_cw(rot_cw(L_MASK)), rot_cw(L_MASK)]
    return make_strip(masks, delimiters=[DELIMITER_LIGHT, DELIMITER_GRAY, DELIMITER_LIGHT, DELIMITER_GRAY])


@pytest.fixture
def no_delimiter_strip() -> np.ndarray:
    img = np.zeros((HEIGHT, 60, 4), dtype=np.uint8)
    img[10:20, 10:20] = ICON_COLOR
    return img
