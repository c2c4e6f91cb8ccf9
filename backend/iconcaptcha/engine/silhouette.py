"""Silhouette extraction -- crop a span and shrink it to its opaque bounding box.

Pipeline per span:
  1. Crop [start, end) x [0, crop_height), clamped to the image
  2. Bounding box of every pixel with non-zero alpha
  3. Copy opaque pixels into a fresh transparent buffer at (y - min_y, x - min_x)

Pixels that were transparent inside the box stay (0, 0, 0, 0) regardless of
their source RGB. An empty crop or a crop without opaque pixels is an
EmptySilhouetteError, never a zero-sized silhouette.
"""

from __future__ import annotations

import numpy as np

from iconcaptcha.engine.context import ALPHA, PixelBuffer, Silhouette, Span
from iconcaptcha.engine.errors import EmptySilhouetteError


def bounding_box(pixels: PixelBuffer) -> tuple[int, int, int, int] | None:
    """(min_x, min_y, max_x, max_y) of opaque pixels, inclusive; None if none."""
    opaque = pixels[:, :, ALPHA] != 0
    if not opaque.any():
        return None
    ys = np.flatnonzero(opaque.any(axis=1))
    xs = np.flatnonzero(opaque.any(axis=0))
    return int(xs[0]), int(ys[0]), int(xs[-1]), int(ys[-1])


def crop_span(image: PixelBuffer, span: Span, crop_height: int) -> PixelBuffer:
    """Rectangle [span.start, span.end) x [0, crop_height), clamped to the image."""
    height, width = int(image.shape[0]), int(image.shape[1])
    x0 = min(max(span.start, 0), width)
    x1 = min(max(span.end, x0), width)
    y1 = min(max(crop_height, 0), height)
    return image[:y1, x0:x1]


def shrink_to_content(region: PixelBuffer) -> PixelBuffer | None:
    """Opaque pixels of ``region`` re-based onto their own bounding box."""
    box = bounding_box(region)
    if box is None:
        return None
    min_x, min_y, max_x, max_y = box
    window = region[min_y : max_y + 1, min_x : max_x + 1]
    out = np.zeros((max_y - min_y + 1, max_x - min_x + 1, 4), dtype=np.uint8)
    opaque = window[:, :, ALPHA] != 0
    out[opaque] = window[opaque]
    return out


def extract_silhouette(image: PixelBuffer, span: Span, crop_height: int = 50) -> Silhouette:
    """Silhouette of the icon occupying ``span``.

    Raises:
        EmptySilhouetteError: the span is degenerate or its crop has no opaque pixel.
    """
    if span.end <= span.start:
        raise EmptySilhouetteError(span.start, span.end)
    pixels = shrink_to_content(crop_span(image, span, crop_height))
    if pixels is None:
        raise EmptySilhouetteError(span.start, span.end)
    return Silhouette(pixels=pixels)


def reextract(silhouette: Silhouette) -> Silhouette:
    """Bounding-box extraction applied to an existing silhouette (identity for valid input)."""
    pixels = shrink_to_content(silhouette.pixels)
    if pixels is None:
        raise EmptySilhouetteError(0, silhouette.width)
    return Silhouette(pixels=pixels)
