"""Segmenter — split the captcha strip into per-icon column spans.

Delimiters are read from the top row only. The image edges act as two
synthetic delimiters (0 and width), so k delimiter columns give k+1 spans.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from iconcaptcha.engine.config import DELIMITER_GRAY, DELIMITER_LIGHT
from iconcaptcha.engine.context import IconResult, PixelBuffer, Span

logger = logging.getLogger(__name__)

_DEFAULT_COLORS = (DELIMITER_GRAY, DELIMITER_LIGHT)


def delimiter_columns(
    image: PixelBuffer,
    colors: Iterable[tuple[int, int, int]] = _DEFAULT_COLORS,
) -> list[int]:
    """Columns whose row-0 RGB exactly equals one of ``colors``, ascending."""
    top = image[0, :, :3]
    hit = np.zeros(top.shape[0], dtype=bool)
    for color in colors:
        hit |= np.all(top == np.asarray(color, dtype=top.dtype), axis=1)
    return [int(x) for x in np.flatnonzero(hit)]


def span_between(left: int, right: int) -> Span:
    """Span for the icon between delimiters ``left`` and ``right``.

    The center is the midpoint of the interior that excludes one column on
    each side: ((right - 1) - (left + 1)) // 2 + left + 1.
    """
    start = left + 1
    end = right - 1
    center_x = ((right - 1) - (left + 1)) // 2 + left + 1
    return Span(start=start, end=end, center_x=center_x)


def find_spans(
    image: PixelBuffer,
    colors: Iterable[tuple[int, int, int]] = _DEFAULT_COLORS,
) -> list[Span]:
    """Ordered icon spans. No delimiter at all yields a single span."""
    width = int(image.shape[1])
    bounds = [0, *delimiter_columns(image, colors), width]
    spans = [span_between(left, right) for left, right in zip(bounds, bounds[1:])]
    logger.debug("Segmenter: %d delimiter(s) -> %d span(s)", len(bounds) - 2, len(spans))
    return spans


def to_icons(spans: list[Span], image_height: int) -> list[IconResult]:
    center_y = image_height // 2
    return [
        IconResult(
            position=i + 1,
            start=span.start,
            end=span.end,
            center_x=span.center_x,
            center_y=center_y,
        )
        for i, span in enumerate(spans)
    ]


def locate_icons(
    image: PixelBuffer,
    colors: Iterable[tuple[int, int, int]] = _DEFAULT_COLORS,
) -> list[IconResult]:
    """Spans of ``image`` as positioned IconResults (1-based, scan order)."""
    return to_icons(find_spans(image, colors), int(image.shape[0]))
