"""SolveContext — the state flowing through one solver run.

Per-icon results → Span / IconResult / Silhouette
Cross-icon results → SolveContext.match_counts, SolveContext.outlier
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

# Canonical pixel buffer: (height, width, 4) uint8 RGBA, row-major
PixelBuffer = NDArray[np.uint8]

ALPHA = 3


@dataclass(frozen=True)
class Span:
    """Column range of one icon, derived from two consecutive delimiters."""

    start: int
    end: int
    center_x: int

    @property
    def width(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class IconResult:
    """Location of one icon in the captcha strip."""

    position: int  # 1-based, scan order
    start: int
    end: int
    center_x: int
    center_y: int

    def __str__(self) -> str:
        return (
            f"Icon {{ position: {self.position}, start: {self.start}, end: {self.end}, "
            f"center_x: {self.center_x}, center_y: {self.center_y} }}"
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "position": self.position,
            "start": self.start,
            "end": self.end,
            "center_x": self.center_x,
            "center_y": self.center_y,
        }


@dataclass
class Silhouette:
    """Opaque-pixel bounding-box crop of one icon, translated to the origin."""

    pixels: PixelBuffer

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    @property
    def alpha(self) -> NDArray[np.uint8]:
        return self.pixels[:, :, ALPHA]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Silhouette):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.pixels, other.pixels))


@dataclass
class SolveContext:
    """Shared state for a single captcha solve."""

    image: PixelBuffer
    spans: list[Span] = field(default_factory=list)
    icons: list[IconResult] = field(default_factory=list)
    silhouettes: list[Silhouette] = field(default_factory=list)
    match_counts: list[int] = field(default_factory=list)
    outlier: IconResult | None = None
    # Stage name -> elapsed milliseconds
    timings: dict[str, float] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])

    @property
    def num_icons(self) -> int:
        return len(self.spans)
