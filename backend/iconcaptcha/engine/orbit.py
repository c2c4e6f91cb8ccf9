"""Orbit generation — the 8 rotation/reflection variants of a silhouette.

Order: identity, 90°, 180°, 270° (clockwise), then the horizontal mirror of
each of those four. Every variant is an exact pixel permutation copied into
its own buffer.
"""

from __future__ import annotations

import numpy as np

from iconcaptcha.engine.context import Silhouette

ORBIT_SIZE = 8


def _own(pixels: np.ndarray) -> Silhouette:
    return Silhouette(pixels=np.ascontiguousarray(pixels).copy())


def rotate90(s: Silhouette) -> Silhouette:
    """Clockwise quarter turn; width and height swap."""
    return _own(np.rot90(s.pixels, k=-1, axes=(0, 1)))


def rotate180(s: Silhouette) -> Silhouette:
    return _own(np.rot90(s.pixels, k=2, axes=(0, 1)))


def rotate270(s: Silhouette) -> Silhouette:
    """Counter-clockwise quarter turn."""
    return _own(np.rot90(s.pixels, k=1, axes=(0, 1)))


def mirror(s: Silhouette) -> Silhouette:
    """Horizontal flip: (x, y) -> (width - 1 - x, y)."""
    return _own(s.pixels[:, ::-1])


def orbit(s: Silhouette) -> list[Silhouette]:
    rotations = [_own(s.pixels), rotate90(s), rotate180(s), rotate270(s)]
    return rotations + [mirror(r) for r in rotations]
