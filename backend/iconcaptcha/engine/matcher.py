"""Exact alpha-channel equality between two silhouettes.

Both silhouettes are read as raster-order alpha streams. In the default mode
the streams are compared up to the shorter length, so two silhouettes with
different pixel counts can match on their common prefix. Strict mode treats
any shape difference as a mismatch.
"""

from __future__ import annotations

import numpy as np

from iconcaptcha.engine.context import Silhouette


def mismatch_count(a: Silhouette, b: Silhouette) -> int:
    """Differing alpha values over the common prefix of both raster streams."""
    sa = a.alpha.ravel()
    sb = b.alpha.ravel()
    n = min(sa.size, sb.size)
    return int(np.count_nonzero(sa[:n] != sb[:n]))


def silhouettes_equal(a: Silhouette, b: Silhouette, strict: bool = False) -> bool:
    if strict and a.shape != b.shape:
        return False
    return mismatch_count(a, b) == 0


def matches_any(target: Silhouette, candidates: list[Silhouette], strict: bool = False) -> bool:
    """True on the first candidate equal to ``target``."""
    return any(silhouettes_equal(target, c, strict) for c in candidates)
