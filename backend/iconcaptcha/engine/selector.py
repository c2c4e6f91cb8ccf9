"""Outlier selection: score every icon against the orbits of all others.

match_counts[i] counts the icons j != i whose orbit contains a silhouette
equal to silhouettes[i]. Each (i, j) pair adds at most one. The outlier is
the first icon with the lowest count.
"""

from __future__ import annotations

from collections.abc import Sequence

from iconcaptcha.engine.context import IconResult, Silhouette
from iconcaptcha.engine.matcher import matches_any
from iconcaptcha.engine.orbit import orbit
from iconcaptcha.engine.parallel import MapStrategy, sequential_map


def count_matches_for(
    index: int,
    silhouettes: Sequence[Silhouette],
    orbits: Sequence[list[Silhouette]],
    strict: bool = False,
) -> int:
    target = silhouettes[index]
    return sum(
        1
        for j, variants in enumerate(orbits)
        if j != index and matches_any(target, variants, strict)
    )


def count_matches(
    silhouettes: Sequence[Silhouette],
    strict: bool = False,
    map_fn: MapStrategy = sequential_map,
) -> list[int]:
    """Match-count vector; orbits are generated once per silhouette."""
    orbits = map_fn(orbit, list(silhouettes))
    indices = list(range(len(silhouettes)))
    return map_fn(lambda i: count_matches_for(i, silhouettes, orbits, strict), indices)


def outlier_index(match_counts: Sequence[int]) -> int:
    """First index holding the minimum count."""
    best = len(match_counts)
    winner = 0
    for i, n in enumerate(match_counts):
        if n < best:
            best = n
            winner = i
    return winner


def select_outlier(icons: Sequence[IconResult], match_counts: Sequence[int]) -> IconResult:
    if len(icons) != len(match_counts):
        raise ValueError(f"{len(icons)} icons but {len(match_counts)} match counts")
    if not icons:
        raise ValueError("no icons to select from")
    return icons[outlier_index(match_counts)]
