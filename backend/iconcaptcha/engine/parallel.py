"""Parallel-map strategies for the per-icon stages.

A strategy is any callable ``(fn, items) -> list`` that returns results in
input order. Per-icon work only reads shared inputs and writes its own slot,
so the choice of strategy never changes the results.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

MapStrategy = Callable[[Callable[[Any], Any], Sequence[Any]], list[Any]]


def sequential_map(fn: Callable[[T], R], items: Sequence[T]) -> list[R]:
    return [fn(item) for item in items]


class ThreadPoolMap:
    """Fork-join map over a thread pool; ``Executor.map`` keeps input order."""

    def __init__(self, max_workers: int | None = None) -> None:
        self.max_workers = max_workers

    def __call__(self, fn: Callable[[T], R], items: Sequence[T]) -> list[R]:
        if len(items) <= 1:
            return sequential_map(fn, items)
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="iconcaptcha"
        ) as executor:
            return list(executor.map(fn, items))

    def __repr__(self) -> str:
        return f"ThreadPoolMap(max_workers={self.max_workers})"


def make_map_strategy(workers: int) -> MapStrategy:
    """0 or 1 worker -> sequential; more -> a thread pool of that size."""
    if workers <= 1:
        return sequential_map
    logger.debug("Using thread pool with %d workers", workers)
    return ThreadPoolMap(max_workers=workers)
