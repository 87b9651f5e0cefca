"""Max-priority queue of the quads still waiting to be split."""

from __future__ import annotations

import heapq
import itertools
import math

from quad_simplify.quad import Quad


def priority_key(
    quad: Quad,
    small_size: int = 4,
    area_power: float = 0.25,
) -> tuple[bool, float]:
    """Sort key where smaller means "split sooner".

    Non-small quads come before small ones; within a class the higher
    score wins and a NaN score counts as the highest of all.
    """
    score = quad.score(area_power)
    rank = -math.inf if math.isnan(score) else -score
    return quad.is_small(small_size), rank


def compare_priority(
    a: Quad,
    b: Quad,
    small_size: int = 4,
    area_power: float = 0.25,
) -> int:
    """Three-way comparison: 1 if *a* splits before *b*, -1 if after, 0 if tied.

    Quads covering the same rectangle always compare equal.
    """
    if a.rect == b.rect:
        return 0
    ka = priority_key(a, small_size, area_power)
    kb = priority_key(b, small_size, area_power)
    if ka < kb:
        return 1
    if kb < ka:
        return -1
    return 0


class Frontier:
    """Heap of leaf quads ordered by :func:`priority_key`.

    Ties are broken by insertion order, so a run is reproducible.
    """

    def __init__(self, small_size: int = 4, area_power: float = 0.25) -> None:
        self.small_size = small_size
        self.area_power = area_power
        self._heap: list[tuple[bool, float, int, Quad]] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def push(self, quad: Quad) -> None:
        small, rank = priority_key(quad, self.small_size, self.area_power)
        heapq.heappush(self._heap, (small, rank, next(self._counter), quad))

    def pop(self) -> Quad:
        """Remove and return the quad to split next (IndexError when empty)."""
        return heapq.heappop(self._heap)[-1]

    def peek(self) -> Quad:
        return self._heap[0][-1]

    @property
    def quads(self) -> list[Quad]:
        return [entry[-1] for entry in self._heap]
