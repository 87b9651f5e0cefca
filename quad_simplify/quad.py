"""Rectangles and the quadtree node that approximates one of them."""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

import numpy as np

from quad_simplify.stats import Color, region_stats


class Rect(NamedTuple):
    """Half-open pixel rectangle ``[left, right) x [top, bottom)``."""

    left: int
    top: int
    right: int
    bottom: int

    @classmethod
    def checked(cls, left: int, top: int, right: int, bottom: int) -> Rect:
        """Build a rectangle, rejecting empty or negative extents."""
        if left < 0 or top < 0 or right <= left or bottom <= top:
            raise ValueError(
                f"degenerate rectangle ({left}, {top}, {right}, {bottom})"
            )
        return cls(left, top, right, bottom)

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def area(self) -> int:
        return self.width * self.height

    def intersects(self, other: Rect) -> bool:
        return (
            self.left < other.right and other.left < self.right
            and self.top < other.bottom and other.top < self.bottom
        )

    def contains(self, other: Rect) -> bool:
        return (
            self.left <= other.left and other.right <= self.right
            and self.top <= other.top and other.bottom <= self.bottom
        )

    def quarters(self) -> tuple[Rect, Rect, Rect, Rect]:
        """Top-left, top-right, bottom-left and bottom-right quarters.

        Midpoints use integer division, so on odd sides the top-left
        quarter is the smaller one.
        """
        mid_x = self.left + self.width // 2
        mid_y = self.top + self.height // 2
        return (
            Rect.checked(self.left, self.top, mid_x, mid_y),
            Rect.checked(mid_x, self.top, self.right, mid_y),
            Rect.checked(self.left, mid_y, mid_x, self.bottom),
            Rect.checked(mid_x, mid_y, self.right, self.bottom),
        )


class Quad:
    """One region of the source image with its flat colour and error.

    A quad is a leaf until :meth:`split` gives it exactly four children.
    """

    __slots__ = ("rect", "color", "error", "children")

    def __init__(self, rect: Rect, color: Color, error: float) -> None:
        self.rect = rect
        self.color = color
        self.error = error
        self.children: list[Quad] = []

    def __repr__(self) -> str:
        return f"Quad({self.rect!r}, color={self.color}, error={self.error:.3f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quad):
            return NotImplemented
        return self.rect == other.rect

    def __hash__(self) -> int:
        return hash(self.rect)

    @classmethod
    def from_image(
        cls,
        rect: Rect,
        image: np.ndarray,
        weights: tuple[float, float, float] = (0.3, 0.6, 1.0),
        floor: float = 0.1,
    ) -> Quad:
        """Crop *image* to *rect* and score the crop."""
        if rect.width < 1 or rect.height < 1:
            raise ValueError(f"degenerate rectangle {rect}")
        region = image[rect.top:rect.bottom, rect.left:rect.right]
        color, error = region_stats(region, weights, floor)
        return cls(rect, color, error)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def area(self) -> int:
        return self.rect.area

    def is_small(self, small_size: int = 4) -> bool:
        return self.rect.width < small_size or self.rect.height < small_size

    def can_split(self, min_size: int = 2) -> bool:
        min_size = max(2, min_size)
        return self.rect.width >= min_size and self.rect.height >= min_size

    def score(self, area_power: float = 0.25) -> float:
        return self.error * self.area ** area_power

    def split(
        self,
        image: np.ndarray,
        min_size: int = 2,
        weights: tuple[float, float, float] = (0.3, 0.6, 1.0),
        floor: float = 0.1,
    ) -> list[Quad]:
        """Replace the children with the four scored quarters of this quad."""
        if not self.can_split(min_size):
            raise ValueError(f"{self.rect} is too small to split")
        children = [
            Quad.from_image(rect, image, weights, floor)
            for rect in self.rect.quarters()
        ]
        self.children = children
        return children

    def iter_leaves(self) -> Iterator[Quad]:
        """Walk the subtree depth-first and yield its leaves."""
        stack = [self]
        while stack:
            quad = stack.pop()
            if quad.is_leaf:
                yield quad
            else:
                stack.extend(reversed(quad.children))
