"""The subdivision model: repeatedly split the worst-approximated quad."""

from __future__ import annotations

import logging
from typing import NamedTuple

import numpy as np
from PIL import Image

from quad_simplify.compositor import render
from quad_simplify.config import SimplifyConfig
from quad_simplify.frontier import Frontier
from quad_simplify.quad import Quad, Rect
from quad_simplify.stats import Color

logger = logging.getLogger(__name__)


class Leaf(NamedTuple):
    """Immutable copy of a leaf quad, safe to hand to another thread."""

    rect: Rect
    color: Color


def as_rgb_array(image: np.ndarray | Image.Image) -> np.ndarray:
    """Return a read-only (H, W, 3) uint8 copy of *image*."""
    if isinstance(image, Image.Image):
        array = np.array(image.convert("RGB"), dtype=np.uint8)
    else:
        array = np.array(image, copy=True)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(f"expected an (H, W, 3) image, got shape {array.shape}")
        if array.dtype != np.uint8:
            raise ValueError(f"expected uint8 pixels, got {array.dtype}")
    if array.shape[0] < 1 or array.shape[1] < 1:
        raise ValueError("image has no pixels")
    array.flags.writeable = False
    return array


class Model:
    """Quadtree approximation of one image.

    The root covers the whole image. Each :meth:`step` splits the leaf at
    the front of the frontier into four; the leaves always tile the image.
    """

    def __init__(
        self,
        image: np.ndarray | Image.Image,
        config: SimplifyConfig | None = None,
    ) -> None:
        self.config = config or SimplifyConfig()
        self.image = as_rgb_array(image)
        self.height, self.width = self.image.shape[:2]

        self.frontier = Frontier(self.config.small_size, self.config.area_power)
        self.leaves: dict[Rect, Quad] = {}
        self.steps = 0

        self.root = self._make_quad(Rect.checked(0, 0, self.width, self.height))
        self.error_sum = self.root.error * self.root.area
        self._add_leaf(self.root)

    def _make_quad(self, rect: Rect) -> Quad:
        cfg = self.config
        return Quad.from_image(rect, self.image, cfg.error_weights, cfg.error_floor)

    def _add_leaf(self, quad: Quad) -> None:
        self.leaves[quad.rect] = quad
        if quad.can_split(self.config.split_size):
            self.frontier.push(quad)

    @property
    def converged(self) -> bool:
        """True once no leaf is large enough to split."""
        return not self.frontier

    def step(self) -> bool:
        """Split the highest-priority leaf.

        Returns:
            False when nothing was left to split, True otherwise.
        """
        if not self.frontier:
            return False

        quad = self.frontier.pop()
        cfg = self.config
        children = quad.split(
            self.image, cfg.split_size, cfg.error_weights, cfg.error_floor,
        )

        del self.leaves[quad.rect]
        self.error_sum -= quad.error * quad.area
        for child in children:
            self._add_leaf(child)
            self.error_sum += child.error * child.area
        self.steps += 1

        logger.debug(
            "split %s (error=%.3f) -> %d leaves", quad.rect, quad.error, len(self.leaves),
        )
        return True

    def run(self, iterations: int) -> int:
        """Call :meth:`step` *iterations* times; return the effective splits."""
        done = 0
        for _ in range(iterations):
            if not self.step():
                break
            done += 1
        return done

    def average_error(self) -> float:
        """Area-weighted mean error of the current leaves."""
        return self.error_sum / (self.width * self.height)

    def snapshot(self) -> tuple[Leaf, ...]:
        """Current leaves as plain values, ordered top to bottom, left to right."""
        return tuple(
            Leaf(quad.rect, quad.color)
            for quad in sorted(
                self.leaves.values(), key=lambda q: (q.rect.top, q.rect.left),
            )
        )

    def render(
        self,
        width: int | None = None,
        height: int | None = None,
        padding: bool | None = None,
    ) -> np.ndarray:
        """Render the current leaves, by default at the source size."""
        return render(
            self.snapshot(),
            self.width,
            self.height,
            width or self.width,
            height or self.height,
            self.config.padding if padding is None else padding,
        )
