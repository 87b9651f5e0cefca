"""Paint a set of flat-coloured rectangles into a raster."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import numpy as np
from PIL import Image


def render(
    leaves: Iterable[Any],
    source_width: int,
    source_height: int,
    target_width: int,
    target_height: int,
    padding: bool = False,
) -> np.ndarray:
    """Composite *leaves* and resize the result with nearest-neighbour sampling.

    Args:
        leaves:        Objects with ``rect`` (left, top, right, bottom) and
                       ``color`` (r, g, b), e.g. a model snapshot.
        source_width:  Width of the image the leaves tile.
        source_height: Height of the image the leaves tile.
        target_width:  Width of the returned raster.
        target_height: Height of the returned raster.
        padding:       Shrink every rectangle by one pixel on its top and left
                       edges so a black grid shows between neighbours.

    Returns:
        (target_height, target_width, 3) uint8.
    """
    if target_width < 1 or target_height < 1:
        raise ValueError(f"invalid render size {target_width}x{target_height}")

    pad = 1 if padding else 0
    canvas = np.zeros((source_height + pad, source_width + pad, 3), dtype=np.uint8)

    for leaf in leaves:
        left, top, right, bottom = leaf.rect
        canvas[top + pad:bottom, left + pad:right] = leaf.color

    if canvas.shape[:2] == (target_height, target_width):
        return canvas
    img = Image.fromarray(canvas).resize((target_width, target_height), Image.NEAREST)
    return np.array(img, dtype=np.uint8)


def render_image(
    leaves: Iterable[Any],
    source_width: int,
    source_height: int,
    target_width: int,
    target_height: int,
    padding: bool = False,
) -> Image.Image:
    """Same as :func:`render` but returns a PIL image."""
    return Image.fromarray(render(
        leaves, source_width, source_height, target_width, target_height, padding,
    ))
