"""Image loading and saving."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError


class ImageIOError(OSError):
    """An image could not be decoded or encoded."""


def compute_target_size(
    original_width: int,
    original_height: int,
    max_side: int,
) -> tuple[int, int]:
    """Compute downscaled (w, h) preserving aspect ratio.

    The longest side becomes *max_side*; the other is scaled
    proportionally (rounded to the nearest integer, minimum 1).
    """
    if original_width >= original_height:
        w = max_side
        h = max(1, round(original_height * max_side / original_width))
    else:
        h = max_side
        w = max(1, round(original_width * max_side / original_height))
    return w, h


def load_image(
    path: str | Path,
    max_side: int | None = None,
) -> tuple[np.ndarray, tuple[int, int]]:
    """Decode an image to RGB, optionally shrinking it for analysis.

    Images already within *max_side* are never enlarged.

    Returns:
        ``(pixels, (original_width, original_height))`` where *pixels* is
        an (H, W, 3) uint8 array.
    """
    try:
        with Image.open(path) as src:
            img = src.convert("RGB")
    except (OSError, UnidentifiedImageError) as exc:
        raise ImageIOError(f"cannot read image {path}: {exc}") from exc

    original_size = img.size
    if max_side is not None and max(img.size) > max_side:
        w, h = compute_target_size(img.width, img.height, max_side)
        img = img.resize((w, h), Image.LANCZOS)
    return np.array(img, dtype=np.uint8), original_size


def save_image(array: np.ndarray, path: str | Path) -> None:
    """Encode an (H, W, 3) uint8 array; the format follows the suffix."""
    try:
        Image.fromarray(array.astype(np.uint8)).save(path)
    except (OSError, ValueError) as exc:
        raise ImageIOError(f"cannot write image {path}: {exc}") from exc
