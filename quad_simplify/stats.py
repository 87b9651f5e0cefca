"""Flat colour and error of an image region, computed from histograms."""

from __future__ import annotations

import numpy as np

Color = tuple[int, int, int]

_LEVELS = np.arange(256, dtype=np.int64)


def channel_histograms(region: np.ndarray) -> np.ndarray:
    """Count 8-bit intensities per channel.

    Args:
        region: (H, W, 3) uint8 crop.

    Returns:
        (3, 256) int64 - one histogram per channel, R then G then B.
    """
    flat = region.reshape(-1, 3)
    return np.stack([
        np.bincount(flat[:, c], minlength=256).astype(np.int64)
        for c in range(3)
    ])


def weighted_average(hist: np.ndarray) -> tuple[int, np.float32]:
    """Mean intensity and root-mean-square deviation of one histogram.

    The mean is truncated to an integer and the deviation is measured from
    that truncated mean. An empty histogram yields ``(0, 0.0)``.
    """
    hist = np.asarray(hist, dtype=np.int64)
    total = int(hist.sum())
    if total == 0:
        return 0, np.float32(0.0)

    levels = _LEVELS[: len(hist)]
    value = int(np.dot(levels, hist)) // total
    square_sum = int(np.dot(hist, (value - levels) ** 2))
    return value, np.sqrt(np.float32(square_sum // total))


def region_stats(
    region: np.ndarray,
    weights: tuple[float, float, float] = (0.3, 0.6, 1.0),
    floor: float = 0.1,
) -> tuple[Color, float]:
    """Representative colour and scalar error of a region.

    Args:
        region:  (H, W, 3) uint8 crop.
        weights: Blend of the per-channel deviations (R, G, B).
        floor:   Added to the blend so flat regions never score exactly zero.

    Returns:
        ``((r, g, b), error)``
    """
    if region.size == 0:
        return (0, 0, 0), 0.0

    hists = channel_histograms(region)
    values = []
    deviations = []
    for hist in hists:
        value, deviation = weighted_average(hist)
        values.append(min(max(value, 0), 255))
        deviations.append(deviation)

    error = np.float32(floor)
    for weight, deviation in zip(weights, deviations, strict=True):
        error += np.float32(weight) * deviation
    return (values[0], values[1], values[2]), float(error)
