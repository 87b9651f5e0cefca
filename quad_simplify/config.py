"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class SimplifyConfig:
    """All tuneable parameters for a simplification run.

    Attributes:
        iterations:     Number of splits attempted (one per step).
        padding:        Leave a one-pixel border between rendered quads.
        gif:            Also save an animated GIF of the convergence.
        gif_frames:     Snapshots captured evenly across the run for the GIF.
        gif_duration:   Display time per GIF frame, in milliseconds.
        small_size:     Quads narrower or shorter than this sort last.
        min_split_size: Quads narrower or shorter than this never split.
        area_power:     Exponent applied to the area in the split score.
        error_weights:  Per-channel (R, G, B) weights of the error blend.
        error_floor:    Constant added to every error.
        max_side:       Downscale the source before analysis (None = full size).
        queue_size:     Bound of the snapshot queue feeding the GIF renderer.
        output_format:  Image format for saved files.
        input_dir:      Folder to scan for source images.
        output_dir:     Folder for results.
    """

    # Run
    iterations: int = 1024
    padding: bool = False

    # Animation
    gif: bool = False
    gif_frames: int = 64
    gif_duration: int = 40
    queue_size: int = 8

    # Subdivision
    small_size: int = 4
    min_split_size: int = 2  # clamped to 2, smaller quads cannot split in four
    area_power: float = 0.25
    error_weights: tuple[float, float, float] = (0.3, 0.6, 1.0)
    error_floor: float = 0.1

    # Scaling
    max_side: int | None = None

    # Output
    output_format: str = "png"

    # Paths
    input_dir: Path = field(default_factory=lambda: Path("images"))
    output_dir: Path = field(default_factory=lambda: Path("output"))

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp", ".jfif"}
    )

    @property
    def split_size(self) -> int:
        return max(2, self.min_split_size)
