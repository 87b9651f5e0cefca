"""Animated GIF of the approximation converging."""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Sequence
from pathlib import Path

from PIL import Image

from quad_simplify.compositor import render_image
from quad_simplify.image_io import ImageIOError
from quad_simplify.model import Leaf, Model

logger = logging.getLogger(__name__)

_DONE = None


def frame_schedule(iterations: int, frames: int) -> list[int]:
    """Step indices at which to capture a frame.

    Frames are spread evenly over ``0..iterations``; both ends are always
    included. ``frames < 1`` captures every step.
    """
    if iterations <= 0:
        return [0]
    if frames < 1 or frames > iterations:
        return list(range(iterations + 1))
    if frames == 1:
        return [iterations]
    return sorted({round(i * iterations / (frames - 1)) for i in range(frames)})


def animate(
    model: Model,
    iterations: int,
    width: int | None = None,
    height: int | None = None,
    padding: bool | None = None,
    frames: int | None = None,
    queue_size: int | None = None,
) -> list[Image.Image]:
    """Step *model* and collect rendered frames along the way.

    Stepping stays on the calling thread. Snapshots travel through a bounded
    queue to a renderer thread, so compositing overlaps with splitting.

    Args:
        model:      Model to advance; it ends *iterations* steps further on.
        iterations: Number of steps to run.
        width:      Frame width (defaults to the model width).
        height:     Frame height (defaults to the model height).
        padding:    Grid border (defaults to ``model.config.padding``).
        frames:     Frames to capture (defaults to ``model.config.gif_frames``).
        queue_size: Bound of the snapshot queue (defaults to the config).

    Returns:
        The frames, oldest first.
    """
    cfg = model.config
    width = width or model.width
    height = height or model.height
    padding = cfg.padding if padding is None else padding
    frames = cfg.gif_frames if frames is None else frames
    queue_size = cfg.queue_size if queue_size is None else queue_size

    schedule = set(frame_schedule(iterations, frames))
    snapshots: queue.Queue[tuple[Leaf, ...] | None] = queue.Queue(maxsize=max(1, queue_size))
    rendered: list[Image.Image] = []
    failures: list[BaseException] = []

    def _renderer() -> None:
        while True:
            leaves = snapshots.get()
            if leaves is _DONE:
                return
            if failures:
                continue  # keep draining so the producer never blocks
            try:
                rendered.append(render_image(
                    leaves, model.width, model.height, width, height, padding,
                ))
            except Exception as exc:  # re-raised on the calling thread
                failures.append(exc)

    worker = threading.Thread(target=_renderer, name="gif-renderer", daemon=True)
    worker.start()

    t0 = time.perf_counter()
    try:
        for step in range(iterations + 1):
            if step in schedule:
                snapshots.put(model.snapshot())
            if step < iterations:
                model.step()
    finally:
        snapshots.put(_DONE)
        worker.join()

    if failures:
        raise failures[0]

    logger.info(
        "Captured %d frames over %d steps  (%.1f s)",
        len(rendered), iterations, time.perf_counter() - t0,
    )
    return rendered


def save_gif(
    frames: Sequence[Image.Image],
    path: str | Path,
    duration: int = 40,
) -> None:
    """Write *frames* as a looping GIF."""
    if not frames:
        raise ValueError("no frames to save")
    path = Path(path)
    try:
        frames[0].save(
            path,
            save_all=True,
            append_images=list(frames[1:]),
            duration=duration,
            loop=0,
        )
    except (OSError, ValueError) as exc:
        raise ImageIOError(f"cannot write animation {path}: {exc}") from exc
    logger.info("Animation saved: %s (%d frames)", path, len(frames))
