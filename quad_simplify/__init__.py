"""
Quad Simplify
=============

Progressively approximate an image with a quadtree of flat-coloured
rectangles. At every step the region with the worst approximation is
split into four, so detail accumulates where the image needs it.

Produces either a simplified still image or an animated GIF of the
approximation converging.
"""

__version__ = "0.2.0"

from quad_simplify.animation import animate, frame_schedule, save_gif
from quad_simplify.compositor import render, render_image
from quad_simplify.config import SimplifyConfig
from quad_simplify.frontier import Frontier, compare_priority, priority_key
from quad_simplify.image_io import ImageIOError, compute_target_size, load_image, save_image
from quad_simplify.model import Leaf, Model
from quad_simplify.quad import Quad, Rect
from quad_simplify.stats import region_stats, weighted_average

__all__ = [
    "Frontier",
    "ImageIOError",
    "Leaf",
    "Model",
    "Quad",
    "Rect",
    "SimplifyConfig",
    "animate",
    "compare_priority",
    "compute_target_size",
    "frame_schedule",
    "load_image",
    "priority_key",
    "region_stats",
    "render",
    "render_image",
    "save_gif",
    "save_image",
    "weighted_average",
]
