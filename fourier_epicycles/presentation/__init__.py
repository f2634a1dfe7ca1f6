"""Presentation package - matplotlib drawing and animation export."""

from .render import (
    RenderStyle,
    build_animation,
    draw_frame,
    plot_limits,
    plot_reconstruction,
    save_animation,
)

__all__ = [
    "RenderStyle",
    "build_animation",
    "draw_frame",
    "plot_limits",
    "plot_reconstruction",
    "save_animation",
]
