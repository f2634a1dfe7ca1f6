"""
Matplotlib rendering of the epicycle chain.

Design goals:
- Read-only with respect to the analysis: frames come from :class:`EpicycleDriver`.
- One function draws one frame onto an existing Axes, so the GUI, the CLI and
  saved animations share the same drawing code.
- pyplot is imported lazily, after any backend selection by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import matplotlib.animation as ani
import numpy as np
from matplotlib.collections import LineCollection
from matplotlib.patches import Circle

from fourier_epicycles.analysis.driver import EpicycleDriver, EpicycleFrame
from fourier_epicycles.analysis.epicycles import reconstruct_path
from fourier_epicycles.models.coefficients import FourierCoefficient
from fourier_epicycles.models.profile import EpicycleProfile


@dataclass(frozen=True)
class RenderStyle:
    background: str = "#000000"
    circle_color: str = "#ffffff"
    circle_alpha: float = 0.25
    arm_color: str = "#ff3030"
    trace_color: str = "#3fa7ff"
    reference_color: str = "#666666"
    linewidth: float = 1.5


def _get_pyplot():
    """Import pyplot lazily (backend must already be configured)."""
    import matplotlib.pyplot as plt  # late import by design
    return plt


def plot_limits(coefficients: Sequence[FourierCoefficient], margin: float = 0.1) -> tuple[float, float, float, float]:
    """Square axis limits enclosing every possible chain configuration."""
    if not coefficients:
        return (-1.0, 1.0, -1.0, 1.0)
    reach = float(sum(c.amplitude for c in coefficients))
    # The DC term is a fixed offset, not a rotating arm.
    cx = cy = 0.0
    for c in coefficients:
        if c.frequency == 0:
            cx, cy = c.re, c.im
            reach -= c.amplitude
            break
    reach = max(reach, 1e-9) * (1.0 + float(margin))
    return (cx - reach, cx + reach, cy - reach, cy + reach)


def draw_frame(
    ax,
    frame: EpicycleFrame,
    *,
    style: Optional[RenderStyle] = None,
    show_circles: bool = True,
    reference: Optional[np.ndarray] = None,
) -> None:
    """Draw circles, arms and the trace of one frame onto ``ax`` (cleared first)."""
    style = style or RenderStyle()
    limits = (ax.get_xlim(), ax.get_ylim())
    ax.cla()
    ax.set_facecolor(style.background)
    ax.set_aspect("equal")
    ax.set_xlim(*limits[0])
    ax.set_ylim(*limits[1])
    ax.set_xticks([])
    ax.set_yticks([])

    if reference is not None and len(reference):
        ref = np.vstack([reference, reference[:1]])
        ax.plot(ref[:, 0], ref[:, 1], color=style.reference_color, lw=0.8, ls="--")

    chain = frame.chain
    if show_circles:
        for (cx, cy), r in zip(chain.centers, chain.radii):
            if r <= 0:
                continue
            ax.add_patch(Circle((cx, cy), r, fill=False, color=style.circle_color, alpha=style.circle_alpha, lw=0.8))

    if chain.centers:
        arm = np.array(list(chain.centers) + [chain.point])
        ax.plot(arm[:, 0], arm[:, 1], color=style.arm_color, lw=style.linewidth)

    trace = np.asarray(frame.trace, dtype=float).reshape(-1, 2)
    if trace.shape[0] > 1:
        pts = np.vstack([trace, trace[:1]]) if frame.closed else trace
        segs = np.stack([pts[:-1], pts[1:]], axis=1)
        ax.add_collection(LineCollection(segs, colors=style.trace_color, linewidths=style.linewidth))
    ax.plot([chain.point[0]], [chain.point[1]], "o", color=style.arm_color, ms=3)


def build_animation(
    coefficients: Sequence[FourierCoefficient],
    profile: Optional[EpicycleProfile] = None,
    *,
    style: Optional[RenderStyle] = None,
    periods: int = 1,
    figsize: tuple[float, float] = (5.0, 5.0),
    reference: Optional[np.ndarray] = None,
):
    """Create a ``FuncAnimation`` covering ``periods`` full revolutions.

    Returns
    -------
    (fig, anim)
    """
    plt = _get_pyplot()
    profile = profile or EpicycleProfile()
    style = style or RenderStyle()
    driver = EpicycleDriver.from_profile(coefficients, profile)

    fig, ax = plt.subplots(figsize=figsize)
    fig.patch.set_facecolor(style.background)
    x0, x1, y0, y1 = plot_limits(coefficients)
    ax.set_xlim(x0, x1)
    ax.set_ylim(y0, y1)

    n_frames = driver.n_samples * max(1, int(periods))

    def update(frame_idx):
        # matplotlib may redraw a frame (init draw, each save); position the driver from the index.
        driver.seek(frame_idx)
        draw_frame(ax, driver.tick(), style=style, show_circles=profile.show_circles, reference=reference)
        return []

    anim = ani.FuncAnimation(fig, update, frames=n_frames, interval=1000.0 / profile.fps, blit=False, repeat=True)
    return fig, anim


def plot_reconstruction(
    coefficients: Sequence[FourierCoefficient],
    points: Optional[np.ndarray] = None,
    *,
    n_samples: int = 512,
    visible_fraction: float = 1.0,
    ax=None,
    style: Optional[RenderStyle] = None,
):
    """Static plot of the reconstructed outline, optionally over the input points."""
    style = style or RenderStyle()
    if ax is None:
        plt = _get_pyplot()
        _, ax = plt.subplots(figsize=(5.0, 5.0))
    path = reconstruct_path(coefficients, n_samples, visible_fraction)
    closed = np.vstack([path, path[:1]])
    ax.plot(closed[:, 0], closed[:, 1], color=style.trace_color, lw=style.linewidth, label="reconstruction")
    if points is not None:
        pts = np.asarray(points, dtype=float)
        ax.plot(pts[:, 0], pts[:, 1], "o", color=style.arm_color, ms=3, label="samples")
    ax.set_aspect("equal")
    ax.legend(loc="best")
    return ax


def save_animation(anim, outfile, fps, bitrate=2000, dpi=None):
    """Save a matplotlib animation to mp4 or gif based on file extension."""
    suffix = Path(outfile).suffix.lower()
    if suffix == ".mp4":
        writer = ani.FFMpegWriter(fps=fps, bitrate=bitrate)
        kwargs = {"writer": writer}
        if dpi is not None:
            kwargs["dpi"] = dpi
        anim.save(outfile, **kwargs)
        return
    if suffix == ".gif":
        kwargs = {"writer": "pillow", "fps": fps}
        if dpi is not None:
            kwargs["dpi"] = dpi
        anim.save(outfile, **kwargs)
        return
    raise ValueError(f"Unsupported animation format for '{outfile}'. Use .mp4 or .gif.")
