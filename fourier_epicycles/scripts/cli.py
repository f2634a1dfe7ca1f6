"""Command-line entry point.

Examples
--------
Analyze the built-in square and print the largest epicycles::

    python -m fourier_epicycles.scripts.cli --shape square --sort

Analyze a point table, export coefficients and render a gif::

    python -m fourier_epicycles.scripts.cli outline.csv --drop-dc --sort \\
        --export out/outline.csv --animate out/outline.gif
"""

from __future__ import annotations

import dataclasses
from typing import Optional, Sequence

from fourier_epicycles.analysis.epicycles import reconstruct_path
from fourier_epicycles.analysis.fourier import analyze_with_profile
from fourier_epicycles.errors import EpicycleInputError
from fourier_epicycles.ingest.readers import read_points_csv
from fourier_epicycles.ingest.shapes import BUILTIN_SHAPES, builtin_shape, sample_polyline
from fourier_epicycles.models.profile import EpicycleProfile, load_profile, save_profile
from fourier_epicycles.scripts.io_coefficients import write_coefficients


def _build_profile(ns) -> EpicycleProfile:
    base = load_profile(ns.profile) if ns.profile else EpicycleProfile()
    overrides = {}
    if ns.drop_dc:
        overrides["drop_dc"] = True
    if ns.sort:
        overrides["sort_by_amplitude"] = True
    if ns.method is not None:
        overrides["method"] = ns.method
    if ns.spacing is not None:
        overrides["sample_spacing"] = ns.spacing
    if ns.visible is not None:
        overrides["visible_fraction"] = ns.visible
    if ns.fps is not None:
        overrides["fps"] = ns.fps
    if ns.no_circles:
        overrides["show_circles"] = False
    return dataclasses.replace(base, **overrides)


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="fourier-epicycles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Compute the Fourier epicycles of a closed 2D path.

            The path is either a point table (x, y per line; CSV or whitespace)
            or a built-in shape. Points are taken as equally spaced in time over
            one revolution.
            """
        ),
    )
    p.add_argument("points", nargs="?", default=None, help="Point table (x,y). Omit to use --shape.")
    p.add_argument("--shape", default=None, choices=sorted(BUILTIN_SHAPES), help="Built-in shape (default: square)")
    p.add_argument("--spacing", type=float, default=None, help="Resample the outline at this point spacing")
    p.add_argument("--drop-dc", action="store_true", help="Remove the k=0 term (centre the drawing on the origin)")
    p.add_argument("--sort", action="store_true", help="Order epicycles by descending amplitude")
    p.add_argument("--method", default=None, choices=["direct", "fft"], help="Transform method (default: direct)")
    p.add_argument("--visible", type=float, default=None, help="Visible fraction of epicycles in [0, 1]")
    p.add_argument("--profile", default=None, help="Load settings from a JSON profile (flags override it)")
    p.add_argument("--save-profile", default=None, help="Write the effective settings to a JSON profile")
    p.add_argument("--top", type=int, default=10, help="Number of coefficients to print (default: 10, 0 = all)")
    p.add_argument("--export", default=None, help="Write coefficients to .csv or .json")
    p.add_argument("--animate", default=None, help="Render an animation to .mp4 or .gif")
    p.add_argument("--fps", type=int, default=None, help="Animation frames per second")
    p.add_argument("--periods", type=int, default=1, help="Revolutions to render (default: 1)")
    p.add_argument("--no-circles", action="store_true", help="Do not draw epicycle circles")

    ns = p.parse_args(list(argv) if argv is not None else None)

    if ns.points and ns.shape:
        p.error("give either a point table or --shape, not both")

    try:
        profile = _build_profile(ns)
    except ValueError as e:
        print(f"[error] {e}")
        return 2

    if ns.points:
        try:
            data = read_points_csv(ns.points)
        except (OSError, ValueError) as e:
            print(f"[error] {e}")
            return 2
        for msg in data.validation.warnings:
            print(f"[warn] {msg}")
        pts = data.xy
        if profile.sample_spacing is not None and data.validation.ok:
            pts = sample_polyline(pts, profile.sample_spacing, closed=True)
        source = ns.points
    else:
        source = ns.shape or "square"
        pts = builtin_shape(source, sample_spacing=profile.sample_spacing)

    try:
        coeffs = analyze_with_profile(pts, profile)
    except EpicycleInputError as e:
        print(f"[error] {type(e).__name__}: {e}")
        return 1

    n = int(len(pts))
    print(f"[info] {source}: {n} points -> {len(coeffs)} coefficients ({profile.method})")

    shown = coeffs if ns.top <= 0 else coeffs[: ns.top]
    print(f"{'k':>6} {'amplitude':>14} {'phase':>10}")
    for c in shown:
        print(f"{c.frequency:>6d} {c.amplitude:>14.6g} {c.phase:>10.4f}")
    if len(shown) < len(coeffs):
        print(f"... ({len(coeffs) - len(shown)} more)")

    recon = reconstruct_path(coeffs, n)
    if not profile.drop_dc:
        err = float(abs(recon - pts).max()) if n else 0.0
        print(f"[info] max round-trip error at sample times: {err:.3g}")

    if ns.save_profile:
        save_profile(profile, ns.save_profile)
        print(f"[info] wrote profile: {ns.save_profile}")

    if ns.export:
        meta = {"source": source, "n_points": n}
        meta.update(profile.to_dict())
        try:
            write_coefficients(coeffs, ns.export, metadata=meta)
        except (OSError, ValueError) as e:
            print(f"[error] {e}")
            return 2
        print(f"[info] wrote coefficients: {ns.export}")

    if ns.animate:
        from fourier_epicycles.presentation.render import build_animation, save_animation

        if profile.n_samples is None:
            profile = dataclasses.replace(profile, n_samples=n)
        _, anim = build_animation(coeffs, profile, periods=ns.periods, reference=pts)
        try:
            save_animation(anim, ns.animate, fps=profile.fps)
        except ValueError as e:
            print(f"[error] {e}")
            return 2
        print(f"[info] wrote animation: {ns.animate}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
