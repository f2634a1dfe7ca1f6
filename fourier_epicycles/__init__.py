"""Fourier Epicycles -- Python tooling for drawing closed paths with rotating vectors.

This package provides tools for:
- Computing the discrete Fourier transform of an ordered, closed 2D point path
- Reconstructing the path at any time value as the tip of a chain of epicycles
- Accumulating the traced outline over one period for drawing
- Producing point paths from simple shapes, polylines and CSV tables
- Exporting coefficients and rendering animations (matplotlib, ipywidgets)

Key principles:
- One period is the angle range [0, 2*pi); sample n stands for t = 2*pi*n/N
- Coefficients are immutable once computed
- Reordering / recentring the coefficients is always an explicit caller choice

Main subpackages:
- analysis: DFT, epicycle reconstruction, trace buffer, animation driver
- gui: Interactive ipywidgets panel
- ingest: Point sources (shapes, polylines, CSV)
- models: Data models (FourierCoefficient, EpicycleProfile)
- presentation: Matplotlib rendering and animation export
- scripts: Coefficient export/import and the command-line tool
- validation: Input point validation
"""

__all__ = []
