"""GUI package - interactive ipywidgets interface.

This package provides the Jupyter notebook GUI with two tabs:
1. Epicycles: choose a point source, analyze, scrub/play the animation,
   reveal epicycles progressively with the "Visible" slider
2. Export: write the current coefficients to CSV or JSON

Entry point:
    from fourier_epicycles.gui.app import build_gui
    gui = build_gui()
"""
