"""Rendering subpackage.

Each module implements one family of full-grid or full-entity passes over a
:class:`~lattice_canvas.surface.FramebufferSurface`:

* :mod:`~lattice_canvas.renderer.field`: log-scaled heatmaps and contour lines.
* :mod:`~lattice_canvas.renderer.borders`: entity outlines and border cells.
* :mod:`~lattice_canvas.renderer.entities`: per-entity fills and pixel sets.
* :mod:`~lattice_canvas.renderer.activity`: activity heatmaps.

Every pass acquires the surface once, writes raw pixels and commits on exit.
"""
