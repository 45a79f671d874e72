"""Scalar field heatmaps and contour lines.

Field values are shown on a logarithmic scale, ``t = log(0.1 + v)``, and
normalized by the largest transformed value in the grid (never below 0).

Heatmap alphas are *not* clamped: values whose transform is negative give a
negative alpha. The alpha byte written to the raster is saturated to 0..255
on store, like a clamped byte array, so such cells end up fully transparent.

Contours use a neighbor level-crossing test rather than interpolation: a
cell close to a level (within ``0.05 * maxval``) is marked when it has
neighbors on both sides of the level. Coarse level counts can miss or
double up cells near a crossing.
"""

import logging
import math
from typing import Dict, List

import numpy as np

from lattice_canvas.color import ColorLike, as_color_state
from lattice_canvas.config import (
    CONTOUR_TOLERANCE,
    DEFAULT_CONTOUR_COLOR,
    DEFAULT_CONTOUR_STEPS,
    DEFAULT_FIELD_COLOR,
    FIELD_LOG_OFFSET,
)
from lattice_canvas.grid import Grid, coordinates, field_values
from lattice_canvas.surface import FramebufferSurface
from lattice_canvas.types import Coordinate, FloatArray

logger = logging.getLogger(__name__)

LOG_FLOOR = math.log(FIELD_LOG_OFFSET)


def log_transform(values: FloatArray) -> FloatArray:
    return np.log(FIELD_LOG_OFFSET + np.asarray(values, dtype=np.float64))


def field_max(transformed: FloatArray) -> float:
    """Largest transformed value, starting from 0."""
    return max(0.0, float(np.max(transformed)))


def heatmap_alpha(values: FloatArray) -> FloatArray:
    """Per-cell heatmap alpha ``log(0.1 + v) / maxval``, unclamped.

    All alphas are 0 when no transformed value is positive.
    """
    transformed = log_transform(values)
    maxval = field_max(transformed)
    if maxval == 0.0:
        return np.zeros_like(transformed)
    return transformed / maxval


def draw_heatmap(
    surface: FramebufferSurface, grid: Grid, color: ColorLike = DEFAULT_FIELD_COLOR
) -> None:
    """Paint every cell of ``grid`` in ``color`` with its heatmap alpha."""
    state = as_color_state(color)
    alpha = heatmap_alpha(field_values(grid))
    with surface.acquire() as view:
        for x, y in coordinates(grid.extents):
            view.put_block((x, y), state, float(alpha[y, x]))
    logger.debug("heatmap drew %d cells", alpha.size)


def contour_levels(minval: float, maxval: float, nsteps: int) -> List[float]:
    """``nsteps`` evenly spaced levels, the last one at ``maxval``."""
    if nsteps < 1:
        raise ValueError(f"nsteps must be positive, got {nsteps}")
    step = (maxval - minval) / nsteps
    # Pin the top level so rounding cannot push it past the field maximum.
    return [minval + k * step for k in range(1, nsteps)] + [maxval]


def contour_pixels(
    grid: Grid, nsteps: int = DEFAULT_CONTOUR_STEPS
) -> Dict[Coordinate, float]:
    """Cells on a contour line mapped to their alpha.

    Levels are processed from low to high, so a cell marked at several
    levels keeps the alpha of the highest one.
    """
    transformed = log_transform(field_values(grid))
    maxval = field_max(transformed)
    minval = min(LOG_FLOOR, float(np.min(transformed)))
    tolerance = CONTOUR_TOLERANCE * maxval
    marked: Dict[Coordinate, float] = {}
    for v in contour_levels(minval, maxval, nsteps):
        alpha = 0.3 + 0.7 * ((v - minval) / (maxval - minval))
        ys, xs = np.nonzero(np.abs(v - transformed) < tolerance)
        for x, y in zip(xs.tolist(), ys.tolist()):
            below = above = False
            for nx, ny in grid.neighbors4((x, y)):
                nval = transformed[ny, nx]
                if nval < v:
                    below = True
                if nval >= v:
                    above = True
                if above and below:
                    marked[(x, y)] = alpha
                    break
    return marked


def draw_contours(
    surface: FramebufferSurface,
    grid: Grid,
    nsteps: int = DEFAULT_CONTOUR_STEPS,
    color: ColorLike = DEFAULT_CONTOUR_COLOR,
) -> None:
    """Paint approximate isolines of ``grid`` in ``color``."""
    state = as_color_state(color)
    marked = contour_pixels(grid, nsteps)
    with surface.acquire() as view:
        for coord, alpha in marked.items():
            view.put_block(coord, state, alpha)
    logger.debug("contours marked %d cells over %d levels", len(marked), nsteps)

