"""Entity border rendering.

Two styles are offered:

* :func:`draw_borders` traces lines *between* cells. Every border cell draws
  each of its sides whose neighbor carries a different label, looked up
  directly in the grid. Between two entities both cells draw the shared
  side; against background only the entity side draws, since background
  cells are never part of the border set.
* :func:`draw_border_pixels` colors the border cells themselves.
"""

import logging
from typing import List, Union

from lattice_canvas.color import Color, ColorLike, as_color, as_color_state
from lattice_canvas.config import DEFAULT_BORDER_COLOR
from lattice_canvas.grid import Grid
from lattice_canvas.model import GridModel
from lattice_canvas.surface import FramebufferSurface
from lattice_canvas.types import SIDE_OFFSETS, Coordinate, Kind, Side

logger = logging.getLogger(__name__)


def kind_matches(model: GridModel, eid: int, kind: Kind) -> bool:
    """A negative ``kind`` matches every entity."""
    return kind < 0 or model.kind_of(eid) == kind


def cell_edges(grid: Grid, coord: Coordinate) -> List[Side]:
    """Sides of ``coord`` whose 4-neighbor has a different label."""
    x, y = coord
    label = grid.value_at(coord)
    return [
        side
        for side, (dx, dy) in SIDE_OFFSETS
        if grid.value_at((x + dx, y + dy)) != label
    ]


def draw_borders(
    surface: FramebufferSurface,
    model: GridModel,
    kind: Kind = -1,
    color: ColorLike = DEFAULT_BORDER_COLOR,
) -> None:
    """Draw outlines of entities of ``kind`` (all kinds if negative)."""
    state = as_color_state(color)
    segments = 0
    with surface.acquire() as view:
        for coord, eid in model.border_pixels():
            if not kind_matches(model, eid, kind):
                continue
            for side in cell_edges(model.grid, coord):
                view.draw_edge(coord, side, state)
                segments += 1
    logger.debug("drew %d border segments for kind %d", segments, kind)


def draw_border_pixels(
    surface: FramebufferSurface,
    model: GridModel,
    kind: Kind = -1,
    color: Union[Color, ColorLike] = DEFAULT_BORDER_COLOR,
) -> None:
    """Color the outer cells of entities of ``kind`` (all kinds if negative)."""
    fill = as_color(color)
    with surface.acquire() as view:
        for coord, eid in model.border_pixels():
            if kind_matches(model, eid, kind):
                view.put_block(coord, fill.resolve(eid))
