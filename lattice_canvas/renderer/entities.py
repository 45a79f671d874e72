"""Per-entity fills.

The pixel index is taken from the model once per call and treated as a
snapshot. Entities are painted in the order the index yields them; since
owned pixel sets of a consistent label grid never overlap, that order does
not affect the result.
"""

import logging
from typing import Iterable, Union

from lattice_canvas.color import Color, ColorLike, as_color, as_color_state
from lattice_canvas.config import DEFAULT_FILL_COLOR
from lattice_canvas.model import GridModel, PixelsByEntity
from lattice_canvas.renderer.borders import kind_matches
from lattice_canvas.surface import FramebufferSurface
from lattice_canvas.types import Coordinate, Kind

logger = logging.getLogger(__name__)


def draw_entities(
    surface: FramebufferSurface,
    model: GridModel,
    kind: Kind = -1,
    color: Union[Color, ColorLike] = DEFAULT_FILL_COLOR,
) -> None:
    """Fill every entity of ``kind`` (all kinds if negative) opaquely.

    ``color`` may be a :class:`~lattice_canvas.color.ByEntity` to give each
    entity its own color.
    """
    fill = as_color(color)
    pixels_by_entity = model.get_stat(PixelsByEntity)
    drawn = 0
    with surface.acquire() as view:
        for eid, coords in pixels_by_entity.items():
            if not kind_matches(model, eid, kind):
                continue
            state = fill.resolve(eid)
            for coord in coords:
                view.put_block(coord, state)
            drawn += 1
    logger.debug("filled %d entities of kind %d", drawn, kind)


def draw_pixel_set(
    surface: FramebufferSurface,
    pixels: Iterable[Coordinate],
    color: ColorLike = DEFAULT_FILL_COLOR,
) -> None:
    """Paint an arbitrary set of cells in one opaque color."""
    state = as_color_state(color)
    with surface.acquire() as view:
        for coord in pixels:
            view.put_block(coord, state)
