"""High level canvas bound to one grid or model.

:class:`Canvas` sizes a :class:`~lattice_canvas.surface.FramebufferSurface`
from its source and forwards to the renderer functions, filling in the
source's grid and the configured defaults::

    canvas = Canvas(model, zoom=2)
    canvas.clear("FFFFFF")
    canvas.draw_entities(1, ByEntity(entity_color))
    canvas.draw_borders(1, "000000")
    canvas.write_image("frame-0100.png")
"""

import os
from typing import Iterable, Optional, Union

from PIL import ImageDraw

from lattice_canvas.color import Color, ColorLike
from lattice_canvas.config import (
    DEFAULT_BORDER_COLOR,
    DEFAULT_CLEAR_COLOR,
    DEFAULT_CONTOUR_COLOR,
    DEFAULT_CONTOUR_STEPS,
    DEFAULT_FIELD_COLOR,
    DEFAULT_FILL_COLOR,
    CanvasOptions,
)
from lattice_canvas.export import write_image
from lattice_canvas.grid import Grid
from lattice_canvas.model import GridModel
from lattice_canvas.renderer.activity import ActivityProvider, draw_activity
from lattice_canvas.renderer.borders import draw_border_pixels, draw_borders
from lattice_canvas.renderer.entities import draw_entities, draw_pixel_set
from lattice_canvas.renderer.field import draw_contours, draw_heatmap
from lattice_canvas.surface import FramebufferSurface
from lattice_canvas.types import ActivityColorFn, Coordinate, Kind, UInt8Array


class Canvas:
    """Drawing surface for a label model or a bare grid.

    Attributes:
        source: The model or grid the canvas was created for.
        grid: Grid drawn by the field operations by default.
        options: Zoom and wrap settings.
        surface: Underlying framebuffer.
    """

    source: Union[GridModel, Grid]
    grid: Grid
    options: CanvasOptions
    surface: FramebufferSurface

    def __init__(
        self,
        source: Union[GridModel, Grid],
        options: Optional[CanvasOptions] = None,
        **overrides: object,
    ) -> None:
        if options is None:
            options = CanvasOptions.from_mapping(overrides)
        elif overrides:
            options = CanvasOptions.from_mapping({**vars(options), **overrides})
        self.source = source
        # Models expose their label grid; a bare grid is its own grid.
        self.grid = getattr(source, "grid", source)
        self.options = options
        self.surface = FramebufferSurface.for_extents(source.extents, options)

    @property
    def model(self) -> GridModel:
        if not hasattr(self.source, "border_pixels"):
            raise TypeError("entity drawing needs a model, not a bare grid")
        return self.source  # type: ignore[return-value]

    @property
    def width(self) -> int:
        return self.surface.width

    @property
    def height(self) -> int:
        return self.surface.height

    @property
    def zoom(self) -> int:
        return self.surface.zoom

    def context(self) -> ImageDraw.ImageDraw:
        return self.surface.context()

    def clear(self, color: ColorLike = DEFAULT_CLEAR_COLOR) -> None:
        self.surface.clear(color)

    def to_array(self) -> UInt8Array:
        return self.surface.to_array()

    def draw_heatmap(
        self, grid: Optional[Grid] = None, color: ColorLike = DEFAULT_FIELD_COLOR
    ) -> None:
        draw_heatmap(self.surface, grid or self.grid, color)

    def draw_contours(
        self,
        grid: Optional[Grid] = None,
        nsteps: int = DEFAULT_CONTOUR_STEPS,
        color: ColorLike = DEFAULT_CONTOUR_COLOR,
    ) -> None:
        draw_contours(self.surface, grid or self.grid, nsteps, color)

    def draw_borders(
        self, kind: Kind = -1, color: ColorLike = DEFAULT_BORDER_COLOR
    ) -> None:
        draw_borders(self.surface, self.model, kind, color)

    def draw_border_pixels(
        self, kind: Kind = -1, color: Union[Color, ColorLike] = DEFAULT_BORDER_COLOR
    ) -> None:
        draw_border_pixels(self.surface, self.model, kind, color)

    def draw_entities(
        self, kind: Kind = -1, color: Union[Color, ColorLike] = DEFAULT_FILL_COLOR
    ) -> None:
        draw_entities(self.surface, self.model, kind, color)

    def draw_pixel_set(
        self, pixels: Iterable[Coordinate], color: ColorLike = DEFAULT_FILL_COLOR
    ) -> None:
        draw_pixel_set(self.surface, pixels, color)

    def draw_activity(
        self,
        kind: Kind = -1,
        provider: Optional[ActivityProvider] = None,
        color_fn: Optional[ActivityColorFn] = None,
    ) -> None:
        draw_activity(self.surface, self.model, kind, provider, color_fn)

    def write_image(
        self, path: Union[str, "os.PathLike[str]"], format: Optional[str] = None
    ) -> None:
        write_image(self.surface, path, format)
