"""lattice_canvas
=================

Raster rendering for labeled simulation grids. Cells of a grid hold either an
entity id (``0`` is background) or a scalar field value; the renderers turn
them into an RGBA framebuffer that can be written out as an image.

Typical imports::

    from lattice_canvas import Canvas, Grid2D, LabelModel, ByEntity, entity_color

"""

from .canvas import Canvas
from .color import ByEntity, Color, ColorState, Constant, entity_color, parse_hex
from .config import CanvasOptions
from .errors import ActivityProviderNotFound, ContractViolation, ImageExportError
from .export import read_image, write_image
from .grid import Grid, Grid2D
from .model import (
    Capability,
    Constraint,
    ConstraintRegistry,
    GridModel,
    LabelModel,
    PixelsByEntity,
)
from .surface import FramebufferSurface, PixelView

__all__ = [
    "ActivityProviderNotFound",
    "ByEntity",
    "Canvas",
    "CanvasOptions",
    "Capability",
    "Color",
    "ColorState",
    "Constant",
    "Constraint",
    "ConstraintRegistry",
    "ContractViolation",
    "FramebufferSurface",
    "Grid",
    "Grid2D",
    "GridModel",
    "ImageExportError",
    "LabelModel",
    "PixelView",
    "PixelsByEntity",
    "entity_color",
    "parse_hex",
    "read_image",
    "write_image",
]
