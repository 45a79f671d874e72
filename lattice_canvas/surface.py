"""Raster framebuffer with scoped raw pixel access.

The surface keeps its pixels in a Pillow ``RGBA`` image. High level (vector)
drawing goes straight through an ``ImageDraw`` context, while the renderers
work on a raw numpy copy obtained through :meth:`FramebufferSurface.acquire`
and written back when the ``with`` block exits cleanly::

    with surface.acquire() as view:
        view.put_block((3, 4), ColorState.from_hex("FF0000"))

Raw writes overwrite all four channels; there is no blending with what was
in the buffer before. Coordinates passed to the view are grid coordinates
(unzoomed) and are wrap-reduced before use.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw

from lattice_canvas.color import ColorLike, ColorState, as_color_state
from lattice_canvas.config import (
    DEFAULT_CLEAR_COLOR,
    DEFAULT_WRAP,
    DEFAULT_ZOOM,
    CanvasOptions,
    surface_size,
)
from lattice_canvas.errors import ContractViolation
from lattice_canvas.types import Coordinate, Side, UInt8Array

logger = logging.getLogger(__name__)


def alpha_byte(alpha: float) -> int:
    """Store ``alpha*255`` the way a clamped byte array does (round, saturate)."""
    return min(255, max(0, int(round(alpha * 255))))


class PixelView:
    """Mutable raw view of a surface, valid inside one ``acquire()`` block.

    Attributes:
        pixels: ``(height*zoom, width*zoom, 4)`` uint8 array.
    """

    pixels: UInt8Array

    def __init__(self, surface: "FramebufferSurface", pixels: UInt8Array) -> None:
        self._surface = surface
        self.pixels = pixels

    @property
    def zoom(self) -> int:
        return self._surface.zoom

    def _checked(self, coord: Coordinate) -> Coordinate:
        x, y = self._surface.wrap_coordinate(coord)
        if not (0 <= x < self._surface.width and 0 <= y < self._surface.height):
            size = f"{self._surface.width}x{self._surface.height}"
            raise ContractViolation(f"coordinate {coord} outside {size} surface")
        return x, y

    def put_block(
        self, coord: Coordinate, color: ColorState, alpha: float = 1.0
    ) -> None:
        """Write the zoom x zoom block of cell ``coord``.

        ``alpha`` is stored as-is (scaled to a byte) in the alpha channel.
        """
        x, y = self._checked(coord)
        z = self.zoom
        block = self.pixels[z * y : z * (y + 1), z * x : z * (x + 1)]
        block[..., 0] = color.r
        block[..., 1] = color.g
        block[..., 2] = color.b
        block[..., 3] = alpha_byte(alpha)

    def put_raw(self, px: int, py: int, color: ColorState) -> None:
        """Write one opaque raster pixel at zoomed coordinates ``(px, py)``."""
        height, width = self.pixels.shape[:2]
        if not (0 <= px < width and 0 <= py < height):
            raise ContractViolation(
                f"raster pixel ({px}, {py}) outside {width}x{height}"
            )
        self.pixels[py, px] = (color.r, color.g, color.b, 255)

    def draw_edge(self, coord: Coordinate, side: Side, color: ColorState) -> None:
        """Draw a one pixel wide, zoom long segment along ``side`` of a cell.

        Left and up segments lie on the cell's own first column/row; right
        and down segments lie on the first column/row of the next cell, so
        both cells of a boundary paint the same raster line. A cell in the
        last surface column (row) has no next cell on the raster, so its
        right (down) segment falls back to its own last column (row).
        """
        x, y = self._checked(coord)
        z = self.zoom
        height, width = self.pixels.shape[:2]
        rgba = (color.r, color.g, color.b, 255)
        if side in (Side.LEFT, Side.RIGHT):
            col = z * x if side is Side.LEFT else min(z * (x + 1), width - 1)
            self.pixels[z * y : z * (y + 1), col] = rgba
        else:
            row = z * y if side is Side.UP else min(z * (y + 1), height - 1)
            self.pixels[row, z * x : z * (x + 1)] = rgba

    def commit(self) -> None:
        """Write the view back to the surface image."""
        self._surface._store(self.pixels)


class FramebufferSurface:
    """RGBA raster of ``width*zoom`` x ``height*zoom`` pixels.

    Attributes:
        width: Width in grid cells (unzoomed).
        height: Height in grid cells (unzoomed).
        zoom: Raster pixels per grid cell along each axis.
        wrap: Per-axis modulus for draw coordinates, ``0`` meaning no wrap.
    """

    width: int
    height: int
    zoom: int
    wrap: Tuple[int, int]

    def __init__(
        self,
        width: int,
        height: int,
        zoom: int = DEFAULT_ZOOM,
        wrap: Tuple[int, int] = DEFAULT_WRAP,
    ) -> None:
        options = CanvasOptions(zoom=zoom, wrap=wrap)
        if width < 1 or height < 1:
            raise ValueError(f"surface must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.zoom = options.zoom
        self.wrap = options.wrap
        self._image = Image.new(
            "RGBA", (width * self.zoom, height * self.zoom), (0, 0, 0, 0)
        )
        self._draw = ImageDraw.Draw(self._image)
        self._view: Optional[PixelView] = None

    @classmethod
    def for_extents(
        cls, extents: Tuple[int, int], options: Optional[CanvasOptions] = None
    ) -> "FramebufferSurface":
        """Size a surface for a grid of ``extents``, clipped by the wrap."""
        options = options or CanvasOptions()
        width, height = surface_size(extents, options.wrap)
        return cls(width, height, zoom=options.zoom, wrap=options.wrap)

    @property
    def pixel_size(self) -> Tuple[int, int]:
        """Raster ``(width, height)`` in pixels."""
        return self._image.size

    @property
    def image(self) -> Image.Image:
        """Copy of the committed raster."""
        return self._image.copy()

    def to_array(self) -> UInt8Array:
        """Copy of the committed raster as a ``(H, W, 4)`` uint8 array."""
        return np.array(self._image, dtype=np.uint8)

    def wrap_coordinate(self, coord: Coordinate) -> Coordinate:
        x, y = coord
        wx, wy = self.wrap
        if wx != 0:
            x = x % wx
        if wy != 0:
            y = y % wy
        return x, y

    @contextmanager
    def acquire(self) -> Iterator[PixelView]:
        """Scoped raw access; commits on success, discards on error."""
        if self._view is not None:
            raise ContractViolation("surface is already acquired")
        view = PixelView(self, self.to_array())
        self._view = view
        try:
            yield view
        except BaseException:
            logger.debug("discarding uncommitted pixel view after error")
            raise
        else:
            view.commit()
        finally:
            self._view = None

    def _store(self, pixels: UInt8Array) -> None:
        if pixels.shape != (self._image.height, self._image.width, 4):
            raise ContractViolation(f"pixel view has wrong shape {pixels.shape}")
        self._image.paste(Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)))

    # -------- Vector (draw context) path --------

    def context(self) -> ImageDraw.ImageDraw:
        """Pillow draw context over the committed raster."""
        return self._draw

    def clear(self, color: ColorLike = DEFAULT_CLEAR_COLOR) -> None:
        """Fill the whole raster with one opaque color."""
        state = as_color_state(color)
        self._draw.rectangle(
            (0, 0, self._image.width - 1, self._image.height - 1),
            fill=state.fill_style,
        )

    def fill_cell(self, coord: Coordinate, color: ColorLike) -> None:
        """Opaque zoom x zoom rectangle for one cell."""
        x, y = self.wrap_coordinate(coord)
        z = self.zoom
        self._draw.rectangle(
            (z * x, z * y, z * (x + 1) - 1, z * (y + 1) - 1),
            fill=as_color_state(color).fill_style,
        )

    def fill_cell_unzoomed(self, coord: Coordinate, color: ColorLike) -> None:
        """Single raster pixel at the zoomed origin of a cell."""
        x, y = self.wrap_coordinate(coord)
        self._draw.point(
            (self.zoom * x, self.zoom * y), fill=as_color_state(color).fill_style
        )
