"""Persist raster snapshots as image files."""

import logging
import os
from typing import Optional, Union

import numpy as np
from PIL import Image

from lattice_canvas.errors import ImageExportError
from lattice_canvas.surface import FramebufferSurface
from lattice_canvas.types import UInt8Array

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "PNG"


def write_image(
    surface: FramebufferSurface,
    path: Union[str, "os.PathLike[str]"],
    format: Optional[str] = None,
) -> None:
    """Encode the committed raster and write it to ``path``.

    The format follows the file extension; unknown extensions are written as
    PNG.

    Raises:
        ImageExportError: The parent directory of ``path`` does not exist.
    """
    path = os.fspath(path)
    if format is None:
        ext = os.path.splitext(path)[1].lower()
        format = Image.registered_extensions().get(ext, DEFAULT_FORMAT)
    parent = os.path.dirname(path)
    if parent and not os.path.isdir(parent):
        logger.warning("export directory %s does not exist", parent)
        raise ImageExportError(path)
    image = surface.image
    if format.upper() in ("JPEG", "BMP"):
        # Formats without an alpha channel.
        image = image.convert("RGB")
    try:
        image.save(path, format=format)
    except FileNotFoundError as e:
        raise ImageExportError(path) from e
    logger.debug("wrote %dx%d %s image to %s", *image.size, format, path)


def read_image(path: str) -> UInt8Array:
    """Decode an image file into a ``(H, W, 4)`` uint8 RGBA array."""
    with Image.open(path) as image:
        return np.array(image.convert("RGBA"), dtype=np.uint8)
