"""Common type aliases and enumerations.

``Coordinate`` is always ``(x, y)`` with ``x`` the column and ``y`` the row,
matching the raster convention used by :mod:`lattice_canvas.surface`. Numpy
arrays backing grids and rasters are indexed ``[y, x]``.
"""

from enum import StrEnum, auto
from typing import Callable, Tuple

import numpy as np
import numpy.typing as npt

EntityID = int
Kind = int

Coordinate = Tuple[int, int]
RGB = Tuple[int, int, int]

FloatArray = npt.NDArray[np.float64]
UInt8Array = npt.NDArray[np.uint8]
BoolArray = npt.NDArray[np.bool_]

# Maps a normalized activity value in [0, 1] to an RGB triple.
ActivityColorFn = Callable[[float], Tuple[float, float, float]]

# Background label shared by every label grid.
BACKGROUND: EntityID = 0


class Side(StrEnum):
    """Cell side along which a border segment is drawn."""

    RIGHT = auto()
    LEFT = auto()
    DOWN = auto()
    UP = auto()


# Neighbor offsets in the order border tracing checks them.
SIDE_OFFSETS: Tuple[Tuple[Side, Coordinate], ...] = (
    (Side.RIGHT, (1, 0)),
    (Side.LEFT, (-1, 0)),
    (Side.DOWN, (0, 1)),
    (Side.UP, (0, -1)),
)
