"""Grid query interface and a numpy-backed reference grid.

Renderers only rely on the :class:`Grid` protocol. :class:`Grid2D` is a
small dense implementation that simulation code (or tests) can fill in and
hand to a canvas; it holds either entity labels or scalar field values.
"""

from typing import Iterator, List, Optional, Protocol, Sequence, Tuple, Union

import numpy as np
import numpy.typing as npt

from lattice_canvas.types import SIDE_OFFSETS, Coordinate, FloatArray

Number = Union[int, float]


class Grid(Protocol):
    """Read access to a dense 2D grid."""

    @property
    def extents(self) -> Tuple[int, int]: ...

    def value_at(self, coord: Coordinate) -> Number: ...

    def neighbors4(self, coord: Coordinate) -> Sequence[Coordinate]: ...

    def p2i(self, coord: Coordinate) -> int: ...

    def i2p(self, index: int) -> Coordinate: ...


def coordinates(extents: Tuple[int, int]) -> Iterator[Coordinate]:
    """All coordinates of a grid in row-major (scan) order."""
    width, height = extents
    for y in range(height):
        for x in range(width):
            yield (x, y)


def field_values(grid: Grid) -> FloatArray:
    """Snapshot of all grid values as a ``(height, width)`` float array."""
    if isinstance(grid, Grid2D):
        return grid.array.astype(np.float64)
    width, height = grid.extents
    values = np.empty((height, width), dtype=np.float64)
    for x, y in coordinates(grid.extents):
        values[y, x] = grid.value_at((x, y))
    return values


class Grid2D:
    """Dense rectangular grid.

    Out-of-range coordinates wrap around on torus axes. On a bounded axis
    they read as ``0`` (background) and are left out of ``neighbors4``.

    Attributes:
        torus: Per-axis wrap-around flags ``(x, y)``.
    """

    torus: Tuple[bool, bool]

    def __init__(
        self,
        extents: Tuple[int, int],
        torus: Tuple[bool, bool] = (True, True),
        dtype: npt.DTypeLike = np.int64,
    ) -> None:
        width, height = extents
        if width < 1 or height < 1:
            raise ValueError(f"Grid extents must be positive, got {extents}")
        self._values = np.zeros((height, width), dtype=dtype)
        self.torus = torus

    @classmethod
    def from_array(
        cls,
        values: npt.ArrayLike,
        torus: Tuple[bool, bool] = (True, True),
    ) -> "Grid2D":
        """Build a grid from a ``(height, width)`` array (copied)."""
        arr = np.array(values)
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {arr.shape}")
        grid = cls((arr.shape[1], arr.shape[0]), torus=torus, dtype=arr.dtype)
        grid._values[...] = arr
        return grid

    @property
    def extents(self) -> Tuple[int, int]:
        height, width = self._values.shape
        return (width, height)

    @property
    def array(self) -> npt.NDArray[np.generic]:
        """Read-only view of the values, indexed ``[y, x]``."""
        view = self._values.view()
        view.flags.writeable = False
        return view

    def _resolve(self, coord: Coordinate) -> Optional[Coordinate]:
        x, y = coord
        width, height = self.extents
        if not 0 <= x < width:
            if not self.torus[0]:
                return None
            x %= width
        if not 0 <= y < height:
            if not self.torus[1]:
                return None
            y %= height
        return (x, y)

    def value_at(self, coord: Coordinate) -> Number:
        resolved = self._resolve(coord)
        if resolved is None:
            return 0
        x, y = resolved
        return self._values[y, x].item()

    def set_value(self, coord: Coordinate, value: Number) -> None:
        resolved = self._resolve(coord)
        if resolved is None:
            raise IndexError(f"Coordinate {coord} is outside the grid")
        x, y = resolved
        self._values[y, x] = value

    def neighbors4(self, coord: Coordinate) -> List[Coordinate]:
        """Von Neumann neighbors (right, left, down, up) that exist."""
        x, y = coord
        out: List[Coordinate] = []
        for _, (dx, dy) in SIDE_OFFSETS:
            resolved = self._resolve((x + dx, y + dy))
            if resolved is not None:
                out.append(resolved)
        return out

    def p2i(self, coord: Coordinate) -> int:
        x, y = coord
        return y * self.extents[0] + x

    def i2p(self, index: int) -> Coordinate:
        y, x = divmod(index, self.extents[0])
        return (x, y)
