"""Canvas configuration.

Defaults live as module constants so callers (and tests) can refer to them
directly; :class:`CanvasOptions` bundles the per-surface settings and can be
built from plain configuration data (e.g. a parsed JSON/TOML section).
"""

import numbers
from dataclasses import dataclass, fields
from typing import Any, Mapping, Tuple

DEFAULT_ZOOM = 1
DEFAULT_WRAP: Tuple[int, int] = (0, 0)
DEFAULT_CLEAR_COLOR = "000000"
DEFAULT_FIELD_COLOR = "0000FF"
DEFAULT_CONTOUR_COLOR = "FFFF00"
DEFAULT_BORDER_COLOR = "000000"
DEFAULT_FILL_COLOR = "000000"
DEFAULT_CONTOUR_STEPS = 10

# Contour candidates must lie within this fraction of the field maximum of a level.
CONTOUR_TOLERANCE = 0.05
# Offset added before taking the log of a field value.
FIELD_LOG_OFFSET = 0.1


@dataclass(frozen=True)
class CanvasOptions:
    """Per-surface drawing options.

    Attributes:
        zoom: Size in raster pixels of one grid cell along each axis.
        wrap: Per-axis modulus applied to draw coordinates; ``0`` disables
            wrapping on that axis. A nonzero wrap smaller than the grid
            extent also shrinks the surface to the wrap size.
    """

    zoom: int = DEFAULT_ZOOM
    wrap: Tuple[int, int] = DEFAULT_WRAP

    def __post_init__(self) -> None:
        integral = isinstance(self.zoom, numbers.Integral) and not isinstance(
            self.zoom, bool
        )
        if not integral or self.zoom < 1:
            raise ValueError(f"zoom must be a positive integer, got {self.zoom!r}")
        object.__setattr__(self, "zoom", int(self.zoom))
        wrap = tuple(self.wrap)
        if len(wrap) != 2 or any(w < 0 for w in wrap):
            raise ValueError(
                f"wrap must be two non-negative integers, got {self.wrap!r}"
            )
        # Normalize lists coming from config files.
        object.__setattr__(self, "wrap", (int(wrap[0]), int(wrap[1])))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CanvasOptions":
        """Build options from a mapping, ignoring keys that are not options."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def surface_size(
    extents: Tuple[int, int], wrap: Tuple[int, int]
) -> Tuple[int, int]:
    """Unzoomed surface size for a grid of ``extents`` drawn with ``wrap``.

    A nonzero wrap narrower than the grid clips the surface to the wrap size;
    otherwise the grid extent is used.
    """
    size = []
    for extent, w in zip(extents, wrap):
        size.append(w if 0 < w < extent else extent)
    return size[0], size[1]
