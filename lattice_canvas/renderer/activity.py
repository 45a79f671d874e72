"""Activity heatmaps.

Activity values belong to a simulation constraint that declares the
:attr:`~lattice_canvas.model.Capability.ACTIVITY` capability. Each entity
pixel's raw activity is normalized by the maximum activity configured for
its kind and shown on a green-yellow-red scale.
"""

import logging
from typing import Mapping, Optional, Protocol, Tuple, cast

from lattice_canvas.color import ColorState
from lattice_canvas.errors import ActivityProviderNotFound
from lattice_canvas.model import Capability, GridModel
from lattice_canvas.surface import FramebufferSurface
from lattice_canvas.types import ActivityColorFn, Kind

logger = logging.getLogger(__name__)


class ActivityProvider(Protocol):
    """Per-pixel activity lookup.

    Attributes:
        max_act: Maximum activity per kind; kinds without a positive value
            are not drawn.
    """

    max_act: Mapping[Kind, float]

    def pxact(self, index: int) -> float: ...


def default_activity_color(a: float) -> Tuple[float, float, float]:
    """Green at 0, yellow at 0.5, red at 1."""
    if a > 0.5:
        return (255.0, (2 - 2 * a) * 255, 0.0)
    return ((2 * a) * 255, 255.0, 0.0)


def find_activity_provider(model: GridModel) -> ActivityProvider:
    """First registered constraint with the activity capability."""
    provider = model.constraints.first_with(Capability.ACTIVITY)
    if provider is None:
        logger.warning("no activity constraint among %d", len(model.constraints))
        raise ActivityProviderNotFound("Cannot find activity values to draw")
    return cast(ActivityProvider, provider)


def draw_activity(
    surface: FramebufferSurface,
    model: GridModel,
    kind: Kind = -1,
    provider: Optional[ActivityProvider] = None,
    color_fn: Optional[ActivityColorFn] = None,
) -> None:
    """Color entity pixels of ``kind`` (all kinds if negative) by activity.

    Raises:
        ActivityProviderNotFound: ``provider`` is not given and the model has
            no constraint exposing activity values.
    """
    if provider is None:
        provider = find_activity_provider(model)
    if color_fn is None:
        color_fn = default_activity_color
    grid = model.grid
    drawn = 0
    with surface.acquire() as view:
        for coord, eid in model.entity_pixels():
            k = model.kind_of(eid)
            if kind >= 0 and k != kind:
                continue
            max_act = provider.max_act.get(k, 0)
            if max_act <= 0:
                continue
            a = provider.pxact(grid.p2i(coord)) / max_act
            if a <= 0:
                continue
            view.put_block(coord, ColorState.from_rgb(*color_fn(a)))
            drawn += 1
    logger.debug("drew activity for %d pixels", drawn)
