"""Entity-level queries over a label grid.

A *model* couples a label grid with per-entity metadata (kinds) and a
registry of pluggable constraint objects. Renderers use it through the
:class:`GridModel` protocol; :class:`LabelModel` is an immutable reference
implementation built on persistent maps.

Design notes:

* Border and pixel sets are recomputed from the grid on every call, so they
  always reflect the grid's current state.
* Constraints advertise what they can do through an explicit
  ``capabilities`` set; renderers ask the registry for the first constraint
  holding a given :class:`Capability` instead of inspecting types.
"""

from dataclasses import dataclass, field, replace
from enum import StrEnum, auto
from typing import (
    Dict,
    FrozenSet,
    Iterator,
    List,
    Optional,
    Protocol,
    Tuple,
    Type,
    TypeVar,
)

import numpy as np
from pyrsistent import PMap, PVector, pmap, pvector

from lattice_canvas.grid import Grid, Grid2D
from lattice_canvas.types import (
    BACKGROUND,
    SIDE_OFFSETS,
    Coordinate,
    EntityID,
    Kind,
)

T = TypeVar("T")

PixelIndex = PMap[EntityID, PVector[Coordinate]]


class Capability(StrEnum):
    """Capabilities a constraint can declare."""

    ACTIVITY = auto()


class Constraint(Protocol):
    """Simulation constraint as seen by the renderers."""

    capabilities: FrozenSet[Capability]


@dataclass(frozen=True)
class ConstraintRegistry:
    """Ordered, immutable collection of constraint objects."""

    constraints: PVector[Constraint] = field(default_factory=pvector)

    def add(self, constraint: Constraint) -> "ConstraintRegistry":
        return ConstraintRegistry(self.constraints.append(constraint))

    def first_with(self, capability: Capability) -> Optional[Constraint]:
        """Return the first constraint declaring ``capability``, else ``None``."""
        for constraint in self.constraints:
            if capability in constraint.capabilities:
                return constraint
        return None

    def __iter__(self) -> Iterator[Constraint]:
        return iter(self.constraints)

    def __len__(self) -> int:
        return len(self.constraints)


class Stat(Protocol[T]):
    """A derived quantity computed from a model snapshot."""

    @staticmethod
    def compute(model: "GridModel") -> T: ...


class GridModel(Protocol):
    """Entity queries the renderers consume."""

    @property
    def grid(self) -> Grid: ...

    @property
    def extents(self) -> Tuple[int, int]: ...

    @property
    def constraints(self) -> ConstraintRegistry: ...

    def kind_of(self, eid: EntityID) -> Kind: ...

    def entity_pixels(self) -> List[Tuple[Coordinate, EntityID]]: ...

    def border_pixels(self) -> List[Tuple[Coordinate, EntityID]]: ...

    def get_stat(self, stat_type: Type[Stat[T]]) -> T: ...


class PixelsByEntity:
    """Stat mapping each entity id to the coordinates it owns (scan order)."""

    @staticmethod
    def compute(model: "GridModel") -> PixelIndex:
        index: Dict[EntityID, List[Coordinate]] = {}
        for coord, eid in model.entity_pixels():
            index.setdefault(eid, []).append(coord)
        return pmap({eid: pvector(coords) for eid, coords in index.items()})


@dataclass(frozen=True)
class LabelModel:
    """Label grid plus entity kinds and constraints.

    Attributes:
        grid: Label grid; ``0`` is background.
        kinds: Kind of every non-background entity id.
        constraints: Pluggable constraint objects, in registration order.
    """

    grid: Grid2D
    kinds: PMap[EntityID, Kind] = pmap()
    constraints: ConstraintRegistry = ConstraintRegistry()

    @property
    def extents(self) -> Tuple[int, int]:
        return self.grid.extents

    def kind_of(self, eid: EntityID) -> Kind:
        if eid == BACKGROUND:
            return 0
        try:
            return self.kinds[eid]
        except KeyError:
            raise KeyError(f"Entity {eid} has no kind assigned") from None

    def with_entity(self, eid: EntityID, kind: Kind) -> "LabelModel":
        """Return a copy with ``eid`` registered as ``kind``."""
        return replace(self, kinds=self.kinds.set(eid, kind))

    def with_constraint(self, constraint: Constraint) -> "LabelModel":
        return replace(self, constraints=self.constraints.add(constraint))

    def entity_pixels(self) -> List[Tuple[Coordinate, EntityID]]:
        """``(coord, id)`` for every non-background cell, in scan order."""
        labels = self.grid.array
        ys, xs = np.nonzero(labels != BACKGROUND)
        return [
            ((int(x), int(y)), int(labels[y, x])) for y, x in zip(ys, xs)
        ]

    def border_pixels(self) -> List[Tuple[Coordinate, EntityID]]:
        """Entity cells with at least one differently labeled 4-neighbor."""
        out: List[Tuple[Coordinate, EntityID]] = []
        for (x, y), eid in self.entity_pixels():
            for _, (dx, dy) in SIDE_OFFSETS:
                if self.grid.value_at((x + dx, y + dy)) != eid:
                    out.append(((x, y), eid))
                    break
        return out

    def get_stat(self, stat_type: Type[Stat[T]]) -> T:
        return stat_type.compute(self)
