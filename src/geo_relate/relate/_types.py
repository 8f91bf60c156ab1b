"""Topology labels attached to edges, edge ends and nodes."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ..coordinate_position import CoordPos


class Direction(Enum):
    """Side of a directed edge. LEFT and RIGHT only exist for area edges."""

    ON = "on"
    LEFT = "left"
    RIGHT = "right"


class TopologyPosition:
    """
    Position of one graph component relative to one input geometry.

    Has one of two shapes, fixed at creation: line-or-point (an ``on``
    position only) or area (``on``, ``left`` and ``right``). Each position is
    a CoordPos or None while still unknown.
    """

    __slots__ = ("on", "left", "right", "_is_area")

    def __init__(
        self,
        on: Optional[CoordPos] = None,
        left: Optional[CoordPos] = None,
        right: Optional[CoordPos] = None,
        *,
        is_area: bool,
    ) -> None:
        self.on = on
        self.left = left
        self.right = right
        self._is_area = is_area

    @classmethod
    def area(
        cls,
        on: Optional[CoordPos],
        left: Optional[CoordPos],
        right: Optional[CoordPos],
    ) -> TopologyPosition:
        return cls(on, left, right, is_area=True)

    @classmethod
    def line_or_point(cls, on: Optional[CoordPos]) -> TopologyPosition:
        return cls(on, is_area=False)

    @classmethod
    def empty_area(cls) -> TopologyPosition:
        return cls(is_area=True)

    @classmethod
    def empty_line_or_point(cls) -> TopologyPosition:
        return cls(is_area=False)

    def copy(self) -> TopologyPosition:
        return TopologyPosition(self.on, self.left, self.right, is_area=self._is_area)

    def get(self, direction: Direction) -> Optional[CoordPos]:
        if direction is Direction.ON:
            return self.on
        self._require_area(direction)
        return self.left if direction is Direction.LEFT else self.right

    def is_empty(self) -> bool:
        return self._positions_are(all)

    def is_any_empty(self) -> bool:
        return self._positions_are(any)

    def is_area(self) -> bool:
        return self._is_area

    def is_line(self) -> bool:
        return not self._is_area

    def flip(self) -> None:
        if self._is_area:
            self.left, self.right = self.right, self.left

    def set_all_positions(self, position: CoordPos) -> None:
        self.on = position
        if self._is_area:
            self.left = position
            self.right = position

    def set_all_positions_if_empty(self, position: CoordPos) -> None:
        if self.on is None:
            self.on = position
        if self._is_area:
            if self.left is None:
                self.left = position
            if self.right is None:
                self.right = position

    def set_position(self, direction: Direction, position: CoordPos) -> None:
        if direction is Direction.ON:
            self.on = position
            return
        self._require_area(direction)
        if direction is Direction.LEFT:
            self.left = position
        else:
            self.right = position

    def set_on_position(self, position: CoordPos) -> None:
        self.on = position

    def _positions_are(self, reduce) -> bool:
        if self._is_area:
            return reduce(p is None for p in (self.on, self.left, self.right))
        return self.on is None

    def _require_area(self, direction: Direction) -> None:
        if not self._is_area:
            raise ValueError(f"a line or point topology has no {direction.value} position")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TopologyPosition):
            return NotImplemented
        return (self._is_area, self.on, self.left, self.right) == (
            other._is_area,
            other.on,
            other.left,
            other.right,
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        def name(p: Optional[CoordPos]) -> str:
            return "_" if p is None else p.name

        if self._is_area:
            return f"Area({name(self.on)}, {name(self.left)}, {name(self.right)})"
        return f"LineOrPoint({name(self.on)})"


class Label:
    """
    The topological relationship of a graph component to both input geometries.

    Holds one TopologyPosition per geometry (index 0 for A, 1 for B). Both
    positions always have the same shape.
    """

    __slots__ = ("_topologies",)

    def __init__(self, topologies: list[TopologyPosition]) -> None:
        self._topologies = topologies

    @classmethod
    def new(cls, geom_index: int, position: TopologyPosition) -> Label:
        """Label known for one geometry, empty (same shape) for the other."""
        empty = (
            TopologyPosition.empty_area()
            if position.is_area()
            else TopologyPosition.empty_line_or_point()
        )
        topologies = [empty, empty.copy()]
        topologies[geom_index] = position
        return cls(topologies)

    @classmethod
    def empty_line_or_point(cls) -> Label:
        return cls([TopologyPosition.empty_line_or_point(), TopologyPosition.empty_line_or_point()])

    @classmethod
    def empty_area(cls) -> Label:
        return cls([TopologyPosition.empty_area(), TopologyPosition.empty_area()])

    def copy(self) -> Label:
        return Label([t.copy() for t in self._topologies])

    def flip(self) -> None:
        for topology in self._topologies:
            topology.flip()

    def position(self, geom_index: int, direction: Direction) -> Optional[CoordPos]:
        return self._topologies[geom_index].get(direction)

    def on_position(self, geom_index: int) -> Optional[CoordPos]:
        return self._topologies[geom_index].get(Direction.ON)

    def set_position(self, geom_index: int, direction: Direction, position: CoordPos) -> None:
        self._topologies[geom_index].set_position(direction, position)

    def set_on_position(self, geom_index: int, position: CoordPos) -> None:
        self._topologies[geom_index].set_on_position(position)

    def set_all_positions(self, geom_index: int, position: CoordPos) -> None:
        self._topologies[geom_index].set_all_positions(position)

    def set_all_positions_if_empty(self, geom_index: int, position: CoordPos) -> None:
        self._topologies[geom_index].set_all_positions_if_empty(position)

    def geometry_count(self) -> int:
        """Number of geometries this label carries any information for."""
        return sum(1 for t in self._topologies if not t.is_empty())

    def is_empty(self, geom_index: int) -> bool:
        return self._topologies[geom_index].is_empty()

    def is_any_empty(self, geom_index: int) -> bool:
        return self._topologies[geom_index].is_any_empty()

    def is_area(self) -> bool:
        return any(t.is_area() for t in self._topologies)

    def is_geom_area(self, geom_index: int) -> bool:
        return self._topologies[geom_index].is_area()

    def is_line(self, geom_index: int) -> bool:
        return self._topologies[geom_index].is_line()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Label):
            return NotImplemented
        return self._topologies == other._topologies

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Label(A:{self._topologies[0]!r}, B:{self._topologies[1]!r})"


__all__ = ["Direction", "TopologyPosition", "Label"]
