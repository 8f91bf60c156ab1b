"""
Nodes of a geometry graph, keyed by their exact coordinate.

Coincident coordinates always resolve to the same node. Iteration is in
lexicographic coordinate order, so everything computed from a node map is
deterministic.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterator, Optional, TypeVar

from ..coordinate_position import CoordPos
from ..dimensions import Dimensions
from ..types import Coord
from ._types import Label
from .intersection_matrix import IntersectionMatrix


class CoordNode:
    """
    A node: a coordinate and its topology relative to both geometries.

    Attributes:
        coord: Position of the node
        label: Line-or-point label, initially empty for both geometries
    """

    __slots__ = ("coord", "label")

    def __init__(self, coord: Coord) -> None:
        self.coord = coord
        self.label = Label.empty_line_or_point()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.coord!r}, {self.label!r})"

    def is_isolated(self) -> bool:
        """True if only one geometry has touched this node."""
        return self.label.geometry_count() == 1

    def set_label_on_position(self, geom_index: int, position: CoordPos) -> None:
        self.label.set_on_position(geom_index, position)

    def set_label_boundary(self, geom_index: int) -> None:
        """
        Toggle the node onto or off the boundary of a geometry.

        Each call stands for one more boundary edge meeting here, so the mod-2
        rule flips an Inside node onto the boundary and back.
        """
        current = self.label.on_position(geom_index)
        if current is CoordPos.ON_BOUNDARY:
            new_position = CoordPos.INSIDE
        else:
            new_position = CoordPos.ON_BOUNDARY
        self.label.set_on_position(geom_index, new_position)

    def update_intersection_matrix(self, intersection_matrix: IntersectionMatrix) -> None:
        """A node contributes a point intersection where both positions are known."""
        intersection_matrix.set_at_least_if_in_both(
            self.label.on_position(0), self.label.on_position(1), Dimensions.POINT
        )


N = TypeVar("N", bound=CoordNode)


class NodeMap(Generic[N]):
    """
    Map from coordinate to node.

    Args:
        node_factory: Builds a new node for a coordinate not seen before
    """

    def __init__(self, node_factory: Callable[[Coord], N]) -> None:
        self._node_factory = node_factory
        self._nodes: dict[Coord, N] = {}

    def insert_node_with_coordinate(self, coord: Coord) -> N:
        """Return the node at ``coord``, creating it if needed."""
        node = self._nodes.get(coord)
        if node is None:
            node = self._node_factory(coord)
            self._nodes[coord] = node
        return node

    def find(self, coord: Coord) -> Optional[N]:
        return self._nodes.get(coord)

    def __contains__(self, coord: object) -> bool:
        return coord in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[N]:
        for coord in sorted(self._nodes):
            yield self._nodes[coord]


__all__ = ["CoordNode", "NodeMap"]
