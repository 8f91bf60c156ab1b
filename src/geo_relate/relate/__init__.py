"""
DE-9IM relate engine.

``relate(a, b)`` builds a topology graph for each geometry, nodes them
against each other, labels every node and edge with its position relative
to both inputs, and summarises the labels in an IntersectionMatrix.

Example:
    >>> from geo_relate import Polygon, relate
    >>> a = Polygon([(0, 0), (2, 0), (2, 2), (0, 2)])
    >>> b = Polygon([(1, 1), (3, 1), (3, 3), (1, 3)])
    >>> str(relate(a, b))
    '212101212'
"""

from __future__ import annotations

from typing import Any, Union

from ..kernels import Kernel
from ..types import as_geometry
from ..validation import validate_intersector, validate_kernel
from .geometry_graph import GeometryGraph, TopologyWarning
from .intersection_matrix import IntersectionMatrix
from .line_intersector import Collinear, LineIntersection, SinglePoint, line_intersection
from .relate_operation import RelateOperation


def relate(
    a: Any,
    b: Any,
    *,
    kernel: Union[Kernel, str] = Kernel.ROBUST,
    intersector: str = "envelope",
) -> IntersectionMatrix:
    """
    Compute the DE-9IM intersection matrix of two geometries.

    Args:
        a: First geometry, or anything ``shape`` accepts
        b: Second geometry, or anything ``shape`` accepts
        kernel: Orientation kernel, a Kernel or its name
        intersector: Edge set intersection strategy: ``"envelope"`` tests
            only segment pairs with overlapping bounding boxes,
            ``"simple"`` tests every pair. Results are identical.

    Returns:
        Read-only IntersectionMatrix with A as rows and B as columns

    Raises:
        InvalidGeometryError: If an input cannot be converted to a geometry
        InvalidOptionError: If ``kernel`` or ``intersector`` is unknown

    Warns:
        TopologyWarning: If an input is invalid in a way that makes the
            result undefined, such as a collapsed ring
    """
    kernel = validate_kernel(kernel)
    intersector = validate_intersector(intersector)
    geometry_a = as_geometry(a)
    geometry_b = as_geometry(b)

    operation = RelateOperation(geometry_a, geometry_b, kernel=kernel, intersector=intersector)
    intersection_matrix = operation.compute_intersection_matrix()
    intersection_matrix.freeze()
    return intersection_matrix


__all__ = [
    "relate",
    "IntersectionMatrix",
    "TopologyWarning",
    "GeometryGraph",
    "RelateOperation",
    "line_intersection",
    "LineIntersection",
    "SinglePoint",
    "Collinear",
]
