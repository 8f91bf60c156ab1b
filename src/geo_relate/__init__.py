"""
geo-relate: DE-9IM topological relationships between planar geometries.

This package computes the Dimensionally Extended 9-Intersection Model matrix
of two 2-D geometries and derives the standard spatial predicates from it.

Modules:
- types: Geometry types and GeoJSON / ``__geo_interface__`` input
- relate: The relate engine and the IntersectionMatrix
- predicates: contains, within, intersects, touches, crosses, ...
- kernels: Orientation predicates (simple and robust)
- coordinate_position: Point location against a geometry
- dimensions: Topological dimension of geometries and their boundaries
- validation: Opt-in input checks and the exception hierarchy
"""

__version__ = "0.1.0"

# Point location
from .coordinate_position import CoordPos, coordinate_position

# Dimensions
from .dimensions import Dimensions, boundary_dimensions, dimensions, is_empty
from .envelope import Envelope, bounding_rect

# Orientation kernels
from .kernels import Kernel, Orientation, winding_order

# Predicates
from .predicates import (
    contains,
    covered_by,
    covers,
    crosses,
    disjoint,
    equals,
    intersects,
    overlaps,
    touches,
    within,
)

# Relate engine
from .relate import IntersectionMatrix, TopologyWarning, relate

# Geometry types
from .types import (
    Geometry,
    GeometryCollection,
    Line,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Rect,
    Triangle,
    as_geometry,
    shape,
)

# Validation
from .validation import (
    InvalidGeometryError,
    InvalidMatrixError,
    InvalidOptionError,
    ValidationError,
    validate_geometry,
)

__all__ = [
    # Version
    "__version__",
    # Geometry types
    "Geometry",
    "Point",
    "Line",
    "LineString",
    "Polygon",
    "MultiPoint",
    "MultiLineString",
    "MultiPolygon",
    "Rect",
    "Triangle",
    "GeometryCollection",
    "shape",
    "as_geometry",
    # Relate engine
    "relate",
    "IntersectionMatrix",
    "TopologyWarning",
    # Predicates
    "intersects",
    "disjoint",
    "contains",
    "within",
    "covers",
    "covered_by",
    "touches",
    "crosses",
    "overlaps",
    "equals",
    # Kernels
    "Kernel",
    "Orientation",
    "winding_order",
    # Point location
    "CoordPos",
    "coordinate_position",
    # Dimensions
    "Dimensions",
    "dimensions",
    "boundary_dimensions",
    "is_empty",
    "Envelope",
    "bounding_rect",
    # Validation
    "ValidationError",
    "InvalidGeometryError",
    "InvalidMatrixError",
    "InvalidOptionError",
    "validate_geometry",
]
