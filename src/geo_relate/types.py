"""
Geometry types consumed by the relate engine.

Coordinates are plain ``(x, y)`` tuples of any real number type: float, int,
Fraction and Decimal all work, the robust kernel handles each exactly.

Types:
    Point, Line, LineString, Polygon, MultiPoint, MultiLineString,
    MultiPolygon, Rect, Triangle, GeometryCollection

Every type exposes ``__geo_interface__`` and a ``relate`` convenience method.
``shape`` builds geometries from GeoJSON-like mappings or from any object
that exposes ``__geo_interface__``, such as shapely geometries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Mapping, Union

from .validation import InvalidGeometryError

if TYPE_CHECKING:
    from .relate.intersection_matrix import IntersectionMatrix

Coord = tuple[Any, Any]


def _as_coord(value: Any) -> Coord:
    if isinstance(value, Point):
        return value.coord
    try:
        return (value[0], value[1])
    except (TypeError, IndexError, KeyError) as exc:
        raise InvalidGeometryError(
            f"Coordinate must be an (x, y) pair, got {value!r}"
        ) from exc


def _as_coords(values: Iterable[Any]) -> tuple[Coord, ...]:
    return tuple(_as_coord(v) for v in values)


def _as_ring(value: Any) -> LineString:
    ring = value if isinstance(value, LineString) else LineString(value)
    # rings are closed on construction
    if ring.coords and ring.coords[0] != ring.coords[-1]:
        ring = LineString(ring.coords + (ring.coords[0],))
    return ring


class _GeometryMixin:
    """Operations shared by every geometry type."""

    def relate(self, other: Any, **options: Any) -> IntersectionMatrix:
        """
        Compute the DE-9IM intersection matrix against another geometry.

        See ``geo_relate.relate`` for the accepted options.
        """
        from .relate import relate

        return relate(self, other, **options)


@dataclass(frozen=True)
class Point(_GeometryMixin):
    """A single position."""

    x: Any
    y: Any

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        return {"type": "Point", "coordinates": self.coord}


@dataclass(frozen=True)
class Line(_GeometryMixin):
    """A single segment from ``start`` to ``end``."""

    start: Coord
    end: Coord

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _as_coord(self.start))
        object.__setattr__(self, "end", _as_coord(self.end))

    @property
    def delta(self) -> Coord:
        return (self.end[0] - self.start[0], self.end[1] - self.start[1])

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        return {"type": "LineString", "coordinates": (self.start, self.end)}


@dataclass(frozen=True)
class LineString(_GeometryMixin):
    """An ordered sequence of coordinates. May be empty or closed."""

    coords: tuple[Coord, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "coords", _as_coords(self.coords))

    def __len__(self) -> int:
        return len(self.coords)

    def __iter__(self) -> Iterator[Coord]:
        return iter(self.coords)

    @property
    def is_closed(self) -> bool:
        """True when the first and last coordinates are equal (or it is empty)."""
        return not self.coords or self.coords[0] == self.coords[-1]

    def lines(self) -> Iterator[Line]:
        for start, end in zip(self.coords, self.coords[1:]):
            yield Line(start, end)

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        return {"type": "LineString", "coordinates": self.coords}


@dataclass(frozen=True)
class Polygon(_GeometryMixin):
    """
    An area bounded by an exterior ring, with optional holes.

    Rings are closed on construction when their last coordinate differs
    from their first.
    """

    exterior: LineString = LineString()
    interiors: tuple[LineString, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "exterior", _as_ring(self.exterior))
        object.__setattr__(self, "interiors", tuple(_as_ring(r) for r in self.interiors))

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        rings = (self.exterior.coords,) + tuple(r.coords for r in self.interiors)
        return {"type": "Polygon", "coordinates": rings if self.exterior.coords else ()}


@dataclass(frozen=True)
class MultiPoint(_GeometryMixin):
    points: tuple[Point, ...] = ()

    def __post_init__(self) -> None:
        points = tuple(p if isinstance(p, Point) else Point(*_as_coord(p)) for p in self.points)
        object.__setattr__(self, "points", points)

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        return {"type": "MultiPoint", "coordinates": tuple(p.coord for p in self.points)}


@dataclass(frozen=True)
class MultiLineString(_GeometryMixin):
    line_strings: tuple[LineString, ...] = ()

    def __post_init__(self) -> None:
        parts = tuple(
            ls if isinstance(ls, LineString) else LineString(ls) for ls in self.line_strings
        )
        object.__setattr__(self, "line_strings", parts)

    @property
    def is_closed(self) -> bool:
        """True when every part is closed."""
        return all(ls.is_closed for ls in self.line_strings)

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        return {
            "type": "MultiLineString",
            "coordinates": tuple(ls.coords for ls in self.line_strings),
        }


@dataclass(frozen=True)
class MultiPolygon(_GeometryMixin):
    polygons: tuple[Polygon, ...] = ()

    def __post_init__(self) -> None:
        parts = tuple(
            p if isinstance(p, Polygon) else _polygon_from_rings(p) for p in self.polygons
        )
        object.__setattr__(self, "polygons", parts)

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        return {
            "type": "MultiPolygon",
            "coordinates": tuple(p.__geo_interface__["coordinates"] for p in self.polygons),
        }


@dataclass(frozen=True)
class Rect(_GeometryMixin):
    """An axis-aligned rectangle. Corners are normalised so min <= max."""

    min: Coord
    max: Coord

    def __post_init__(self) -> None:
        a, b = _as_coord(self.min), _as_coord(self.max)
        object.__setattr__(self, "min", (min(a[0], b[0]), min(a[1], b[1])))
        object.__setattr__(self, "max", (max(a[0], b[0]), max(a[1], b[1])))

    def to_polygon(self) -> Polygon:
        (min_x, min_y), (max_x, max_y) = self.min, self.max
        return Polygon(
            [(max_x, min_y), (max_x, max_y), (min_x, max_y), (min_x, min_y), (max_x, min_y)]
        )

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        return self.to_polygon().__geo_interface__


@dataclass(frozen=True)
class Triangle(_GeometryMixin):
    a: Coord
    b: Coord
    c: Coord

    def __post_init__(self) -> None:
        for name in ("a", "b", "c"):
            object.__setattr__(self, name, _as_coord(getattr(self, name)))

    def to_polygon(self) -> Polygon:
        return Polygon([self.a, self.b, self.c, self.a])

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        return self.to_polygon().__geo_interface__


@dataclass(frozen=True)
class GeometryCollection(_GeometryMixin):
    geometries: tuple[Geometry, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "geometries", tuple(as_geometry(g) for g in self.geometries))

    def __iter__(self) -> Iterator[Geometry]:
        return iter(self.geometries)

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        return {
            "type": "GeometryCollection",
            "geometries": [g.__geo_interface__ for g in self.geometries],
        }


Geometry = Union[
    Point,
    Line,
    LineString,
    Polygon,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
    Rect,
    Triangle,
    GeometryCollection,
]

GEOMETRY_TYPES = (
    Point,
    Line,
    LineString,
    Polygon,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
    Rect,
    Triangle,
    GeometryCollection,
)


def _polygon_from_rings(rings: Any) -> Polygon:
    if not rings:
        return Polygon()
    return Polygon(rings[0], tuple(rings[1:]))


def _point_from_coords(coords: Any) -> Union[Point, MultiPoint]:
    # there is no empty Point; an empty MultiPoint stands in for it
    if not coords:
        return MultiPoint()
    return Point(*_as_coord(coords))


_GEOJSON_BUILDERS = {
    "Point": _point_from_coords,
    "LineString": LineString,
    "Polygon": _polygon_from_rings,
    "MultiPoint": MultiPoint,
    "MultiLineString": MultiLineString,
    "MultiPolygon": lambda coords: MultiPolygon(tuple(_polygon_from_rings(p) for p in coords)),
}


def shape(obj: Any) -> Geometry:
    """
    Build a geometry from a GeoJSON-like mapping.

    Args:
        obj: Mapping with "type" and "coordinates" (or "geometries"), a
            GeoJSON Feature, or any object exposing ``__geo_interface__``

    Returns:
        Geometry instance

    Raises:
        InvalidGeometryError: If the type is unknown or coordinates are malformed
    """
    mapping = getattr(obj, "__geo_interface__", obj)
    if not isinstance(mapping, Mapping):
        raise InvalidGeometryError(
            f"Expected a GeoJSON-like mapping, got {type(obj).__name__}"
        )

    geom_type = mapping.get("type")
    if geom_type == "Feature":
        return shape(mapping.get("geometry"))
    if geom_type == "GeometryCollection":
        return GeometryCollection(tuple(shape(g) for g in mapping.get("geometries", ())))

    builder = _GEOJSON_BUILDERS.get(geom_type)
    if builder is None:
        raise InvalidGeometryError(f"Unsupported geometry type: {geom_type!r}")

    coords = mapping.get("coordinates")
    if coords is None:
        raise InvalidGeometryError(f"{geom_type} is missing 'coordinates'")

    try:
        return builder(coords)
    except (TypeError, ValueError) as exc:
        if isinstance(exc, InvalidGeometryError):
            raise
        raise InvalidGeometryError(f"Malformed {geom_type} coordinates: {exc}") from exc


def as_geometry(obj: Any) -> Geometry:
    """Return ``obj`` if it is already one of our geometries, else ``shape(obj)``."""
    if isinstance(obj, GEOMETRY_TYPES):
        return obj
    return shape(obj)


__all__ = [
    "Coord",
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
    "Geometry",
    "GEOMETRY_TYPES",
    "shape",
    "as_geometry",
]
