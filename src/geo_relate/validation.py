"""
Input validation utilities for the relate engine.

The engine itself never rejects degenerate input: non-finite coordinates and
malformed rings are the caller's responsibility. The functions here let a
caller check those preconditions up front, and validate the keyword options
accepted by ``relate``. Raises descriptive exceptions on invalid input.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Sequence, Union

from .kernels import Kernel

INTERSECTOR_CHOICES = ("simple", "envelope")


class ValidationError(ValueError):
    """Base exception for relate validation errors."""

    pass


class InvalidGeometryError(ValidationError):
    """Raised when a geometry is malformed."""

    pass


class InvalidMatrixError(ValidationError):
    """Raised when a DE-9IM string or pattern is malformed."""

    pass


class InvalidOptionError(ValidationError):
    """Raised when a relate option has an unsupported value."""

    pass


def validate_geometry(geom: Any, strict: bool = True) -> list[str]:
    """
    Check the preconditions ``relate`` assumes but does not verify.

    Works on anything exposing ``__geo_interface__`` (the geometry types of
    this package, shapely geometries) or on a GeoJSON-like mapping.

    Checks:
    - every coordinate is finite
    - every polygon ring is closed
    - every polygon ring has at least 4 coordinates

    Args:
        geom: Geometry, or GeoJSON-like mapping
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of issue descriptions

    Raises:
        InvalidGeometryError: If strict=True and issues are found, or if the
            input has no GeoJSON representation at all
    """
    mapping = getattr(geom, "__geo_interface__", geom)
    if not isinstance(mapping, Mapping) or "type" not in mapping:
        raise InvalidGeometryError(
            f"Expected a geometry or GeoJSON mapping, got {type(geom).__name__}"
        )

    issues: list[str] = []
    _collect_issues(mapping, "geometry", issues)

    if strict and issues:
        msg = "Invalid geometry:\n" + "\n".join(issues)
        raise InvalidGeometryError(msg)

    return issues


def validate_intersector(intersector: str) -> str:
    """
    Validate the edge set intersection strategy name.

    Args:
        intersector: Strategy name

    Returns:
        Validated strategy name

    Raises:
        InvalidOptionError: If the name is not one of INTERSECTOR_CHOICES
    """
    if intersector not in INTERSECTOR_CHOICES:
        raise InvalidOptionError(
            f"intersector must be one of {INTERSECTOR_CHOICES}, got {intersector!r}"
        )
    return intersector


def validate_kernel(kernel: Union[Kernel, str]) -> Kernel:
    """
    Validate an orientation kernel, accepting its name as a string.

    Args:
        kernel: Kernel member, or its value ("simple" or "robust")

    Returns:
        Kernel member

    Raises:
        InvalidOptionError: If the kernel is not recognised
    """
    if isinstance(kernel, Kernel):
        return kernel
    try:
        return Kernel(kernel)
    except ValueError:
        choices = tuple(k.value for k in Kernel)
        raise InvalidOptionError(
            f"kernel must be one of {choices}, got {kernel!r}"
        ) from None


def _collect_issues(mapping: Mapping[str, Any], path: str, issues: list[str]) -> None:
    geom_type = mapping.get("type")

    if geom_type == "GeometryCollection":
        for i, part in enumerate(mapping.get("geometries", ())):
            _collect_issues(part, f"{path}.geometries[{i}]", issues)
        return

    coords = mapping.get("coordinates", ())

    if geom_type == "Point":
        _check_coords([coords] if coords else [], path, issues)
    elif geom_type in ("MultiPoint", "LineString"):
        _check_coords(coords, path, issues)
    elif geom_type == "MultiLineString":
        for i, line in enumerate(coords):
            _check_coords(line, f"{path}[{i}]", issues)
    elif geom_type == "Polygon":
        _check_rings(coords, path, issues)
    elif geom_type == "MultiPolygon":
        for i, rings in enumerate(coords):
            _check_rings(rings, f"{path}[{i}]", issues)
    else:
        issues.append(f"{path}: unsupported geometry type {geom_type!r}")


def _check_rings(rings: Sequence[Any], path: str, issues: list[str]) -> None:
    for i, ring in enumerate(rings):
        ring_path = f"{path} ring {i}"
        _check_coords(ring, ring_path, issues)
        if not ring:
            continue
        if len(ring) < 4:
            issues.append(f"{ring_path}: ring has {len(ring)} coordinates, need at least 4")
        if tuple(ring[0][:2]) != tuple(ring[-1][:2]):
            issues.append(f"{ring_path}: ring is not closed")


def _check_coords(coords: Sequence[Any], path: str, issues: list[str]) -> None:
    for i, coord in enumerate(coords):
        if len(coord) < 2:
            issues.append(f"{path}: coordinate {i} has fewer than 2 values")
            continue
        if not all(math.isfinite(value) for value in coord[:2]):
            issues.append(f"{path}: coordinate {i} is not finite: {tuple(coord)!r}")


__all__ = [
    "INTERSECTOR_CHOICES",
    "ValidationError",
    "InvalidGeometryError",
    "InvalidMatrixError",
    "InvalidOptionError",
    "validate_geometry",
    "validate_intersector",
    "validate_kernel",
]
