"""
Named spatial predicates.

Each predicate computes the full intersection matrix with ``relate`` and
tests it. To evaluate several predicates for the same pair, call ``relate``
once and use the matrix methods instead.
"""

from __future__ import annotations

from typing import Any

from .relate import relate


def intersects(a: Any, b: Any, **options: Any) -> bool:
    """True if the geometries share at least one point."""
    return relate(a, b, **options).is_intersects()


def disjoint(a: Any, b: Any, **options: Any) -> bool:
    """True if the geometries share no point."""
    return relate(a, b, **options).is_disjoint()


def contains(a: Any, b: Any, **options: Any) -> bool:
    """True if no point of b lies outside a and their interiors meet."""
    return relate(a, b, **options).is_contains()


def within(a: Any, b: Any, **options: Any) -> bool:
    return relate(a, b, **options).is_within()


def covers(a: Any, b: Any, **options: Any) -> bool:
    """True if no point of b lies outside a."""
    return relate(a, b, **options).is_covers()


def covered_by(a: Any, b: Any, **options: Any) -> bool:
    return relate(a, b, **options).is_covered_by()


def touches(a: Any, b: Any, **options: Any) -> bool:
    """True if the geometries meet only on their boundaries."""
    return relate(a, b, **options).is_touches()


def crosses(a: Any, b: Any, **options: Any) -> bool:
    return relate(a, b, **options).is_crosses()


def overlaps(a: Any, b: Any, **options: Any) -> bool:
    return relate(a, b, **options).is_overlaps()


def equals(a: Any, b: Any, **options: Any) -> bool:
    """True if the geometries are topologically equal."""
    return relate(a, b, **options).is_equal_topo()


__all__ = [
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
]
