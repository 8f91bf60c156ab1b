#!/usr/bin/env python3
"""
Benchmark relate on generated geometries.

Usage:
    python scripts/benchmark_relate.py [--cases PATTERN] [--sizes N,...]

Examples:
    python scripts/benchmark_relate.py
    python scripts/benchmark_relate.py --cases "overlapping_*" --sizes 50,200
    python scripts/benchmark_relate.py --repeat 5 --output results.json
"""

from __future__ import annotations

import argparse
import json
import math
import time
from fnmatch import fnmatch
from typing import Any, Callable

import numpy as np

from geo_relate import Geometry, Kernel, LineString, Polygon, relate


def star_polygon(
    n: int, center: tuple[float, float], radius: float, rng: np.random.Generator
) -> Polygon:
    """A simple polygon with n vertices at jittered radii around a center."""
    angles = np.linspace(0.0, 2.0 * math.pi, n, endpoint=False)
    radii = radius * rng.uniform(0.6, 1.0, size=n)
    xs = center[0] + radii * np.cos(angles)
    ys = center[1] + radii * np.sin(angles)
    return Polygon(list(zip(xs.tolist(), ys.tolist())))


def zigzag_line(
    n: int, start: tuple[float, float], length: float, rng: np.random.Generator
) -> LineString:
    xs = np.linspace(start[0], start[0] + length, n)
    ys = start[1] + rng.uniform(-length / 4, length / 4, size=n)
    return LineString(list(zip(xs.tolist(), ys.tolist())))


def build_cases(n: int, seed: int = 42) -> dict[str, tuple[Geometry, Geometry]]:
    rng = np.random.default_rng(seed)
    return {
        "overlapping_polygons": (
            star_polygon(n, (0.0, 0.0), 10.0, rng),
            star_polygon(n, (5.0, 0.0), 10.0, rng),
        ),
        "nested_polygons": (
            star_polygon(n, (0.0, 0.0), 10.0, rng),
            star_polygon(n, (0.0, 0.0), 3.0, rng),
        ),
        "disjoint_polygons": (
            star_polygon(n, (0.0, 0.0), 10.0, rng),
            star_polygon(n, (50.0, 50.0), 10.0, rng),
        ),
        "line_across_polygon": (
            star_polygon(n, (0.0, 0.0), 10.0, rng),
            zigzag_line(n, (-15.0, 0.0), 30.0, rng),
        ),
        "crossing_lines": (
            zigzag_line(n, (-15.0, 0.0), 30.0, rng),
            zigzag_line(n, (-15.0, 1.0), 30.0, rng),
        ),
    }


def benchmark_relate(
    a: Geometry, b: Geometry, repeat: int, **options: Any
) -> dict[str, Any]:
    """
    Time relate on one pair of geometries.

    Returns:
        Dict with the best time over ``repeat`` runs and the matrix
    """
    best = math.inf
    matrix = None
    for _ in range(repeat):
        start = time.perf_counter()
        matrix = relate(a, b, **options)
        best = min(best, time.perf_counter() - start)
    return {"time_seconds": best, "matrix": str(matrix)}


def run_benchmarks(
    case_pattern: str = "*",
    sizes: list[int] | None = None,
    repeat: int = 3,
) -> list[dict]:
    """Run benchmarks on matching cases for each size."""
    sizes = sizes or [50, 200]

    configurations: dict[str, Callable[[], dict[str, Any]]] = {
        "envelope": lambda: {"intersector": "envelope", "kernel": Kernel.ROBUST},
        "simple": lambda: {"intersector": "simple", "kernel": Kernel.ROBUST},
        "env+fast": lambda: {"intersector": "envelope", "kernel": Kernel.SIMPLE},
    }

    results = []

    print(f"\nBenchmarking {len(configurations)} configurations, sizes {sizes}")
    print(f"Repeat: {repeat} (best time reported)")
    print("=" * 80)

    for n in sizes:
        cases = {
            name: pair for name, pair in build_cases(n).items() if fnmatch(name, case_pattern)
        }
        if not cases:
            print(f"No cases matching pattern '{case_pattern}'")
            return []

        for case_name, (a, b) in cases.items():
            print(f"\n{case_name} ({n} vertices)")
            print("-" * 60)
            matrices = set()
            for config_name, make_options in configurations.items():
                result = benchmark_relate(a, b, repeat, **make_options())
                matrices.add(result["matrix"])
                print(f"  {config_name:12s}: {result['time_seconds']:.4f}s  {result['matrix']}")
                results.append({"case": case_name, "size": n, "config": config_name, **result})
            if len(matrices) > 1:
                print(f"  Warning: configurations disagree: {sorted(matrices)}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark the relate engine")
    parser.add_argument("--cases", default="*", help="Case name pattern (e.g., 'overlapping_*')")
    parser.add_argument("--sizes", help="Comma-separated vertex counts (e.g., '50,200')")
    parser.add_argument("--repeat", type=int, default=3, help="Runs per measurement")
    parser.add_argument("--output", help="Output JSON file for results")

    args = parser.parse_args()

    sizes = [int(s) for s in args.sizes.split(",")] if args.sizes else None

    results = run_benchmarks(case_pattern=args.cases, sizes=sizes, repeat=args.repeat)

    if args.output and results:
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        print(f"\nResults saved to {args.output}")


if __name__ == "__main__":
    main()
