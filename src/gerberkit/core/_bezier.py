"""Internal Bezier curve sampling helpers.

This is an internal module containing helper functions for the glyph path
interpreter. Not intended for public use.

Curves are flattened by uniform parameter sampling: the segment count is
chosen from the curve's approximate length so every chord is close to the
requested resolution.
"""

import math

from gerberkit.domain import Point

# Samples used to approximate a curve's arc length.
LENGTH_SAMPLES = 16


def cubic_point(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    """Evaluate a cubic Bezier curve at parameter t.

    Args:
        p0: Start point
        p1: First control point
        p2: Second control point
        p3: End point
        t: Curve parameter in [0, 1]

    Returns:
        Point on the curve
    """
    mt = 1.0 - t
    a = mt * mt * mt
    b = 3.0 * mt * mt * t
    c = 3.0 * mt * t * t
    d = t * t * t
    return Point(
        a * p0.x + b * p1.x + c * p2.x + d * p3.x,
        a * p0.y + b * p1.y + c * p2.y + d * p3.y,
    )


def quadratic_point(p0: Point, p1: Point, p2: Point, t: float) -> Point:
    """Evaluate a quadratic Bezier curve at parameter t."""
    mt = 1.0 - t
    a = mt * mt
    b = 2.0 * mt * t
    c = t * t
    return Point(
        a * p0.x + b * p1.x + c * p2.x,
        a * p0.y + b * p1.y + c * p2.y,
    )


def curve_point(points: tuple[Point, ...], t: float) -> Point:
    """Evaluate a quadratic (3 points) or cubic (4 points) curve."""
    if len(points) == 3:
        return quadratic_point(points[0], points[1], points[2], t)
    return cubic_point(points[0], points[1], points[2], points[3], t)


def curve_length(points: tuple[Point, ...], samples: int = LENGTH_SAMPLES) -> float:
    """Approximate the arc length of a curve by summing sampled chords."""
    length = 0.0
    prev = points[0]
    for i in range(1, samples + 1):
        pt = curve_point(points, i / samples)
        length += math.hypot(pt.x - prev.x, pt.y - prev.y)
        prev = pt
    return length


def curve_steps(length: float, resolution: float, min_steps: int, max_steps: int) -> int:
    """Choose how many segments to flatten a curve into.

    Args:
        length: Approximate curve length
        resolution: Target chord length, in the same units as ``length``
        min_steps: Lower bound
        max_steps: Upper bound

    Returns:
        ``round(length / resolution)`` clamped to [min_steps, max_steps]
    """
    steps = int(0.5 + length / resolution)
    return max(min_steps, min(max_steps, steps))


def flatten_curve(
    points: tuple[Point, ...],
    resolution: float,
    min_steps: int,
    max_steps: int,
) -> list[Point]:
    """Flatten a curve into line-segment end points.

    The start point is not included; the last sample is the curve's end
    point.
    """
    steps = curve_steps(curve_length(points), resolution, min_steps, max_steps)
    return [curve_point(points, j / steps) for j in range(1, steps + 1)]
