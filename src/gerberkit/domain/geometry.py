"""Core geometric types for Gerber artwork.

This module defines the geometry kernel shared by every primitive:
- Point: An immutable 2D point in millimeters
- Rect: A minimum bounding box (MBB) that grows by union
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in millimeters
        y: Y coordinate in millimeters
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=data["x"], y=data["y"])


@dataclass
class Rect:
    """An axis-aligned minimum bounding box.

    ``Rect.empty()`` produces the identity element for ``join``: its min is
    +inf and its max is -inf, so the first join simply adopts the other
    rect. Once populated, ``min.x <= max.x`` and ``min.y <= max.y``.

    Attributes:
        min: Lower-left corner
        max: Upper-right corner
    """

    min: Point = field(default_factory=lambda: Point(math.inf, math.inf))
    max: Point = field(default_factory=lambda: Point(-math.inf, -math.inf))

    @classmethod
    def empty(cls) -> "Rect":
        """Create an empty rect that any join will replace."""
        return cls()

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "Rect":
        """Create the bounding box of a set of points.

        Args:
            points: Points to enclose

        Returns:
            Smallest rect containing every point (empty if there are none)
        """
        xs: list[float] = []
        ys: list[float] = []
        for pt in points:
            xs.append(pt.x)
            ys.append(pt.y)
        if not xs:
            return cls.empty()
        return cls(Point(min(xs), min(ys)), Point(max(xs), max(ys)))

    @property
    def is_empty(self) -> bool:
        """True if this rect has never been populated."""
        return self.min.x > self.max.x or self.min.y > self.max.y

    @property
    def width(self) -> float:
        if self.is_empty:
            return 0.0
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        if self.is_empty:
            return 0.0
        return self.max.y - self.min.y

    def copy(self) -> "Rect":
        """Return an independent copy."""
        return Rect(self.min, self.max)

    def join(self, other: "Rect") -> "Rect":
        """Grow this rect in place to the union with ``other``.

        Args:
            other: Rect to merge in (empty rects are ignored)

        Returns:
            This rect, for chaining
        """
        if other.is_empty:
            return self
        if self.is_empty:
            self.min, self.max = other.min, other.max
            return self
        self.min = Point(min(self.min.x, other.min.x), min(self.min.y, other.min.y))
        self.max = Point(max(self.max.x, other.max.x), max(self.max.y, other.max.y))
        return self

    def intersects(self, other: "Rect") -> bool:
        """Check whether two rects overlap.

        Touching edges count as intersecting. Used to cull primitives that
        fall outside a view window.
        """
        if self.is_empty or other.is_empty:
            return False
        return not (
            self.max.x < other.min.x
            or self.min.x > other.max.x
            or self.max.y < other.min.y
            or self.min.y > other.max.y
        )

    def contains(self, other: "Rect") -> bool:
        """Check whether ``other`` lies entirely inside this rect."""
        if other.is_empty:
            return True
        if self.is_empty:
            return False
        return (
            self.min.x <= other.min.x
            and self.min.y <= other.min.y
            and self.max.x >= other.max.x
            and self.max.y >= other.max.y
        )

    def expand(self, amount: float) -> "Rect":
        """Return a new rect grown by ``amount`` on every side."""
        if self.is_empty:
            return Rect.empty()
        return Rect(
            Point(self.min.x - amount, self.min.y - amount),
            Point(self.max.x + amount, self.max.y + amount),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"min": self.min.to_dict(), "max": self.max.to_dict()}
