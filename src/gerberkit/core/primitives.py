"""Gerber drawing primitives.

Every primitive knows three things:
- how to write its draw commands (write_gerber)
- which aperture it needs selected beforehand (aperture), or None if it
  fills regions and selects the built-in aperture itself
- its minimum bounding box (mbb), computed once and cached

All dimensions are in millimeters. Primitives are write-once: changing one
after its bounding box has been queried is not supported.
"""

import math
from abc import ABC, abstractmethod

from gerberkit.core import rs274x
from gerberkit.core.aperture import Aperture, Shape
from gerberkit.core.rs274x import TextSink
from gerberkit.domain import Point, Rect


class Primitive(ABC):
    """Base class for everything that can be added to a Layer."""

    _mbb: Rect | None = None

    @abstractmethod
    def write_gerber(self, w: TextSink, aperture_index: int) -> None:
        """Write the primitive's draw commands.

        Args:
            w: Output stream
            aperture_index: D-code selected for this primitive by the layer
        """

    @abstractmethod
    def aperture(self) -> Aperture | None:
        """Aperture this primitive is drawn with, or None for region fills."""

    @abstractmethod
    def _compute_mbb(self) -> Rect:
        """Compute the bounding box (called at most once)."""

    def mbb(self) -> Rect:
        """Minimum bounding box of the primitive.

        Returns:
            A copy of the cached bounding box
        """
        if self._mbb is None:
            self._mbb = self._compute_mbb()
        return self._mbb.copy()


class Arc(Primitive):
    """An elliptical arc stroked with an aperture.

    The arc is drawn as straight chords. Each chord covers at most about
    0.1 mm of arc, and the bounding box is taken from the same chords that
    are written.
    """

    def __init__(
        self,
        x: float,
        y: float,
        radius: float,
        shape: Shape,
        x_scale: float,
        y_scale: float,
        start_angle: float,
        end_angle: float,
        thickness: float,
    ) -> None:
        """Create an arc.

        Args:
            x: Center X
            y: Center Y
            radius: Radius before scaling
            shape: Aperture shape
            x_scale: Horizontal scale of the radius
            y_scale: Vertical scale of the radius
            start_angle: Start angle in degrees
            end_angle: End angle in degrees
            thickness: Aperture size
        """
        if start_angle > end_angle:
            start_angle, end_angle = end_angle, start_angle
        self.center = Point(x, y)
        self.radius = radius
        self.shape = shape
        self.x_scale = x_scale
        self.y_scale = y_scale
        self.start_angle = math.radians(start_angle)
        self.end_angle = math.radians(end_angle)
        self.thickness = thickness
        self._points: list[Point] | None = None

    @property
    def segments(self) -> int:
        span = self.end_angle - self.start_angle
        return int(math.floor(0.5 + span * self.radius * 10)) + 1

    def points(self) -> list[Point]:
        """Chord end points of the flattened arc, start to end."""
        if self._points is None:
            segments = self.segments
            span = self.end_angle - self.start_angle
            pts = []
            for i in range(segments + 1):
                angle = self.start_angle + span * i / segments
                pts.append(
                    Point(
                        self.center.x + self.radius * self.x_scale * math.cos(angle),
                        self.center.y + self.radius * self.y_scale * math.sin(angle),
                    )
                )
            self._points = pts
        return self._points

    def write_gerber(self, w: TextSink, aperture_index: int) -> None:
        rs274x.polyline(w, self.points())

    def aperture(self) -> Aperture:
        return Aperture(self.shape, self.thickness)

    def _compute_mbb(self) -> Rect:
        return Rect.from_points(self.points())


class Circle(Primitive):
    """A round pad, flashed as a zero-length stroke of a circular aperture."""

    def __init__(self, x: float, y: float, thickness: float) -> None:
        self.center = Point(x, y)
        self.thickness = thickness

    def write_gerber(self, w: TextSink, aperture_index: int) -> None:
        rs274x.move(w, self.center)
        rs274x.draw(w, self.center)

    def aperture(self) -> Aperture:
        return Aperture(Shape.CIRCLE, self.thickness)

    def _compute_mbb(self) -> Rect:
        r = 0.5 * self.thickness
        return Rect(
            Point(self.center.x - r, self.center.y - r),
            Point(self.center.x + r, self.center.y + r),
        )


class Line(Primitive):
    """A straight trace between two points."""

    def __init__(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        shape: Shape,
        thickness: float,
    ) -> None:
        self.p1 = Point(x1, y1)
        self.p2 = Point(x2, y2)
        self.shape = shape
        self.thickness = thickness

    def write_gerber(self, w: TextSink, aperture_index: int) -> None:
        rs274x.move(w, self.p1)
        rs274x.draw(w, self.p2)

    def aperture(self) -> Aperture:
        return Aperture(self.shape, self.thickness)

    def _compute_mbb(self) -> Rect:
        # The stroke cap is approximated by half the aperture on every side.
        return Rect.from_points([self.p1, self.p2]).expand(0.5 * self.thickness)


class Polygon(Primitive):
    """A filled polygon written as a Gerber region.

    The vertex list is closed implicitly when written.
    """

    def __init__(self, x: float, y: float, points: list[Point]) -> None:
        """Create a polygon.

        Args:
            x: X offset added to every vertex
            y: Y offset added to every vertex
            points: Vertices in order
        """
        self.offset = Point(x, y)
        self.points = [Point(pt.x + x, pt.y + y) for pt in points]

    def write_gerber(self, w: TextSink, aperture_index: int) -> None:
        rs274x.region(w, self.points)

    def aperture(self) -> None:
        return None

    def _compute_mbb(self) -> Rect:
        return Rect.from_points(self.points)
