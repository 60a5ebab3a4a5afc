"""RS274X command formatting.

Coordinates use the ``%FSLAX36Y36*%`` format: millimeters as fixed-point
integers with six fractional digits, written with leading zeros to the full
nine digits the format declares.
"""

import math
from collections.abc import Sequence
from typing import Protocol

from gerberkit.domain import Point

SCALE = 1e6
COORD_WIDTH = 9

HEADER = "%FSLAX36Y36*%\n%MOMM*%\n%LPD*%\n"
END_OF_PROGRAM = "M02*\n"

# Built-in thin aperture selected for region fills (Polygon, glyph outlines).
REGION_APERTURE_INDEX = 10
REGION_APERTURE_SIZE = 0.001

REGION_START = "G36*\n"
REGION_END = "G37*\n"
DARK_POLARITY = "%LPD*%\n"
CLEAR_POLARITY = "%LPC*%\n"


class TextSink(Protocol):
    def write(self, s: str, /) -> int: ...


def to_units(value: float) -> int:
    """Convert millimeters to fixed-point integer units (half rounds up)."""
    return int(math.floor(value * SCALE + 0.5))


def coordinate(x: float, y: float, op: int) -> str:
    """Format one coordinate command.

    Args:
        x: X in millimeters
        y: Y in millimeters
        op: 1 to draw (pen down), 2 to move (pen up)

    Returns:
        Line such as ``X010000000Y010000000D02*``
    """
    return f"X{to_units(x):0{COORD_WIDTH}d}Y{to_units(y):0{COORD_WIDTH}d}D0{op}*\n"


def move(w: TextSink, pt: Point) -> None:
    w.write(coordinate(pt.x, pt.y, 2))


def draw(w: TextSink, pt: Point) -> None:
    w.write(coordinate(pt.x, pt.y, 1))


def select_aperture(w: TextSink, index: int) -> None:
    w.write(f"G54D{index}*\n")


def polyline(w: TextSink, points: Sequence[Point]) -> None:
    """Move to the first point and draw through the rest."""
    for i, pt in enumerate(points):
        if i == 0:
            move(w, pt)
        else:
            draw(w, pt)


def region(w: TextSink, points: Sequence[Point]) -> None:
    """Write a filled region, closing it back to the first vertex.

    Selects the built-in region aperture first. Empty point lists write
    nothing.
    """
    if not points:
        return
    select_aperture(w, REGION_APERTURE_INDEX)
    w.write(REGION_START)
    polyline(w, points)
    if to_units(points[-1].x) != to_units(points[0].x) or to_units(points[-1].y) != to_units(
        points[0].y
    ):
        draw(w, points[0])
    w.write(REGION_END)
