"""Domain models for gerberkit.

This module contains the value types shared by the Gerber writer and the
glyph pipeline:

- Point: A 2D point in millimeters
- Rect: A minimum bounding box
- PathStep: One SVG-style outline command
- Glyph: A character outline with its polarity string
- Font: A set of glyphs keyed by unicode string
"""

from gerberkit.domain.font import CLEAR, DARK, Font, Glyph, PathStep
from gerberkit.domain.geometry import Point, Rect

__all__: list[str] = [
    # Polarity marks
    "CLEAR",
    "DARK",
    # Geometry
    "Point",
    "Rect",
    # Fonts
    "Font",
    "Glyph",
    "PathStep",
]
