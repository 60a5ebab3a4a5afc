"""Core Gerber generation for gerberkit.

This module contains the building blocks of a PCB design:

- Primitives (arcs, circles, lines, filled polygons, text)
- Aperture tables and per-layer Gerber serialization
- The Design container with its file/zip output and bounding box
- SVG path interpretation and curve flattening for glyph outlines
- Offline glyph polarity precomputation

Key classes:
- Design: All layers of one board
- Layer: Primitives written to one Gerber file
- Arc, Circle, Line, Polygon, Text: Drawable primitives
- ApertureTable: Per-layer aperture declarations
- PathInterpreter: Flattens glyph path steps into subpaths

Key functions:
- register_font / get_font: Font registry used by Text
- render_glyph: Write a glyph as region fills with polarity switching
- compute_polarity / fill_polarity: Find dark/clear marks per subpath
"""

from gerberkit.core.aperture import Aperture, ApertureTable, Shape
from gerberkit.core.design import Design
from gerberkit.core.fonts import (
    available_fonts,
    get_font,
    load_fonts_dir,
    register_font,
    unregister_font,
)
from gerberkit.core.layer import Layer
from gerberkit.core.path import PathInterpreter, Subpath, iter_subpaths
from gerberkit.core.polarity import (
    analytic_polarity,
    compute_polarity,
    fill_polarity,
    needs_polarity,
)
from gerberkit.core.primitives import Arc, Circle, Line, Polygon, Primitive
from gerberkit.core.text import (
    BOTTOM_CENTER,
    BOTTOM_LEFT,
    BOTTOM_RIGHT,
    CENTER,
    CENTER_LEFT,
    CENTER_RIGHT,
    TOP_CENTER,
    TOP_LEFT,
    TOP_RIGHT,
    Text,
    TextAlign,
    XAlign,
    YAlign,
    render_glyph,
)

__all__ = [
    # Alignment presets
    "BOTTOM_CENTER",
    "BOTTOM_LEFT",
    "BOTTOM_RIGHT",
    "CENTER",
    "CENTER_LEFT",
    "CENTER_RIGHT",
    "TOP_CENTER",
    "TOP_LEFT",
    "TOP_RIGHT",
    # Apertures
    "Aperture",
    "ApertureTable",
    # Primitives
    "Arc",
    "Circle",
    # Containers
    "Design",
    "Layer",
    "Line",
    # Path interpretation
    "PathInterpreter",
    "Polygon",
    "Primitive",
    "Shape",
    "Subpath",
    "Text",
    "TextAlign",
    "XAlign",
    "YAlign",
    # Polarity
    "analytic_polarity",
    # Font registry
    "available_fonts",
    "compute_polarity",
    "fill_polarity",
    "get_font",
    "iter_subpaths",
    "load_fonts_dir",
    "needs_polarity",
    "register_font",
    "render_glyph",
    "unregister_font",
]
