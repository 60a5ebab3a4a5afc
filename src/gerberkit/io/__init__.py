"""Font I/O layer for gerberkit.

This module reads fonts into domain models and writes compiled fonts.

Key responsibilities:
- Parse SVG path data and SVG webfonts
- Load TTF/OTF fonts through fonttools pens
- Read and write compiled JSON fonts
- Pick a reader from the file suffix

Key classes:
- FontReader: Load TTF/OTF fonts
- FontWriter: Save compiled JSON fonts
"""

from gerberkit.io.converter import PathStepPen
from gerberkit.io.reader import FontReader, load_font, read_json_font
from gerberkit.io.webfont import parse_path_data, read_svg_webfont
from gerberkit.io.writer import FontWriter

__all__ = [
    "FontReader",
    "FontWriter",
    "PathStepPen",
    "load_font",
    "parse_path_data",
    "read_json_font",
    "read_svg_webfont",
]
