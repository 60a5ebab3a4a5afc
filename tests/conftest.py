"""Shared fixtures: small in-memory fonts and a generated TrueType file."""

from collections.abc import Generator
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from gerberkit.core import register_font, unregister_font
from gerberkit.domain import Font, Glyph, PathStep


def square(x0: float, y0: float, x1: float, y1: float) -> list[PathStep]:
    """Closed rectangle outline as absolute path steps."""
    return [
        PathStep("M", (x0, y0)),
        PathStep("L", (x1, y0)),
        PathStep("L", (x1, y1)),
        PathStep("L", (x0, y1)),
        PathStep("Z"),
    ]


def make_test_font(polarity: bool = True) -> Font:
    """A tiny font: "O" is a square ring, "I" a bar, " " is empty.

    Units per em and default advance are both 1000.
    """
    return Font(
        font_id="testsans",
        advance_width=1000.0,
        units_per_em=1000.0,
        ascent=800.0,
        descent=-200.0,
        missing_advance_width=500.0,
        glyphs={
            "O": Glyph(
                advance_width=700.0,
                unicode="O",
                polarity="dc" if polarity else "",
                path_steps=square(0, 0, 600, 700) + square(150, 150, 450, 550),
            ),
            "I": Glyph(
                advance_width=200.0,
                unicode="I",
                polarity="d" if polarity else "",
                path_steps=square(0, 0, 100, 700),
            ),
            " ": Glyph(advance_width=250.0, unicode=" "),
        },
    )


@pytest.fixture
def test_font() -> Font:
    """Test font with precomputed polarity strings."""
    return make_test_font()


@pytest.fixture
def registered_font() -> Generator[Font, None, None]:
    """Test font registered under "testsans" for the duration of a test."""
    font = make_test_font()
    register_font(font)
    yield font
    unregister_font(font.font_id)


def _draw_square(pen: TTGlyphPen, x0: int, y0: int, x1: int, y1: int) -> None:
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()


@pytest.fixture
def ttf_path(tmp_path: Path) -> Path:
    """TrueType font with "O" (ring), "I" (bar) and space."""
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "O", "I", "space"])
    fb.setupCharacterMap({ord("O"): "O", ord("I"): "I", ord(" "): "space"})

    glyphs = {}
    pen = TTGlyphPen(None)
    _draw_square(pen, 50, 0, 450, 700)
    glyphs[".notdef"] = pen.glyph()

    pen = TTGlyphPen(None)
    _draw_square(pen, 0, 0, 600, 700)
    # Inner contour runs the other way.
    pen.moveTo((150, 150))
    pen.lineTo((450, 150))
    pen.lineTo((450, 550))
    pen.lineTo((150, 550))
    pen.closePath()
    glyphs["O"] = pen.glyph()

    pen = TTGlyphPen(None)
    _draw_square(pen, 0, 0, 100, 700)
    glyphs["I"] = pen.glyph()

    glyphs["space"] = TTGlyphPen(None).glyph()

    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics(
        {".notdef": (500, 50), "O": (700, 0), "I": (200, 0), "space": (250, 0)}
    )
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Test Sans", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()

    path = tmp_path / "TestSans-Regular.ttf"
    fb.save(str(path))
    return path


SVG_FONT = """<?xml version="1.0" standalone="no"?>
<svg xmlns="http://www.w3.org/2000/svg">
<defs>
<font id="TestSerif" horiz-adv-x="1000">
  <font-face units-per-em="1000" ascent="800" descent="-200"/>
  <missing-glyph horiz-adv-x="500"/>
  <glyph unicode="O" horiz-adv-x="700"
    d="M0 0L600 0L600 700L0 700Z M150 150L450 150L450 550L150 550Z"/>
  <glyph unicode="I" horiz-adv-x="200" d="M999 999z"
    d-orig="M0 0h100v700h-100z" gerber-lp="d"/>
  <glyph unicode=" " horiz-adv-x="250"/>
  <glyph glyph-name="unmapped" d="M0 0L10 0L10 10Z"/>
</font>
</defs>
</svg>
"""


@pytest.fixture
def svg_font_path(tmp_path: Path) -> Path:
    """SVG webfont file with "O" (no polarity), "I" (d-orig, polarity) and space."""
    path = tmp_path / "TestSerif.svg"
    path.write_text(SVG_FONT, encoding="utf-8")
    return path
