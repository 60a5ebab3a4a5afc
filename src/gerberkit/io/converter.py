"""Converters from fonttools glyph outlines to domain path steps.

fonttools draws outlines through a pen protocol (moveTo, lineTo, curveTo,
qCurveTo, closePath). PathStepPen records those calls as absolute SVG-style
path steps, so TrueType and OpenType glyphs flow through the same path
interpreter as SVG webfont glyphs.
"""

from typing import Any

from fontTools.pens.basePen import BasePen
from fontTools.ttLib import TTFont

from gerberkit.domain import Glyph, PathStep


class PathStepPen(BasePen):
    """Pen that records an outline as absolute path steps.

    BasePen splits TrueType runs of off-curve points into single quadratic
    segments and draws components through the glyph set, so only the
    one-segment callbacks are needed here.

    Example:
        pen = PathStepPen(glyph_set)
        glyph_set["O"].draw(pen)
        steps = pen.steps
    """

    def __init__(self, glyph_set: Any = None) -> None:
        super().__init__(glyph_set)
        self.steps: list[PathStep] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.steps.append(PathStep("M", (float(pt[0]), float(pt[1]))))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.steps.append(PathStep("L", (float(pt[0]), float(pt[1]))))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.steps.append(PathStep("C", tuple(float(v) for pt in (pt1, pt2, pt3) for v in pt)))

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self.steps.append(PathStep("Q", tuple(float(v) for pt in (pt1, pt2) for v in pt)))

    def _closePath(self) -> None:
        self.steps.append(PathStep("Z"))

    def _endPath(self) -> None:
        # Open contours stay open; the path interpreter flushes them.
        pass


def fonttools_glyph_to_domain(
    char: str,
    glyph_name: str,
    font: TTFont,
    glyph_set: Any | None = None,
) -> Glyph:
    """Convert a fonttools glyph to a domain Glyph.

    Args:
        char: Character the glyph renders
        glyph_name: Name of the glyph in the font
        font: The TTFont object for metrics
        glyph_set: Glyph set to draw from (font.getGlyphSet() if None)

    Returns:
        Domain Glyph with an empty polarity string
    """
    glyph_set = glyph_set if glyph_set is not None else font.getGlyphSet()
    pen = PathStepPen(glyph_set)
    glyph_set[glyph_name].draw(pen)

    advance_width = 0
    hmtx = font.get("hmtx")
    if hmtx and glyph_name in hmtx.metrics:
        advance_width, _lsb = hmtx.metrics[glyph_name]

    return Glyph(advance_width=float(advance_width), unicode=char, path_steps=pen.steps)
