"""Silkscreen text rendered from font outlines.

A Text primitive lays out a string with a registered font, flattens every
glyph outline into subpaths and writes each subpath as a Gerber region.
Holes (the inside of an "O") are cut with clear polarity according to the
glyph's precomputed polarity string.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

import structlog

from gerberkit.config import TessellationConfig
from gerberkit.core import rs274x
from gerberkit.core.fonts import get_font
from gerberkit.core.path import Subpath, iter_subpaths
from gerberkit.core.primitives import Primitive
from gerberkit.core.rs274x import TextSink
from gerberkit.domain import CLEAR, DARK, Font, Glyph, Point, Rect

logger = structlog.get_logger(__name__)

MM_PER_PT = 25.4 / 72.0


class XAlign(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class YAlign(Enum):
    BOTTOM = "bottom"
    CENTER = "center"
    TOP = "top"


@dataclass(frozen=True)
class TextAlign:
    """Where the text's bounding box sits relative to its anchor point."""

    x_align: XAlign = XAlign.LEFT
    y_align: YAlign = YAlign.BOTTOM


BOTTOM_LEFT = TextAlign(XAlign.LEFT, YAlign.BOTTOM)
BOTTOM_CENTER = TextAlign(XAlign.CENTER, YAlign.BOTTOM)
BOTTOM_RIGHT = TextAlign(XAlign.RIGHT, YAlign.BOTTOM)
CENTER_LEFT = TextAlign(XAlign.LEFT, YAlign.CENTER)
CENTER = TextAlign(XAlign.CENTER, YAlign.CENTER)
CENTER_RIGHT = TextAlign(XAlign.RIGHT, YAlign.CENTER)
TOP_LEFT = TextAlign(XAlign.LEFT, YAlign.TOP)
TOP_CENTER = TextAlign(XAlign.CENTER, YAlign.TOP)
TOP_RIGHT = TextAlign(XAlign.RIGHT, YAlign.TOP)

Transform = Callable[[Point], Point]


def render_glyph(
    w: TextSink,
    glyph: Glyph,
    subpaths: Iterable[Subpath],
    transform: Transform,
) -> None:
    """Write a glyph's subpaths as region fills.

    The polarity string picks dark or clear fill per subpath. A polarity
    directive is written only when the polarity changes, and dark polarity
    is restored once the glyph is done.

    Args:
        w: Output stream
        glyph: Glyph being rendered (for its polarity string)
        subpaths: Flattened outline in font units
        transform: Maps font units to board millimeters
    """
    current = DARK
    for subpath in subpaths:
        if glyph.polarity and subpath.index < len(glyph.polarity):
            polarity = CLEAR if glyph.polarity[subpath.index] == CLEAR else DARK
            if polarity != current:
                w.write(rs274x.CLEAR_POLARITY if polarity == CLEAR else rs274x.DARK_POLARITY)
                current = polarity
        rs274x.region(w, [transform(pt) for pt in subpath.points])

    if current != DARK:
        w.write(rs274x.DARK_POLARITY)


@dataclass
class _Placement:
    glyph: Glyph
    x: float
    y: float


class Text(Primitive):
    """Text drawn with filled glyph outlines.

    Text needs no aperture of its own: every glyph subpath is a region fill
    that selects the built-in aperture.

    Example:
        text = Text(10, 5, 1.0, "REV A", "freeserif", size_pts=10)
        layer.add(text)
    """

    def __init__(
        self,
        x: float,
        y: float,
        x_scale: float,
        text: str,
        font_id: str,
        size_pts: float = 12.0,
        align: TextAlign = BOTTOM_LEFT,
        config: TessellationConfig | None = None,
    ) -> None:
        """Create a text primitive.

        Args:
            x: Anchor X in millimeters
            y: Anchor Y in millimeters
            x_scale: 1.0 for top silkscreen, -1.0 to mirror for the bottom
            text: String to render; "\\n" starts a new line
            font_id: Id of a registered font
            size_pts: Font size in points
            align: Placement of the text bounding box relative to (x, y)
            config: Curve flattening settings

        Raises:
            FontNotFoundError: If the font is not registered
        """
        self.anchor = Point(x, y)
        self.x_scale = x_scale
        self.text = text
        self.font: Font = get_font(font_id)
        self.size_pts = size_pts
        self.align = align
        self.config = config or TessellationConfig()
        em = self.font.advance_width or self.font.units_per_em
        # Millimeters per font unit.
        self.scale = size_pts * MM_PER_PT / em
        self._placements: list[_Placement] | None = None
        self._outlines: dict[int, list[Subpath]] = {}
        self._offset: Point | None = None

    def _layout(self) -> list[_Placement]:
        """Pen position (mm, relative to the unaligned origin) of each glyph."""
        if self._placements is not None:
            return self._placements

        font = self.font
        advance = font.advance_width * self.scale
        x = y = 0.0
        placements: list[_Placement] = []
        for char in self.text:
            if char == "\n":
                x, y = 0.0, y - font.line_height * self.scale
                continue
            if char == "\t":
                x += 2.0 * self.x_scale * advance
                continue
            glyph = font.get_glyph(char)
            if glyph is None:
                logger.warning("Missing glyph, skipping", char=char, font=font.font_id)
                x += self.x_scale * advance
                continue
            placements.append(_Placement(glyph, x, y))
            dx = glyph.advance_width or font.advance_width
            x += self.x_scale * dx * self.scale

        self._placements = placements
        return placements

    def _subpaths(self, glyph: Glyph) -> list[Subpath]:
        key = id(glyph)
        if key not in self._outlines:
            resolution = self.config.resolution_mm / self.scale
            self._outlines[key] = list(
                iter_subpaths(
                    glyph.path_steps,
                    resolution,
                    self.config.min_steps,
                    self.config.max_steps,
                )
            )
        return self._outlines[key]

    def _transform(self, placement: _Placement, offset: Point) -> Transform:
        ox = offset.x + placement.x
        oy = offset.y + placement.y
        sx = self.x_scale * self.scale
        sy = self.scale

        def transform(pt: Point) -> Point:
            return Point(ox + sx * pt.x, oy + sy * pt.y)

        return transform

    def _outline_mbb(self, offset: Point) -> Rect:
        mbb = Rect.empty()
        for placement in self._layout():
            transform = self._transform(placement, offset)
            for subpath in self._subpaths(placement.glyph):
                mbb.join(Rect.from_points(transform(pt) for pt in subpath.points))
        return mbb

    def offset(self) -> Point:
        """Origin of the first glyph after alignment is applied."""
        if self._offset is not None:
            return self._offset

        mbb = self._outline_mbb(Point(0.0, 0.0))
        if mbb.is_empty:
            self._offset = self.anchor
            return self._offset

        if self.align.x_align is XAlign.LEFT:
            dx = -mbb.min.x
        elif self.align.x_align is XAlign.CENTER:
            dx = -0.5 * (mbb.min.x + mbb.max.x)
        else:
            dx = -mbb.max.x

        if self.align.y_align is YAlign.BOTTOM:
            dy = -mbb.min.y
        elif self.align.y_align is YAlign.CENTER:
            dy = -0.5 * (mbb.min.y + mbb.max.y)
        else:
            dy = -mbb.max.y

        self._offset = Point(self.anchor.x + dx, self.anchor.y + dy)
        return self._offset

    def width(self) -> float:
        """Width of the rendered outlines in millimeters."""
        return self.mbb().width

    def height(self) -> float:
        """Height of the rendered outlines in millimeters."""
        return self.mbb().height

    def write_gerber(self, w: TextSink, aperture_index: int) -> None:
        offset = self.offset()
        for placement in self._layout():
            render_glyph(
                w,
                placement.glyph,
                self._subpaths(placement.glyph),
                self._transform(placement, offset),
            )

    def aperture(self) -> None:
        return None

    def _compute_mbb(self) -> Rect:
        return self._outline_mbb(self.offset())
