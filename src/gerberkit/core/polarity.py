"""Offline polarity precomputation for glyph subpaths.

Gerber has no winding rule: a hole is cut by filling it with clear
polarity after the surrounding shape was filled dark. Each glyph therefore
carries a polarity string with one mark per subpath, "d" or "c".

The marks are found by painting the glyph on a monochrome canvas, subpath
by subpath. Before painting a subpath, the pixel at its start point is
sampled: an unpainted pixel means the subpath is solid, a painted one means
it is a hole in something painted earlier. Holes are painted back with the
background color so later samples stay consistent.

The result is an approximation that relies on fonts having properly nested,
non-touching subpaths. An even-odd nesting test with exact point-in-polygon
checks is available as a cross-check; the raster result stays
authoritative.
"""

import math
import time
from collections.abc import Callable, Iterable

import structlog
from PIL import Image, ImageDraw

from gerberkit.config import PolarityConfig, TessellationConfig
from gerberkit.core.path import Subpath, iter_subpaths
from gerberkit.domain import CLEAR, DARK, Font, Glyph, Point, Rect
from gerberkit.utils import CompileLogger, CompileStats

logger = structlog.get_logger(__name__)

BACKGROUND = 0
FOREGROUND = 1


def needs_polarity(glyph: Glyph) -> bool:
    """Check whether a glyph lacks a usable polarity string.

    A polarity string is usable when it has a mark for every subpath.
    """
    if glyph.is_empty():
        return False
    return len(glyph.polarity) < glyph.subpath_count()


def _flatten(glyph: Glyph, resolution: float, tessellation: TessellationConfig) -> list[Subpath]:
    return list(
        iter_subpaths(
            glyph.path_steps,
            resolution,
            tessellation.min_steps,
            tessellation.max_steps,
        )
    )


def _blank_marks(glyph: Glyph, subpaths: list[Subpath]) -> list[str]:
    # One mark per started subpath; dropped degenerate ones stay dark.
    count = max([glyph.subpath_count()] + [sp.index + 1 for sp in subpaths])
    return [DARK] * count


def compute_polarity(
    glyph: Glyph,
    config: PolarityConfig | None = None,
    tessellation: TessellationConfig | None = None,
) -> str:
    """Rasterize a glyph to find the polarity of each subpath.

    Args:
        glyph: Glyph to analyze
        config: Canvas settings
        tessellation: Curve step bounds (the resolution is one pixel)

    Returns:
        Polarity string, one "d"/"c" per subpath, indexed by Subpath.index
    """
    config = config or PolarityConfig()
    tessellation = tessellation or TessellationConfig()

    # Bounds first, from a coarse flattening, to size the canvas.
    coarse = _flatten(glyph, 1.0, tessellation)
    if not coarse:
        return ""
    bounds = Rect.from_points(pt for sp in coarse for pt in sp.points)
    extent = max(bounds.width, bounds.height) or 1.0
    usable = config.canvas_size - 2 * config.margin
    px_per_unit = usable / extent

    subpaths = _flatten(glyph, 1.0 / px_per_unit, tessellation)
    width = int(math.ceil(bounds.width * px_per_unit)) + 2 * config.margin + 1
    height = int(math.ceil(bounds.height * px_per_unit)) + 2 * config.margin + 1

    def to_pixel(pt: Point) -> tuple[float, float]:
        # Canvas rows grow downward.
        return (
            (pt.x - bounds.min.x) * px_per_unit + config.margin,
            (bounds.max.y - pt.y) * px_per_unit + config.margin,
        )

    image = Image.new("1", (width, height), BACKGROUND)
    draw = ImageDraw.Draw(image)

    marks = _blank_marks(glyph, subpaths)
    for i, subpath in enumerate(subpaths):
        pixels = [to_pixel(pt) for pt in subpath.points]
        if i == 0:
            mark, ink = DARK, FOREGROUND
        else:
            sx = min(width - 1, max(0, int(0.5 + pixels[0][0])))
            sy = min(height - 1, max(0, int(0.5 + pixels[0][1])))
            if image.getpixel((sx, sy)) == BACKGROUND:
                mark, ink = DARK, FOREGROUND
            else:
                mark, ink = CLEAR, BACKGROUND
        draw.polygon(pixels, fill=ink)
        marks[subpath.index] = mark

    return "".join(marks)


def _point_in_polygon(pt: Point, polygon: list[Point]) -> bool:
    # Even-odd ray casting to the right of pt.
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        if (yi > pt.y) != (yj > pt.y) and pt.x < (xj - xi) * (pt.y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def analytic_polarity(glyph: Glyph, tessellation: TessellationConfig | None = None) -> str:
    """Polarity from exact even-odd nesting of subpath start points.

    A subpath is clear when its start point lies inside an odd number of
    the subpaths before it.
    """
    tessellation = tessellation or TessellationConfig()
    subpaths = _flatten(glyph, 1.0, tessellation)
    marks = _blank_marks(glyph, subpaths)
    for i, subpath in enumerate(subpaths):
        depth = sum(
            1 for earlier in subpaths[:i] if _point_in_polygon(subpath.start, earlier.points)
        )
        marks[subpath.index] = CLEAR if depth % 2 else DARK
    return "".join(marks)


def fill_polarity(
    font: Font,
    config: PolarityConfig | None = None,
    tessellation: TessellationConfig | None = None,
    compile_logger: CompileLogger | None = None,
    chars: Iterable[str] | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> CompileStats:
    """Compute polarity strings for every glyph of a font that needs one.

    Glyphs are updated in place.

    Args:
        font: Font to update
        config: Canvas settings
        tessellation: Curve step bounds
        compile_logger: Progress logger (a new one if None)
        chars: Only handle glyphs for these characters (all if None)
        progress_callback: Called with (completed, total) after each glyph

    Returns:
        Statistics of the run
    """
    config = config or PolarityConfig()
    compile_logger = compile_logger or CompileLogger(logger)
    stats = compile_logger.stats
    stats.start_time = time.time()

    if chars is None:
        keys = list(font.glyphs)
    else:
        keys = [key for key in dict.fromkeys(chars) if key in font.glyphs]

    for completed, key in enumerate(keys, start=1):
        glyph = font.glyphs[key]
        if glyph.is_empty():
            pass
        elif not needs_polarity(glyph):
            compile_logger.log_polarity_kept(key, glyph.polarity)
        else:
            start = time.time()
            polarity = compute_polarity(glyph, config, tessellation)
            if config.cross_check:
                analytic = analytic_polarity(glyph, tessellation)
                if analytic != polarity:
                    compile_logger.log_polarity_mismatch(key, polarity, analytic)
            glyph.polarity = polarity
            compile_logger.log_polarity_computed(key, polarity, (time.time() - start) * 1000)

        if progress_callback is not None:
            progress_callback(completed, len(keys))

    stats.end_time = time.time()
    logger.info(
        "Polarity filled",
        font=font.font_id,
        glyphs=stats.glyph_count,
        computed=stats.computed_count,
        mismatches=stats.mismatch_count,
    )
    return stats
