"""SVG webfont reader.

An SVG webfont keeps every glyph outline as SVG path data inside a
``<font>`` element::

    <svg><defs><font id="FreeSerif" horiz-adv-x="256">
      <font-face units-per-em="1000" ascent="800" descent="-200"/>
      <missing-glyph horiz-adv-x="500"/>
      <glyph unicode="O" horiz-adv-x="722" d="M..." gerber-lp="dc"/>
    </font></defs></svg>

``d-orig`` (the outline before a font editor touched it) takes precedence
over ``d`` when present. ``gerber-lp`` carries a precomputed polarity
string.
"""

import re
import xml.etree.ElementTree as ET
from pathlib import Path

import structlog

from gerberkit.domain import Font, Glyph, PathStep
from gerberkit.exceptions import FontFormatError, FontLoadError, PathCommandError

logger = structlog.get_logger(__name__)

SUPPORTED_COMMANDS = "MmLlHhVvCcSsQqTtZz"

_TOKEN_RE = re.compile(
    r"[\s,]*(?:(?P<cmd>[A-Za-z])|(?P<num>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?))"
)


def parse_path_data(d: str) -> list[PathStep]:
    """Split SVG path data into path steps.

    Numbers following a command letter become its parameters, so
    "M10 20 30 40" is a single moveto step with four parameters.

    Args:
        d: Path data string

    Returns:
        Path steps in order

    Raises:
        PathCommandError: For elliptical arcs, unknown letters, numbers with
            no command to attach to, or unparsable text
    """
    steps: list[PathStep] = []
    command = ""
    params: list[float] = []

    def flush() -> None:
        if command:
            steps.append(PathStep(command, tuple(params)))

    pos = 0
    end = len(d.rstrip(" \t\r\n,"))
    while pos < end:
        m = _TOKEN_RE.match(d, pos)
        if m is None:
            raise PathCommandError(d[pos : pos + 12], "unparsable path data")
        pos = m.end()

        letter = m.group("cmd")
        if letter is not None:
            if letter in "Aa":
                raise PathCommandError(letter, "elliptical arcs are not supported")
            if letter not in SUPPORTED_COMMANDS:
                raise PathCommandError(letter, "unknown path command")
            flush()
            command, params = letter, []
            continue

        if not command or command in "Zz":
            raise PathCommandError(m.group("num"), "number without a command")
        params.append(float(m.group("num")))

    flush()
    return steps


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _float_attr(element: ET.Element | None, name: str, default: float) -> float:
    if element is None:
        return default
    value = element.get(name)
    if value is None or value == "":
        return default
    return float(value)


def read_svg_webfont(path: Path) -> Font:
    """Read the first ``<font>`` of an SVG webfont file.

    Glyphs without a ``unicode`` attribute are skipped: they cannot be
    reached from text.

    Args:
        path: SVG file

    Returns:
        Font with a lower-cased id

    Raises:
        FontLoadError: If the file is not well-formed XML or a glyph's
            outline cannot be parsed
        FontFormatError: If the file contains no ``<font>`` element
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise FontLoadError(str(path), f"invalid XML: {e}") from e

    font_el = next((el for el in root.iter() if _local_name(el.tag) == "font"), None)
    if font_el is None:
        raise FontFormatError(str(path), "no <font> element")

    children = {_local_name(el.tag): el for el in font_el if _local_name(el.tag) != "glyph"}
    face = children.get("font-face")
    missing = children.get("missing-glyph")

    font_id = (font_el.get("id") or path.stem).lower()
    font = Font(
        font_id=font_id,
        advance_width=_float_attr(font_el, "horiz-adv-x", 0.0),
        units_per_em=_float_attr(face, "units-per-em", 1000.0),
        ascent=_float_attr(face, "ascent", 800.0),
        descent=_float_attr(face, "descent", -200.0),
        missing_advance_width=_float_attr(missing, "horiz-adv-x", 0.0),
    )

    for glyph_el in font_el:
        if _local_name(glyph_el.tag) != "glyph":
            continue
        unicode = glyph_el.get("unicode")
        if not unicode:
            continue

        d = glyph_el.get("d", "")
        d_orig = glyph_el.get("d-orig")
        if d_orig:
            logger.debug("Using d-orig outline", font=font_id, glyph=unicode)
            d = d_orig

        try:
            steps = parse_path_data(d)
        except PathCommandError as e:
            raise FontLoadError(str(path), f"glyph {unicode!r}: {e}") from e

        font.glyphs[unicode] = Glyph(
            advance_width=_float_attr(glyph_el, "horiz-adv-x", 0.0),
            unicode=unicode,
            polarity=glyph_el.get("gerber-lp", ""),
            path_steps=steps,
        )

    logger.info("SVG webfont read", path=str(path), font=font_id, glyphs=len(font.glyphs))
    return font
