"""Font readers for TrueType/OpenType, SVG webfont and compiled JSON fonts.

This module provides the FontReader class for loading TTF/OTF files into
domain Font models, and load_font() which picks the right reader from the
file suffix.
"""

import json
from collections.abc import Iterator
from pathlib import Path

import structlog
from fontTools.ttLib import TTFont, TTLibError

from gerberkit.domain import Font, Glyph
from gerberkit.exceptions import FontFormatError, FontLoadError
from gerberkit.io.converter import fonttools_glyph_to_domain
from gerberkit.io.webfont import read_svg_webfont

logger = structlog.get_logger(__name__)

TRUETYPE_SUFFIXES = (".ttf", ".otf")


class FontReader:
    """Loads TTF/OTF fonts and converts their glyphs to domain models.

    Only glyphs reachable from the font's best unicode cmap are read.
    Sizes given in points refer to the em, so the font's default advance is
    its units per em.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            font = reader.read_font()
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            FontLoadError: If fonttools cannot parse the file
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        try:
            self._font = TTFont(str(self._font_path))
        except TTLibError as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def font_id(self) -> str:
        """Lower-case family name without spaces (file stem as fallback)."""
        font = self._require_font()
        family = None
        if "name" in font:
            family = font["name"].getBestFamilyName()
        if not family:
            family = self._font_path.stem
        return family.replace(" ", "").lower()

    @property
    def units_per_em(self) -> int:
        """Return font's units per em."""
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    def iter_glyphs(self) -> Iterator[Glyph]:
        """Yield a Glyph for every mapped character, in code point order."""
        font = self._require_font()
        cmap = font.getBestCmap() or {}
        glyph_set = font.getGlyphSet()

        for code_point in sorted(cmap):
            yield fonttools_glyph_to_domain(chr(code_point), cmap[code_point], font, glyph_set)

    def read_font(self) -> Font:
        """Convert the loaded font to a domain Font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        units_per_em = float(self.units_per_em)
        ascent, descent = 0.8 * units_per_em, -0.2 * units_per_em
        if "hhea" in font:
            ascent = float(font["hhea"].ascent)  # type: ignore[attr-defined]
            descent = float(font["hhea"].descent)  # type: ignore[attr-defined]

        missing_advance_width = 0.0
        hmtx = font.get("hmtx")
        if hmtx and ".notdef" in hmtx.metrics:
            missing_advance_width = float(hmtx.metrics[".notdef"][0])

        result = Font(
            font_id=self.font_id,
            advance_width=units_per_em,
            units_per_em=units_per_em,
            ascent=ascent,
            descent=descent,
            missing_advance_width=missing_advance_width,
        )
        for glyph in self.iter_glyphs():
            result.glyphs[glyph.unicode] = glyph

        logger.info(
            "Font read",
            path=str(self._font_path),
            font=result.font_id,
            glyphs=len(result.glyphs),
        )
        return result

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()


def read_json_font(path: Path) -> Font:
    """Read a compiled JSON font written by FontWriter.

    Raises:
        FontLoadError: If the file is not valid JSON
        FontFormatError: If required font fields are missing
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise FontLoadError(str(path), f"invalid JSON: {e}") from e

    try:
        return Font.from_dict(data)
    except (KeyError, TypeError) as e:
        raise FontFormatError(str(path), f"missing or invalid field: {e}") from e


def load_font(path: Path) -> Font:
    """Load a font file, choosing the reader from its suffix.

    Supported: ``.svg`` (SVG webfont), ``.ttf``/``.otf`` (via fonttools) and
    ``.json`` (compiled fonts).

    Raises:
        FileNotFoundError: If the file does not exist
        FontFormatError: If the suffix is not supported
        FontLoadError: If the file cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Font file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".svg":
        return read_svg_webfont(path)
    if suffix in TRUETYPE_SUFFIXES:
        with FontReader(path) as reader:
            return reader.read_font()
    if suffix == ".json":
        return read_json_font(path)
    raise FontFormatError(str(path), f"unsupported font file type '{path.suffix}'")
