"""Font writer for compiled JSON fonts.

A compiled font is the domain Font serialized to JSON, with the polarity
string of every glyph filled in so that rendering never has to rasterize.
"""

import json
from pathlib import Path

import structlog

from gerberkit.domain import Font

logger = structlog.get_logger(__name__)


class FontWriter:
    """Writes compiled fonts as JSON.

    Example:
        writer = FontWriter(font, Path("fonts"))
        writer.save()   # fonts/freeserif.json
    """

    def __init__(self, font: Font, output_dir: Path) -> None:
        """Initialize the font writer.

        Args:
            font: Font to write
            output_dir: Directory receiving <font_id>.json
        """
        self._font = font
        self._output_dir = output_dir

    @property
    def output_path(self) -> Path:
        return self.get_output_path(self._output_dir, self._font.font_id)

    def save(self) -> Path:
        """Write the font file.

        Returns:
            Path of the written file

        Raises:
            OSError: If the file cannot be written
        """
        path = self.output_path
        path.write_text(json.dumps(self._font.to_dict(), indent=1), encoding="utf-8")
        logger.info("Compiled font written", path=str(path), glyphs=len(self._font.glyphs))
        return path

    @staticmethod
    def get_output_path(output_dir: Path, font_id: str) -> Path:
        """Path of the compiled file for a font id: <dir>/<font_id>.json."""
        return output_dir / f"{font_id.lower()}.json"
