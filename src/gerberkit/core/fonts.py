"""Registry of fonts available to Text primitives.

Fonts are registered by id (lower-cased) at startup, either directly or by
loading a directory of compiled JSON font files.
"""

import threading
from pathlib import Path

import structlog

from gerberkit.domain import Font
from gerberkit.exceptions import FontNotFoundError

logger = structlog.get_logger(__name__)

FONTS: dict[str, Font] = {}
_lock = threading.Lock()


def register_font(font: Font) -> None:
    """Make a font available by its id (case-insensitive)."""
    with _lock:
        FONTS[font.font_id.lower()] = font
    logger.debug("Font registered", font=font.font_id, glyphs=len(font.glyphs))


def unregister_font(font_id: str) -> None:
    """Remove a font from the registry if present."""
    with _lock:
        FONTS.pop(font_id.lower(), None)


def get_font(font_id: str) -> Font:
    """Look up a registered font.

    Args:
        font_id: Font id (case-insensitive)

    Returns:
        The registered Font

    Raises:
        FontNotFoundError: If no font with that id is registered
    """
    font = FONTS.get(font_id.lower())
    if font is None:
        raise FontNotFoundError(font_id, available_fonts())
    return font


def available_fonts() -> list[str]:
    """Ids of all registered fonts, sorted."""
    return sorted(FONTS)


def load_fonts_dir(directory: Path) -> list[str]:
    """Register every compiled ``*.json`` font in a directory.

    Args:
        directory: Directory to scan (not recursive)

    Returns:
        Ids of the fonts registered, in file name order
    """
    from gerberkit.io import load_font

    loaded: list[str] = []
    for path in sorted(directory.glob("*.json")):
        font = load_font(path)
        register_font(font)
        loaded.append(font.font_id)
    logger.info("Fonts loaded", directory=str(directory), fonts=loaded)
    return loaded
