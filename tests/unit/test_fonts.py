"""Unit tests for the font registry."""

from pathlib import Path

import pytest

from gerberkit.core import (
    available_fonts,
    get_font,
    load_fonts_dir,
    register_font,
    unregister_font,
)
from gerberkit.domain import Font
from gerberkit.exceptions import FontNotFoundError
from gerberkit.io import FontWriter


class TestRegistry:
    """Tests for registering and looking up fonts."""

    def test_register_and_get(self, test_font: Font) -> None:
        """Test lookup by id in any case."""
        register_font(test_font)
        try:
            assert get_font("testsans") is test_font
            assert get_font("TESTSANS") is test_font
            assert "testsans" in available_fonts()
        finally:
            unregister_font("testsans")
        assert "testsans" not in available_fonts()

    def test_not_found_lists_available(self, registered_font: Font) -> None:
        """Test the error names the registered fonts."""
        with pytest.raises(FontNotFoundError, match="testsans") as exc_info:
            get_font("missing")
        assert exc_info.value.font_id == "missing"
        assert "testsans" in exc_info.value.available

    def test_unregister_unknown_is_noop(self) -> None:
        """Test removing a font that was never registered."""
        unregister_font("never-registered")

    def test_load_fonts_dir(self, tmp_path: Path, test_font: Font) -> None:
        """Test registering every compiled font of a directory."""
        FontWriter(test_font, tmp_path).save()
        (tmp_path / "notes.txt").write_text("ignored")
        try:
            assert load_fonts_dir(tmp_path) == ["testsans"]
            assert get_font("testsans") == test_font
        finally:
            unregister_font("testsans")
