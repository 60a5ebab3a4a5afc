"""Unit tests for the command-line interface."""

import json
import zipfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from gerberkit import __version__
from gerberkit.cli.app import app, parse_align
from gerberkit.core import CENTER, TOP_RIGHT, TextAlign, XAlign, YAlign, unregister_font

runner = CliRunner()


@pytest.fixture(autouse=True)
def _cleanup_registry():
    yield
    unregister_font("testserif")
    unregister_font("testsans")


class TestParseAlign:
    """Tests for alignment option parsing."""

    def test_presets(self) -> None:
        """Test named alignments."""
        assert parse_align("center") == CENTER
        assert parse_align("top-right") == TOP_RIGHT
        assert parse_align("Bottom-Center") == TextAlign(XAlign.CENTER, YAlign.BOTTOM)
        assert parse_align("center-left") == TextAlign(XAlign.LEFT, YAlign.CENTER)

    @pytest.mark.parametrize("value", ["middle", "left-bottom", "top", "top-right-ish"])
    def test_invalid(self, value: str) -> None:
        """Test rejected alignments."""
        with pytest.raises(ValueError):
            parse_align(value)


class TestVersion:
    """Tests for --version."""

    def test_version(self) -> None:
        """Test the version is printed."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestCompileFont:
    """Tests for the compile-font command."""

    def test_compile_svg(self, svg_font_path: Path, tmp_path: Path) -> None:
        """Test polarity is filled in and JSON written."""
        out_dir = tmp_path / "fonts"
        out_dir.mkdir()
        result = runner.invoke(app, ["compile-font", str(svg_font_path), "-o", str(out_dir), "-q"])
        assert result.exit_code == 0, result.output

        data = json.loads((out_dir / "testserif.json").read_text(encoding="utf-8"))
        assert data["glyphs"]["O"]["polarity"] == "dc"
        assert data["glyphs"]["I"]["polarity"] == "d"

    def test_compile_ttf(self, ttf_path: Path, tmp_path: Path) -> None:
        """Test compiling a TrueType font with progress output."""
        result = runner.invoke(
            app, ["compile-font", str(ttf_path), "-o", str(tmp_path), "--canvas-size", "256"]
        )
        assert result.exit_code == 0, result.output
        assert (tmp_path / "testsans.json").exists()

    def test_missing_input(self, tmp_path: Path) -> None:
        """Test a missing font file."""
        result = runner.invoke(app, ["compile-font", str(tmp_path / "nope.svg")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_unsupported_input(self, tmp_path: Path) -> None:
        """Test an unsupported font file type."""
        path = tmp_path / "font.woff"
        path.write_bytes(b"wOFF")
        result = runner.invoke(app, ["compile-font", str(path), "-q"])
        assert result.exit_code == 1


class TestTextCommand:
    """Tests for the text command."""

    def test_top_silkscreen(self, svg_font_path: Path, tmp_path: Path) -> None:
        """Test text written to a top silkscreen file and zip."""
        result = runner.invoke(
            app,
            [
                "text",
                "OI",
                "--font",
                str(svg_font_path),
                "--prefix",
                "label",
                "--output-dir",
                str(tmp_path),
                "-q",
            ],
        )
        assert result.exit_code == 0, result.output

        gerber = (tmp_path / "label.gto").read_text(encoding="utf-8")
        assert gerber.count("%LPC*%") == 1
        with zipfile.ZipFile(tmp_path / "label.zip") as zf:
            assert zf.namelist() == ["label.gto"]

    def test_bottom_silkscreen(self, svg_font_path: Path, tmp_path: Path) -> None:
        """Test --bottom selects the bottom silkscreen layer."""
        result = runner.invoke(
            app,
            [
                "text",
                "I",
                "-f",
                str(svg_font_path),
                "-p",
                "label",
                "-o",
                str(tmp_path),
                "--bottom",
                "--align",
                "center",
            ],
        )
        assert result.exit_code == 0, result.output
        assert (tmp_path / "label.gbo").exists()
        assert not (tmp_path / "label.gto").exists()

    def test_fonts_dir(self, svg_font_path: Path, tmp_path: Path) -> None:
        """Test looking up a compiled font by id."""
        fonts = tmp_path / "fonts"
        fonts.mkdir()
        runner.invoke(app, ["compile-font", str(svg_font_path), "-o", str(fonts), "-q"])
        unregister_font("testserif")

        result = runner.invoke(
            app,
            ["text", "O", "-f", "testserif", "--fonts-dir", str(fonts), "-o", str(tmp_path), "-q"],
        )
        assert result.exit_code == 0, result.output
        assert (tmp_path / "text.gto").exists()

    def test_unknown_font(self, tmp_path: Path) -> None:
        """Test a font id that is not registered."""
        result = runner.invoke(app, ["text", "O", "-f", "nosuchfont", "-o", str(tmp_path)])
        assert result.exit_code == 1
        assert "nosuchfont" in result.output

    def test_bad_align(self, svg_font_path: Path, tmp_path: Path) -> None:
        """Test an invalid alignment value."""
        result = runner.invoke(
            app, ["text", "O", "-f", str(svg_font_path), "-a", "sideways", "-o", str(tmp_path)]
        )
        assert result.exit_code == 1

    def test_missing_output_dir(self, svg_font_path: Path, tmp_path: Path) -> None:
        """Test a write failure is reported."""
        result = runner.invoke(
            app, ["text", "O", "-f", str(svg_font_path), "-o", str(tmp_path / "missing")]
        )
        assert result.exit_code == 1
        assert "Could not write" in result.output
